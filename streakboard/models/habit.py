from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from streakboard.frequencies import FREQUENCY_DAILY
from streakboard.models.base import Base

if TYPE_CHECKING:
    from streakboard.models.category import Category
    from streakboard.models.habit_completion import HabitCompletion


class Habit(Base):
    __tablename__ = "habits"
    __table_args__ = (
        CheckConstraint("frequency IN ('daily', 'weekly')", name="ck_habits_frequency"),
        UniqueConstraint("id", "user_id", name="uq_habits_id_owner"),
        Index(
            "uq_habits_owner_active_name",
            "user_id",
            "name",
            unique=True,
            sqlite_where=text("is_active"),
            postgresql_where=text("is_active"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(100))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    frequency: Mapped[str] = mapped_column(String(16), default=FREQUENCY_DAILY)
    category_id: Mapped[Optional[int]] = mapped_column(ForeignKey("categories.id"), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    category: Mapped[Optional["Category"]] = relationship(lazy="joined")
    completions: Mapped[list["HabitCompletion"]] = relationship(
        back_populates="habit",
        primaryjoin="Habit.id == foreign(HabitCompletion.habit_id)",
        order_by="HabitCompletion.completion_date.desc()",
        passive_deletes=True,
    )
