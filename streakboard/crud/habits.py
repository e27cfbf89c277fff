import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from streakboard.crud.categories import get_category
from streakboard.errors import NotFound, ValidationError
from streakboard.models import FREQUENCIES, Habit

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
DUPLICATE_NAME_DETAIL = "You already have a habit with this name"


def _clean_fields(
    db: Session,
    name: Optional[str],
    description: Optional[str],
    frequency: Optional[str],
    category_id: Optional[int],
) -> tuple[str, Optional[str], str, int]:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Habit name is required")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError("Name too long")

    description = (description or "").strip() or None
    if description and len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError("Description too long")

    if frequency not in FREQUENCIES:
        raise ValidationError("Please select a frequency")

    if not category_id or get_category(db, category_id) is None:
        raise ValidationError("Please select a category")

    return name, description, frequency, category_id


def _name_taken(db: Session, user_id: int, name: str, exclude_habit_id: Optional[int] = None) -> bool:
    query = select(Habit.id).where(Habit.user_id == user_id, Habit.name == name, Habit.is_active.is_(True))
    if exclude_habit_id is not None:
        query = query.where(Habit.id != exclude_habit_id)
    return db.scalar(query.limit(1)) is not None


def _commit_habit(db: Session, habit: Habit) -> Habit:
    try:
        db.commit()
    except IntegrityError as exc:
        # Lost a race against a concurrent create with the same name.
        db.rollback()
        raise ValidationError(DUPLICATE_NAME_DETAIL) from exc
    db.refresh(habit)
    return habit


def create_habit(
    db: Session,
    user_id: int,
    name: Optional[str],
    description: Optional[str],
    frequency: Optional[str],
    category_id: Optional[int],
) -> Habit:
    name, description, frequency, category_id = _clean_fields(db, name, description, frequency, category_id)
    if _name_taken(db, user_id, name):
        raise ValidationError(DUPLICATE_NAME_DETAIL)

    habit = Habit(user_id=user_id, name=name, description=description, frequency=frequency, category_id=category_id)
    db.add(habit)
    _commit_habit(db, habit)
    logger.info("User %s created habit %s (%s)", user_id, habit.id, habit.frequency)
    return habit


def get_owned_habit(db: Session, habit_id: int, user_id: int) -> Habit:
    habit = db.scalar(select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id))
    if not habit:
        raise NotFound("Habit not found")
    return habit


def update_habit(
    db: Session,
    habit_id: int,
    user_id: int,
    name: Optional[str],
    description: Optional[str],
    frequency: Optional[str],
    category_id: Optional[int],
) -> Habit:
    habit = get_owned_habit(db, habit_id, user_id)
    name, description, frequency, category_id = _clean_fields(db, name, description, frequency, category_id)
    if habit.is_active and _name_taken(db, user_id, name, exclude_habit_id=habit.id):
        raise ValidationError(DUPLICATE_NAME_DETAIL)

    habit.name = name
    habit.description = description
    habit.frequency = frequency
    habit.category_id = category_id
    db.add(habit)
    return _commit_habit(db, habit)


def archive_habit(db: Session, habit_id: int, user_id: int) -> Habit:
    habit = get_owned_habit(db, habit_id, user_id)
    habit.is_active = False
    db.add(habit)
    db.commit()
    db.refresh(habit)
    logger.info("User %s archived habit %s", user_id, habit_id)
    return habit


def list_active_habits(db: Session, user_id: int) -> list[Habit]:
    return list(
        db.scalars(
            select(Habit)
            .where(Habit.user_id == user_id, Habit.is_active.is_(True))
            .options(selectinload(Habit.completions))
            .order_by(Habit.created_at.desc(), Habit.id.desc())
        )
    )
