from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from streakboard.models import Category

DEFAULT_CATEGORIES = [
    {"name": "Health", "color": "#10B981"},
    {"name": "Fitness", "color": "#F59E0B"},
    {"name": "Learning", "color": "#3B82F6"},
    {"name": "Productivity", "color": "#8B5CF6"},
    {"name": "Mindfulness", "color": "#06B6D4"},
    {"name": "Social", "color": "#EF4444"},
]


def seed_categories_if_empty(db: Session) -> None:
    existing = db.scalar(select(Category.id).limit(1))
    if existing:
        return

    for item in DEFAULT_CATEGORIES:
        db.add(Category(**item))
    db.commit()


def list_categories(db: Session) -> list[Category]:
    return list(db.scalars(select(Category).order_by(Category.name)))


def get_category(db: Session, category_id: int) -> Optional[Category]:
    return db.get(Category, category_id)
