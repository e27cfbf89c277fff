from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from streakboard.schemas.category import CategoryOut


class HabitIn(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    frequency: Optional[str] = None
    category_id: Optional[int] = None


class HabitOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    frequency: str
    category_id: Optional[int] = None
    category: Optional[CategoryOut] = None
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True
