from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel


class CompletionIn(BaseModel):
    notes: Optional[str] = None


class CompletionOut(BaseModel):
    id: int
    habit_id: int
    completion_date: date
    completed_at: datetime
    notes: Optional[str] = None

    class Config:
        from_attributes = True
