from datetime import date

from pydantic import BaseModel

from streakboard.schemas.completion import CompletionOut
from streakboard.schemas.habit import HabitOut


class HabitProgressOut(HabitOut):
    completed_for_period: bool
    streak: int
    completion_rate: int
    completion_count: int
    completions: list[CompletionOut]


class DashboardOut(BaseModel):
    today: date
    habits_count: int
    completed_count: int
    habits: list[HabitProgressOut]
