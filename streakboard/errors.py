from datetime import date
from typing import Optional


class StreakboardError(Exception):
    status_code = 400

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ValidationError(StreakboardError):
    status_code = 400


class Unauthorized(StreakboardError):
    status_code = 401


class NotFound(StreakboardError):
    status_code = 404


class DuplicateCompletion(StreakboardError):
    """A completion already exists for the habit in this date or week."""

    status_code = 409

    def __init__(self, habit_id: int, completion_date: date, period: Optional[str] = None) -> None:
        if period == "daily":
            detail = "You've already completed this habit today"
        elif period == "weekly":
            detail = "You've already completed this habit this week"
        else:
            detail = f"Habit already completed on {completion_date.isoformat()}"
        super().__init__(detail)
        self.habit_id = habit_id
        self.completion_date = completion_date
        self.period = period
