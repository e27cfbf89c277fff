from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from streakboard.api.deps import get_clock, get_current_user, get_db
from streakboard.crud import list_active_habits
from streakboard.models import Habit, User
from streakboard.progress import Clock, evaluate_habit
from streakboard.schemas import CompletionOut, DashboardOut, HabitOut

router = APIRouter(tags=["dashboard"])


def _habit_progress(habit: Habit, clock: Clock) -> Dict[str, Any]:
    progress = evaluate_habit(habit, [c.completion_date for c in habit.completions], clock)
    return {
        **HabitOut.model_validate(habit).model_dump(),
        "completed_for_period": progress.completed_for_period,
        "streak": progress.streak,
        "completion_rate": progress.completion_rate,
        "completion_count": progress.completion_count,
        "completions": [CompletionOut.model_validate(c) for c in habit.completions],
    }


@router.get("/v1/app/dashboard", response_model=DashboardOut)
def app_dashboard(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> Dict[str, Any]:
    items = [_habit_progress(h, clock) for h in list_active_habits(db, user.id)]
    return {
        "today": clock.today,
        "habits_count": len(items),
        "completed_count": sum(1 for x in items if x["completed_for_period"]),
        "habits": items,
    }
