from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from streakboard.api.deps import get_clock, get_current_user, get_db
from streakboard.crud import (
    archive_habit,
    complete_habit,
    create_habit,
    get_owned_habit,
    list_active_habits,
    list_completions,
    remove_habit_cascade,
    update_habit,
)
from streakboard.models import User
from streakboard.progress import Clock
from streakboard.schemas import CompletionIn, CompletionOut, HabitIn, HabitOut

router = APIRouter(prefix="/v1/habits", tags=["habits"])


@router.get("", response_model=list[HabitOut])
def habits_list(user: User = Depends(get_current_user), db: Session = Depends(get_db)) -> list[HabitOut]:
    return [HabitOut.model_validate(h) for h in list_active_habits(db, user.id)]


@router.post("", response_model=HabitOut, status_code=201)
def habits_create(payload: HabitIn, user: User = Depends(get_current_user), db: Session = Depends(get_db)) -> HabitOut:
    habit = create_habit(db, user.id, payload.name, payload.description, payload.frequency, payload.category_id)
    return HabitOut.model_validate(habit)


@router.get("/{habit_id}", response_model=HabitOut)
def habits_get(habit_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)) -> HabitOut:
    return HabitOut.model_validate(get_owned_habit(db, habit_id, user.id))


@router.put("/{habit_id}", response_model=HabitOut)
def habits_update(
    habit_id: int,
    payload: HabitIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> HabitOut:
    habit = update_habit(db, habit_id, user.id, payload.name, payload.description, payload.frequency, payload.category_id)
    return HabitOut.model_validate(habit)


@router.post("/{habit_id}/archive", response_model=HabitOut)
def habits_archive(habit_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)) -> HabitOut:
    return HabitOut.model_validate(archive_habit(db, habit_id, user.id))


@router.delete("/{habit_id}", status_code=204)
def habits_delete(habit_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)) -> Response:
    remove_habit_cascade(db, habit_id, user.id)
    return Response(status_code=204)


@router.post("/{habit_id}/complete", response_model=CompletionOut, status_code=201)
def habits_complete(
    habit_id: int,
    payload: Optional[CompletionIn] = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> CompletionOut:
    notes = payload.notes if payload else None
    completion = complete_habit(db, habit_id, user.id, clock, notes)
    return CompletionOut.model_validate(completion)


@router.get("/{habit_id}/completions", response_model=list[CompletionOut])
def habits_completions(
    habit_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[CompletionOut]:
    return [CompletionOut.model_validate(c) for c in list_completions(db, habit_id, user.id)]
