import logging
from datetime import date
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from streakboard.crud.habits import get_owned_habit
from streakboard.errors import DuplicateCompletion, NotFound, ValidationError
from streakboard.models import FREQUENCY_WEEKLY, Habit, HabitCompletion
from streakboard.progress import Clock, is_completed_for_period

logger = logging.getLogger(__name__)

NOTES_MAX_LENGTH = 500


def _get_active_habit(db: Session, habit_id: int, user_id: int) -> Habit:
    habit = get_owned_habit(db, habit_id, user_id)
    if not habit.is_active:
        raise NotFound("Habit not found")
    return habit


def record_completion(
    db: Session,
    habit_id: int,
    user_id: int,
    completion_date: date,
    notes: Optional[str] = None,
) -> HabitCompletion:
    """Insert one completion for ``(habit_id, completion_date)``.

    Uniqueness is left to the ``uq_habit_completion_per_day`` constraint so that of two
    concurrent callers exactly one insert succeeds; the loser gets DuplicateCompletion.
    Archived habits do not accept completions.
    """
    habit = _get_active_habit(db, habit_id, user_id)
    owner_id = habit.user_id
    notes = (notes or "").strip() or None
    if notes and len(notes) > NOTES_MAX_LENGTH:
        raise ValidationError("Notes too long")

    completion = HabitCompletion(
        habit_id=habit.id,
        user_id=habit.user_id,
        completion_date=completion_date,
        notes=notes,
    )
    db.add(completion)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        # The habit may have been deleted since it was looked up.
        if db.scalar(select(Habit.id).where(Habit.id == habit_id, Habit.user_id == owner_id)) is None:
            raise NotFound("Habit not found") from exc
        logger.info("Rejected duplicate completion for habit %s on %s", habit_id, completion_date)
        raise DuplicateCompletion(habit_id, completion_date) from exc

    db.refresh(completion)
    logger.info("Recorded completion %s for habit %s on %s", completion.id, habit_id, completion_date)
    return completion


def complete_habit(
    db: Session,
    habit_id: int,
    user_id: int,
    clock: Clock,
    notes: Optional[str] = None,
) -> HabitCompletion:
    habit = _get_active_habit(db, habit_id, user_id)
    frequency = habit.frequency
    if frequency == FREQUENCY_WEEKLY:
        dates = db.scalars(select(HabitCompletion.completion_date).where(HabitCompletion.habit_id == habit.id)).all()
        if is_completed_for_period(frequency, dates, clock.today):
            raise DuplicateCompletion(habit_id, clock.today, period=frequency)

    try:
        return record_completion(db, habit_id, user_id, clock.today, notes)
    except DuplicateCompletion as exc:
        raise DuplicateCompletion(habit_id, clock.today, period=frequency) from exc


def list_completions(db: Session, habit_id: int, user_id: int) -> list[HabitCompletion]:
    habit = get_owned_habit(db, habit_id, user_id)
    return list(
        db.scalars(
            select(HabitCompletion)
            .where(HabitCompletion.habit_id == habit.id)
            .order_by(HabitCompletion.completion_date.desc())
        )
    )


def remove_habit_cascade(db: Session, habit_id: int, user_id: int) -> None:
    get_owned_habit(db, habit_id, user_id)
    # Completions go with the habit through ON DELETE CASCADE.
    db.execute(delete(Habit).where(Habit.id == habit_id, Habit.user_id == user_id))
    db.commit()
    logger.info("User %s deleted habit %s", user_id, habit_id)
