from datetime import timedelta

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from streakboard.crud import (
    archive_habit,
    complete_habit,
    create_habit,
    list_completions,
    record_completion,
    remove_habit_cascade,
)
from streakboard.crud import completions as ledger
from streakboard.errors import DuplicateCompletion, NotFound, ValidationError
from streakboard.models import Habit, HabitCompletion
from tests.conftest import TODAY


def _count_completions(db, habit_id: int) -> int:
    return db.scalar(select(func.count()).select_from(HabitCompletion).where(HabitCompletion.habit_id == habit_id))


@pytest.fixture
def habit(db, alice, category_id):
    return create_habit(db, alice.id, "Read", None, "daily", category_id)


@pytest.fixture
def weekly_habit(db, alice, category_id):
    return create_habit(db, alice.id, "Long run", None, "weekly", category_id)


def test_record_completion_twice_fails_second_time(db, alice, habit):
    first = record_completion(db, habit.id, alice.id, TODAY, notes="  felt good  ")
    assert first.id is not None
    assert first.notes == "felt good"
    assert first.user_id == alice.id

    with pytest.raises(DuplicateCompletion) as exc_info:
        record_completion(db, habit.id, alice.id, TODAY)

    assert exc_info.value.completion_date == TODAY
    assert _count_completions(db, habit.id) == 1


def test_record_completion_on_different_dates(db, alice, habit):
    record_completion(db, habit.id, alice.id, TODAY)
    record_completion(db, habit.id, alice.id, TODAY - timedelta(days=1))
    history = list_completions(db, habit.id, alice.id)
    assert [c.completion_date for c in history] == [TODAY, TODAY - timedelta(days=1)]


def test_record_completion_for_someone_elses_habit(db, bob, habit):
    with pytest.raises(NotFound):
        record_completion(db, habit.id, bob.id, TODAY)
    assert _count_completions(db, habit.id) == 0


def test_record_completion_for_missing_habit(db, alice):
    with pytest.raises(NotFound):
        record_completion(db, 9999, alice.id, TODAY)


def test_record_completion_rejects_long_notes(db, alice, habit):
    with pytest.raises(ValidationError):
        record_completion(db, habit.id, alice.id, TODAY, notes="x" * 501)


def test_storage_rejects_cross_owner_completion(db, bob, habit):
    db.add(HabitCompletion(habit_id=habit.id, user_id=bob.id, completion_date=TODAY))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()
    assert _count_completions(db, habit.id) == 0


def test_storage_rejects_duplicate_date(db, alice, habit):
    db.add(HabitCompletion(habit_id=habit.id, user_id=alice.id, completion_date=TODAY))
    db.commit()
    db.add(HabitCompletion(habit_id=habit.id, user_id=alice.id, completion_date=TODAY))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_complete_habit_daily(db, alice, habit, clock):
    completion = complete_habit(db, habit.id, alice.id, clock)
    assert completion.completion_date == TODAY

    with pytest.raises(DuplicateCompletion) as exc_info:
        complete_habit(db, habit.id, alice.id, clock)
    assert exc_info.value.detail == "You've already completed this habit today"


def test_complete_weekly_habit_once_per_week(db, alice, weekly_habit, clock):
    monday = TODAY - timedelta(days=TODAY.weekday())
    record_completion(db, weekly_habit.id, alice.id, monday)

    with pytest.raises(DuplicateCompletion) as exc_info:
        complete_habit(db, weekly_habit.id, alice.id, clock)
    assert exc_info.value.detail == "You've already completed this habit this week"
    assert _count_completions(db, weekly_habit.id) == 1


def test_complete_weekly_habit_after_last_week(db, alice, weekly_habit, clock):
    record_completion(db, weekly_habit.id, alice.id, TODAY - timedelta(days=7))
    completion = complete_habit(db, weekly_habit.id, alice.id, clock)
    assert completion.completion_date == TODAY


def test_remove_habit_cascades_to_completions(db, alice, habit):
    for offset in range(3):
        record_completion(db, habit.id, alice.id, TODAY - timedelta(days=offset))
    habit_id = habit.id

    remove_habit_cascade(db, habit_id, alice.id)

    assert db.scalar(select(Habit).where(Habit.id == habit_id)) is None
    assert _count_completions(db, habit_id) == 0


def test_remove_habit_requires_owner(db, alice, bob, habit):
    record_completion(db, habit.id, alice.id, TODAY)
    with pytest.raises(NotFound):
        remove_habit_cascade(db, habit.id, bob.id)
    assert _count_completions(db, habit.id) == 1


def test_archived_habit_rejects_completions(db, alice, habit, clock):
    archive_habit(db, habit.id, alice.id)
    with pytest.raises(NotFound):
        complete_habit(db, habit.id, alice.id, clock)
    with pytest.raises(NotFound):
        record_completion(db, habit.id, alice.id, TODAY)
    assert _count_completions(db, habit.id) == 0


def test_habit_deleted_before_insert_is_not_a_duplicate(db, alice, habit, monkeypatch):
    stale = Habit(id=habit.id, user_id=alice.id, name=habit.name, frequency="daily", is_active=True)
    remove_habit_cascade(db, habit.id, alice.id)
    monkeypatch.setattr(ledger, "_get_active_habit", lambda db, habit_id, user_id: stale)

    with pytest.raises(NotFound):
        record_completion(db, stale.id, alice.id, TODAY)
