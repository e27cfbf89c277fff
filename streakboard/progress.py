"""Derived habit progress: period completion, streaks and completion rate.

Everything here is a pure function of a habit snapshot, its completion dates and a
single ``Clock`` captured once per request. Nothing is persisted.

Weeks start on Monday and end on Sunday (ISO weeks).
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Protocol
from zoneinfo import ZoneInfo

from streakboard.frequencies import FREQUENCY_WEEKLY

ONE_DAY = timedelta(days=1)
ONE_WEEK = timedelta(days=7)
SECONDS_PER_DAY = 86400


class HabitLike(Protocol):
    frequency: str
    created_at: datetime


@dataclass(frozen=True)
class Clock:
    now: datetime  # naive UTC, comparable with stored created_at
    today: date  # caller's local calendar date


@dataclass(frozen=True)
class HabitProgress:
    completed_for_period: bool
    streak: int
    completion_rate: int
    completion_count: int


def capture_clock(tz_name: str = "UTC") -> Clock:
    instant = datetime.now(timezone.utc)
    return Clock(now=instant.replace(tzinfo=None), today=instant.astimezone(ZoneInfo(tz_name)).date())


def week_bounds(day: date) -> tuple[date, date]:
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def is_completed_for_period(frequency: str, completion_dates: Iterable[date], today: date) -> bool:
    if frequency == FREQUENCY_WEEKLY:
        start, end = week_bounds(today)
        return any(start <= d <= end for d in completion_dates)
    return any(d == today for d in completion_dates)


def _run_length(done: set[date], anchor: date, step: timedelta) -> int:
    # An unfinished current period does not break the run; start one step back instead.
    cursor = anchor if anchor in done else anchor - step
    streak = 0
    while cursor in done:
        streak += 1
        cursor -= step
    return streak


def daily_streak(completion_dates: Iterable[date], today: date) -> int:
    return _run_length(set(completion_dates), today, ONE_DAY)


def weekly_streak(completion_dates: Iterable[date], today: date) -> int:
    weeks = {week_bounds(d)[0] for d in completion_dates if d <= today}
    return _run_length(weeks, week_bounds(today)[0], ONE_WEEK)


def current_streak(frequency: str, completion_dates: Iterable[date], today: date) -> int:
    if frequency == FREQUENCY_WEEKLY:
        return weekly_streak(completion_dates, today)
    return daily_streak(completion_dates, today)


def expected_completions(frequency: str, created_at: datetime, now: datetime) -> int:
    elapsed_days = math.ceil((now - created_at).total_seconds() / SECONDS_PER_DAY)
    if frequency == FREQUENCY_WEEKLY:
        return math.ceil(elapsed_days / 7)
    return elapsed_days


def completion_rate(frequency: str, completion_count: int, created_at: datetime, now: datetime) -> int:
    if completion_count <= 0:
        return 0
    expected = max(expected_completions(frequency, created_at, now), 1)
    # Half-up: 12.5 -> 13.
    return min(100, math.floor(100 * completion_count / expected + 0.5))


def evaluate_habit(habit: HabitLike, completion_dates: Iterable[date], clock: Clock) -> HabitProgress:
    dates = list(completion_dates)
    return HabitProgress(
        completed_for_period=is_completed_for_period(habit.frequency, dates, clock.today),
        streak=current_streak(habit.frequency, dates, clock.today),
        completion_rate=completion_rate(habit.frequency, len(dates), habit.created_at, clock.now),
        completion_count=len(dates),
    )
