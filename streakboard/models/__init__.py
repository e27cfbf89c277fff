from streakboard.frequencies import FREQUENCIES, FREQUENCY_DAILY, FREQUENCY_WEEKLY
from streakboard.models.base import Base
from streakboard.models.category import Category
from streakboard.models.habit import Habit
from streakboard.models.habit_completion import HabitCompletion
from streakboard.models.user import User

__all__ = [
    "Base",
    "User",
    "Category",
    "Habit",
    "HabitCompletion",
    "FREQUENCIES",
    "FREQUENCY_DAILY",
    "FREQUENCY_WEEKLY",
]
