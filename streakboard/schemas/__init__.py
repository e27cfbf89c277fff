from streakboard.schemas.category import CategoryOut
from streakboard.schemas.completion import CompletionIn, CompletionOut
from streakboard.schemas.dashboard import DashboardOut, HabitProgressOut
from streakboard.schemas.habit import HabitIn, HabitOut
from streakboard.schemas.user import UserOut, UserProvisionIn

__all__ = [
    "UserProvisionIn",
    "UserOut",
    "CategoryOut",
    "HabitIn",
    "HabitOut",
    "CompletionIn",
    "CompletionOut",
    "HabitProgressOut",
    "DashboardOut",
]
