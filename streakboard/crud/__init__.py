from streakboard.crud.categories import get_category, list_categories, seed_categories_if_empty
from streakboard.crud.completions import complete_habit, list_completions, record_completion, remove_habit_cascade
from streakboard.crud.habits import archive_habit, create_habit, get_owned_habit, list_active_habits, update_habit
from streakboard.crud.user import get_user, get_user_or_401, provision_user

__all__ = [
    "provision_user",
    "get_user",
    "get_user_or_401",
    "seed_categories_if_empty",
    "list_categories",
    "get_category",
    "create_habit",
    "update_habit",
    "get_owned_habit",
    "archive_habit",
    "list_active_habits",
    "record_completion",
    "complete_habit",
    "list_completions",
    "remove_habit_cascade",
]
