from fastapi import APIRouter

from streakboard.api.dashboard import router as dashboard_router
from streakboard.api.habits import router as habits_router
from streakboard.api.routes import router as app_router

router = APIRouter()
router.include_router(app_router)
router.include_router(habits_router)
router.include_router(dashboard_router)

__all__ = ["router"]
