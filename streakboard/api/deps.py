from typing import Iterator, Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from streakboard.config import settings
from streakboard.crud import get_user_or_401
from streakboard.db import SessionLocal
from streakboard.models import User
from streakboard.progress import Clock, capture_clock


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_clock() -> Clock:
    return capture_clock(settings.APP_TIMEZONE)


def get_current_user(
    x_user_id: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
) -> User:
    return get_user_or_401(db, x_user_id)
