import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from streakboard.errors import Unauthorized, ValidationError
from streakboard.models import User

logger = logging.getLogger(__name__)


def provision_user(db: Session, email: str, username: Optional[str] = None, full_name: Optional[str] = None) -> User:
    email = (email or "").strip().lower()
    if "@" not in email:
        raise ValidationError("A valid email is required")

    username = (username or "").strip() or email.split("@", 1)[0]
    full_name = (full_name or "").strip() or email

    clash = db.scalar(select(User).where(User.username == username, User.email != email))
    if clash:
        raise ValidationError("This username is already taken")

    user = db.scalar(select(User).where(User.email == email))
    if user:
        user.username = username
        user.full_name = full_name
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    user = User(email=email, username=username, full_name=full_name)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Provisioned user %s (%s)", user.id, user.username)
    return user


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def get_user_or_401(db: Session, raw_user_id: Optional[str]) -> User:
    try:
        user_id = int((raw_user_id or "").strip())
    except ValueError:
        raise Unauthorized("Unknown user") from None
    user = get_user(db, user_id) if user_id > 0 else None
    if not user:
        raise Unauthorized("Unknown user")
    return user
