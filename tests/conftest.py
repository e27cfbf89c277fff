import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_SCHEMA"] = "1"
os.environ["APP_TIMEZONE"] = "UTC"

from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient

from api_main import app
from streakboard.api.deps import get_clock
from streakboard.crud import list_categories, provision_user, seed_categories_if_empty
from streakboard.db import SessionLocal, engine
from streakboard.models import Base
from streakboard.progress import Clock

TODAY = date(2026, 10, 14)  # a Wednesday
NOW = datetime(2026, 10, 14, 12, 0, 0)


@pytest.fixture
def clock() -> Clock:
    return Clock(now=NOW, today=TODAY)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    seed_categories_if_empty(session)
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def category_id(db) -> int:
    return list_categories(db)[0].id


@pytest.fixture
def alice(db):
    return provision_user(db, "alice@example.com")


@pytest.fixture
def bob(db):
    return provision_user(db, "bob@example.com", username="bobby", full_name="Bob B")


@pytest.fixture
def client(db, clock):
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
