import os

# Settings are read at import time, so configure before importing the app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["RATE_LIMIT_PER_MINUTE"] = "100000"
os.environ["RATE_LIMIT_PER_HOUR"] = "1000000"
os.environ["PLANT_ID_API_KEY"] = "test-plant-id-key"
os.environ["TREFLE_API_KEY"] = "test-trefle-key"
os.environ["LOG_LEVEL"] = "WARNING"

from collections.abc import Callable
from datetime import date
from typing import Any, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.clock import FixedClock, get_clock
from app.core.database import Base, SessionLocal, engine, get_db
from app.core.redis_client import PlantDetailsCache, get_plant_details_cache
from app.core.security import create_token_for_user
from app.main import app
from app.models import Plant, User
from app.services.plant_lookup import get_http_client


class InMemoryPlantDetailsCache(PlantDetailsCache):
    """Dict-backed stand-in for Redis."""

    def __init__(self) -> None:
        super().__init__(client=None)
        self.store: dict[str, Any] = {}

    def get(self, key: str) -> Optional[Any]:
        return self.store.get(self._make_key(key))

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        self.store[self._make_key(key)] = value
        return True


@pytest.fixture
def db_session():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(date(2024, 1, 1))


@pytest.fixture
def details_cache() -> InMemoryPlantDetailsCache:
    return InMemoryPlantDetailsCache()


@pytest.fixture
def client(db_session, clock, details_cache):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_plant_details_cache] = lambda: details_cache
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def mock_http(client) -> Callable[[Callable[[httpx.Request], httpx.Response]], list]:
    """Route outbound plant-API calls to a handler; returns the list of seen requests."""

    def install(handler: Callable[[httpx.Request], httpx.Response]) -> list:
        seen: list[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        async def override_get_http_client():
            async with httpx.AsyncClient(transport=httpx.MockTransport(recording_handler)) as http_client:
                yield http_client

        app.dependency_overrides[get_http_client] = override_get_http_client
        return seen

    return install


@pytest.fixture
def make_user(db_session) -> Callable[..., User]:
    counter = {"n": 0}

    def create(email: Optional[str] = None) -> User:
        counter["n"] += 1
        user = User(
            email=email or f"gardener{counter['n']}@example.com",
            hashed_password="not-a-real-hash",
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return create


@pytest.fixture
def make_plant(db_session) -> Callable[..., Plant]:
    def create(owner: User, name: str = "Monstera Deliciosa", **fields) -> Plant:
        plant = Plant(user_id=owner.id, name=name, **fields)
        db_session.add(plant)
        db_session.commit()
        db_session.refresh(plant)
        return plant

    return create


@pytest.fixture
def user(make_user) -> User:
    return make_user("owner@example.com")


@pytest.fixture
def other_user(make_user) -> User:
    return make_user("stranger@example.com")


@pytest.fixture
def plant(make_plant, user) -> Plant:
    return make_plant(user)


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_token_for_user(user)}"}


@pytest.fixture
def headers(user) -> dict:
    return auth_headers(user)


@pytest.fixture
def other_headers(other_user) -> dict:
    return auth_headers(other_user)


@pytest.fixture
def headers_for() -> Callable[[User], dict]:
    return auth_headers
