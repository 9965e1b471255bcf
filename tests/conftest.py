"""
Pytest fixtures: in-memory SQLite database and an in-memory session store,
wired into a fresh app per test.
"""
import os
import secrets
from decimal import Decimal

# cheap hashing for tests; must be set before marketplace settings load
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from marketplace.data.database import Database
from marketplace.domain.enums import UserRole
from marketplace.domain.schemas import ItemCreate
from marketplace.main import create_app
from marketplace.services.item_service import ItemService
from marketplace.services.user_service import UserService


class InMemorySessionService:
    """Same interface as SessionService, backed by a dict."""

    def __init__(self):
        self.store = {}

    def create(self, data: dict) -> str:
        session_id = secrets.token_urlsafe(16)
        self.store[session_id] = dict(data)
        return session_id

    def get(self, session_id: str):
        return self.store.get(session_id)

    def update(self, session_id: str, data: dict) -> bool:
        if session_id not in self.store:
            return False
        self.store[session_id] = dict(data)
        return True

    def destroy(self, session_id: str) -> bool:
        return self.store.pop(session_id, None) is not None

    def ping(self) -> bool:
        return True


@pytest.fixture
def database():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db = Database(engine=engine)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def db_session(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def sessions():
    return InMemorySessionService()


@pytest.fixture
def app(database, sessions):
    return create_app(database=database, session_service=sessions)


@pytest.fixture
def make_client(app):
    """Each client keeps its own cookie jar, i.e. acts as its own user."""

    def _make() -> TestClient:
        return TestClient(app)

    return _make


@pytest.fixture
def client(make_client):
    return make_client()


# ---------------------------------------------------------------------------
# service-level helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def make_user(db_session):
    def _make(username: str, role: UserRole = UserRole.BUYER, password: str = "secret"):
        return UserService(db_session).register(
            username, password, f"{username}@campus.edu", role
        )

    return _make


@pytest.fixture
def make_item(db_session):
    def _make(seller, title: str = "Desk Lamp", price: str = "15.00", category: str = "Furniture", **fields):
        payload = ItemCreate(title=title, price=Decimal(price), category=category, **fields)
        return ItemService(db_session).create_item(seller.id, payload)

    return _make
