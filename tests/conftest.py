"""
Shared fixtures: in-memory stores standing in for the SQL repositories,
seeded users, and a TestClient wired to them.
"""

import os

# Must be set before any application module reads the settings.
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret-with-plenty-of-entropy-0123456789")

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from auth.dependencies import get_message_repository, get_user_repository
from auth.errors import EmailTaken
from auth.password import hash_password
from auth.tokens import IdentityClaim, create_token


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class FakeUser:
    id: int
    email: str
    full_name: str
    password: str
    deactivated: bool = False
    date_created: datetime = field(default_factory=_now)


@dataclass
class FakeMessage:
    id: int
    user_id: int
    content: str
    conversation_id: Optional[int] = None
    msg_read: bool = False
    date_created: datetime = field(default_factory=_now)


class InMemoryUserStore:
    """Same interface as ``database.users.UserRepository``."""

    def __init__(self) -> None:
        self.rows: Dict[int, FakeUser] = {}
        self.inserts: List[Dict[str, Any]] = []
        self._next_id = 1

    async def find_by_email(self, email: str) -> Optional[FakeUser]:
        for row in self.rows.values():
            if row.email == email:
                return row
        return None

    async def find_by_id(self, user_id: int) -> Optional[FakeUser]:
        return self.rows.get(user_id)

    async def insert(self, values: Dict[str, Any]) -> FakeUser:
        # unique index on email
        if any(row.email == values["email"] for row in self.rows.values()):
            raise EmailTaken()
        self.inserts.append(dict(values))
        user = FakeUser(id=self._next_id, **values)
        self.rows[user.id] = user
        self._next_id += 1
        return user

    async def update(self, user_id: int, values: Dict[str, Any]) -> None:
        if "email" in values and any(
            row.email == values["email"] and row.id != user_id
            for row in self.rows.values()
        ):
            raise EmailTaken()
        row = self.rows[user_id]
        for key, value in values.items():
            setattr(row, key, value)

    def seed(self, email: str, full_name: str, password: str, deactivated: bool = False) -> FakeUser:
        user = FakeUser(
            id=self._next_id,
            email=email,
            full_name=full_name,
            password=hash_password(password),
            deactivated=deactivated,
        )
        self.rows[user.id] = user
        self._next_id += 1
        return user


class InMemoryMessageStore:
    """Same interface as ``database.messages.MessageRepository``."""

    def __init__(self) -> None:
        self.rows: Dict[int, FakeMessage] = {}
        self._next_id = 1

    async def list_all(self) -> List[FakeMessage]:
        return list(self.rows.values())

    async def find_by_id(self, message_id: int) -> Optional[FakeMessage]:
        return self.rows.get(message_id)

    async def insert(self, values: Dict[str, Any]) -> FakeMessage:
        message = FakeMessage(id=self._next_id, **values)
        self.rows[message.id] = message
        self._next_id += 1
        return message


TEST_PASSWORD = "Password123!"


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def message_store() -> InMemoryMessageStore:
    return InMemoryMessageStore()


@pytest.fixture
def test_user(user_store) -> FakeUser:
    return user_store.seed("test-user-1@example.com", "Test User One", TEST_PASSWORD)


@pytest.fixture
def other_user(user_store) -> FakeUser:
    return user_store.seed("test-user-2@example.com", "Test User Two", TEST_PASSWORD)


def make_auth_header(user, issued_at: Optional[datetime] = None) -> Dict[str, str]:
    token = create_token(
        IdentityClaim(subject_id=str(user.id), full_name=user.full_name),
        issued_at=issued_at,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(user_store, message_store):
    from main import app

    app.dependency_overrides[get_user_repository] = lambda: user_store
    app.dependency_overrides[get_message_repository] = lambda: message_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_header_for():
    return make_auth_header
