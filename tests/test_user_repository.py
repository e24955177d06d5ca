"""
Tests for ``UserRepository`` error mapping, with the AsyncSession mocked out.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from auth.errors import EmailTaken, StorageFailure
from database.messages import MessageRepository
from database.users import UserRepository


def _session() -> MagicMock:
    session = MagicMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.rollback = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    return session


VALUES = {"email": "a@x.com", "full_name": "A", "password": "$2b$04$digest"}


class TestInsert:
    @pytest.mark.asyncio
    async def test_returns_row(self):
        session = _session()
        user = await UserRepository(session).insert(VALUES)
        session.add.assert_called_once_with(user)
        assert user.email == "a@x.com"
        session.rollback.assert_not_called()

    @pytest.mark.asyncio
    async def test_unique_violation_is_email_taken(self):
        session = _session()
        session.flush.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))
        with pytest.raises(EmailTaken):
            await UserRepository(session).insert(VALUES)
        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_other_errors_are_opaque(self):
        session = _session()
        session.flush.side_effect = OperationalError("INSERT", {}, Exception("connection reset"))
        with pytest.raises(StorageFailure) as excinfo:
            await UserRepository(session).insert(VALUES)
        assert excinfo.value.message == "server error"
        assert "connection reset" not in str(excinfo.value)


class TestUpdate:
    @pytest.mark.asyncio
    async def test_empty_update_skips_database(self):
        session = _session()
        await UserRepository(session).update(1, {})
        session.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_unique_violation_is_email_taken(self):
        session = _session()
        session.execute.side_effect = IntegrityError("UPDATE", {}, Exception("duplicate key"))
        with pytest.raises(EmailTaken):
            await UserRepository(session).update(1, {"email": "b@x.com"})


class TestLookups:
    @pytest.mark.asyncio
    async def test_find_by_id(self):
        session = _session()
        session.get.return_value = "row"
        assert await UserRepository(session).find_by_id(3) == "row"

    @pytest.mark.asyncio
    async def test_find_by_email_failure(self):
        session = _session()
        session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with pytest.raises(StorageFailure):
            await UserRepository(session).find_by_email("a@x.com")

    @pytest.mark.asyncio
    async def test_message_lookup_failure(self):
        session = _session()
        session.get.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with pytest.raises(StorageFailure):
            await MessageRepository(session).find_by_id(1)


def test_storage_failure_maps_to_generic_500(client, user_store, monkeypatch):
    async def boom(email):
        raise StorageFailure()

    monkeypatch.setattr(user_store, "find_by_email", boom)
    res = client.post(
        "/api/users", json={"email": "a@x.com", "password": "11AAaa!!", "full_name": "A"}
    )
    assert res.status_code == 500
    assert res.json() == {"error": "server error"}
