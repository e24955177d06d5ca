"""
Identity store — lookups and writes against the ``users`` table.

SQLAlchemy errors never leave this module raw: a unique-constraint hit on
``email`` becomes ``EmailTaken`` and anything else is logged and raised as
``StorageFailure``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import EmailTaken, StorageFailure
from database.models import User

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_email(self, email: str) -> Optional[User]:
        try:
            result = await self._session.execute(
                select(User).where(User.email == email)
            )
        except SQLAlchemyError:
            logger.exception("User lookup by email failed")
            raise StorageFailure()
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: int) -> Optional[User]:
        try:
            return await self._session.get(User, user_id)
        except SQLAlchemyError:
            logger.exception("User lookup failed for id %s", user_id)
            raise StorageFailure()

    async def insert(self, values: Dict[str, Any]) -> User:
        """Insert a user row and return it with ``id`` / ``date_created`` set."""
        user = User(**values)
        self._session.add(user)
        try:
            await self._session.flush()
            await self._session.refresh(user)
        except IntegrityError:
            await self._session.rollback()
            raise EmailTaken()
        except SQLAlchemyError:
            await self._session.rollback()
            logger.exception("User insert failed")
            raise StorageFailure()
        return user

    async def update(self, user_id: int, values: Dict[str, Any]) -> None:
        if not values:
            return
        try:
            await self._session.execute(
                update(User).where(User.id == user_id).values(**values)
            )
            await self._session.flush()
        except IntegrityError:
            await self._session.rollback()
            raise EmailTaken()
        except SQLAlchemyError:
            await self._session.rollback()
            logger.exception("User update failed for id %s", user_id)
            raise StorageFailure()
