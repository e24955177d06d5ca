"""
Message store — thin reads and writes against the ``messages`` table.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import StorageFailure
from database.models import Message

logger = logging.getLogger(__name__)


class MessageRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> List[Message]:
        try:
            result = await self._session.execute(
                select(Message).order_by(Message.date_created.asc())
            )
        except SQLAlchemyError:
            logger.exception("Message listing failed")
            raise StorageFailure()
        return list(result.scalars().all())

    async def find_by_id(self, message_id: int) -> Optional[Message]:
        try:
            return await self._session.get(Message, message_id)
        except SQLAlchemyError:
            logger.exception("Message lookup failed for id %s", message_id)
            raise StorageFailure()

    async def insert(self, values: Dict[str, Any]) -> Message:
        message = Message(**values)
        self._session.add(message)
        try:
            await self._session.flush()
            await self._session.refresh(message)
        except SQLAlchemyError:
            await self._session.rollback()
            logger.exception("Message insert failed")
            raise StorageFailure()
        return message
