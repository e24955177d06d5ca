"""
FastAPI dependencies for authentication.

Provides ``db_session``, the store dependencies and ``require_user``, the
single place where a request's identity is established.  Protected routes
declare ``current_user: CurrentUser = Depends(require_user)`` and receive the
resolved identity as an argument; nothing is attached to the request object.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AsyncGenerator, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import Unauthorized
from auth.tokens import verify_token
from database.messages import MessageRepository
from database.session import get_db_session
from database.users import UserRepository

logger = logging.getLogger(__name__)

# auto_error=False so a missing header surfaces as our own Unauthorized
_bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """Identity resolved for the current request."""

    id: int
    email: str
    full_name: str


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


async def get_user_repository(
    session: AsyncSession = Depends(db_session),
) -> UserRepository:
    return UserRepository(session)


async def get_message_repository(
    session: AsyncSession = Depends(db_session),
) -> MessageRepository:
    return MessageRepository(session)


async def require_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    users: UserRepository = Depends(get_user_repository),
) -> CurrentUser:
    """
    Extract and verify the Bearer token, then load the user it names.

    A valid signature is not enough: the user must still exist and must
    not be deactivated.  Every failure raises the same ``Unauthorized``.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized()

    claim = verify_token(credentials.credentials)

    try:
        user_id = int(claim.subject_id)
    except ValueError:
        raise Unauthorized() from None

    user = await users.find_by_id(user_id)
    if user is None or user.deactivated:
        logger.debug("Token for unusable identity %s rejected", user_id)
        raise Unauthorized()

    return CurrentUser(id=user.id, email=user.email, full_name=user.full_name)
