"""
JWT creation and verification (PyJWT).

Tokens are standard HS256 JWTs carrying the identity claim
(``sub`` = user id, ``full_name``) plus ``iat`` / ``exp``.
Secret key is loaded from ``config.jwt_secret`` (env var: ``JWT_SECRET``).
Nothing is stored server-side; a token is valid exactly when its signature
checks out and ``exp`` is in the future.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from auth.errors import Unauthorized
from config.settings import config

logger = logging.getLogger(__name__)

_TOKEN_SECRET = config.jwt_secret
_TOKEN_ALGORITHM = config.jwt_algorithm
_TOKEN_EXPIRY_SECONDS = config.jwt_expiry_seconds


@dataclass(frozen=True)
class IdentityClaim:
    subject_id: str
    full_name: str


def create_token(claim: IdentityClaim, issued_at: Optional[datetime] = None) -> str:
    """Create a signed token for *claim*, expiring after the configured TTL."""
    now = issued_at or datetime.now(timezone.utc)
    payload = {
        "sub": str(claim.subject_id),
        "full_name": claim.full_name,
        "iat": now,
        "exp": now + timedelta(seconds=_TOKEN_EXPIRY_SECONDS),
    }
    return jwt.encode(payload, _TOKEN_SECRET, algorithm=_TOKEN_ALGORITHM)


def verify_token(token: str) -> IdentityClaim:
    """
    Verify token and return its ``IdentityClaim``.

    Raises ``Unauthorized`` for every failure (malformed, bad signature,
    expired, missing claims) without saying which.
    """
    try:
        payload = jwt.decode(
            token,
            _TOKEN_SECRET,
            algorithms=[_TOKEN_ALGORITHM],
            options={"require": ["sub", "iat", "exp"]},
        )
    except jwt.PyJWTError as exc:
        logger.debug("Token rejected: %s", type(exc).__name__)
        raise Unauthorized() from None

    full_name = payload.get("full_name")
    if not isinstance(full_name, str):
        logger.debug("Token rejected: missing full_name claim")
        raise Unauthorized()
    return IdentityClaim(subject_id=payload["sub"], full_name=full_name)
