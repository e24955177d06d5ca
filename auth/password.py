"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.  The ``*_async`` variants push the
CPU-bound work onto a worker thread so request handlers never block the
event loop.
"""

from __future__ import annotations

import asyncio

import bcrypt

from config.settings import config

_BCRYPT_ROUNDS = config.bcrypt_rounds


def hash_password(password: str) -> str:
    """Hash a password with bcrypt (fresh random salt on every call)."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=_BCRYPT_ROUNDS)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash.

    A malformed or unparseable stored hash verifies as ``False``.
    """
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError, AttributeError):
        return False


async def hash_password_async(password: str) -> str:
    return await asyncio.to_thread(hash_password, password)


async def verify_password_async(password: str, password_hash: str) -> bool:
    return await asyncio.to_thread(verify_password, password, password_hash)
