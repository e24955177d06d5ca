"""
User registration and self-update.

Registration order is fixed: required fields → password policy → email
uniqueness → hash → insert.  The existence check and the insert are not
atomic; the unique index on ``users.email`` is the final word and the
store reports a late collision as ``EmailTaken`` as well.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from auth.errors import EmailTaken, MissingField, PolicyViolation
from auth.password import hash_password_async
from database.models import User
from database.users import UserRepository
from utils.schemas import RegisterRequest, UserUpdateRequest
from utils.validators import first_missing_field, validate_password

logger = logging.getLogger(__name__)

REQUIRED_REGISTRATION_FIELDS = ("email", "password", "full_name")


def _check_password(password: str) -> None:
    result = validate_password(password)
    if not result.ok:
        raise PolicyViolation(result.violation)


async def register_user(users: UserRepository, req: RegisterRequest) -> User:
    """Create a user from a registration body and return the stored row."""
    fields = {
        "email": req.email,
        "password": req.password,
        "full_name": req.full_name,
    }
    missing = first_missing_field(fields, REQUIRED_REGISTRATION_FIELDS)
    if missing is not None:
        raise MissingField(missing)

    _check_password(req.password)

    if await users.find_by_email(req.email) is not None:
        raise EmailTaken()

    values: Dict[str, Any] = {
        "email": req.email,
        "full_name": req.full_name,
        "password": await hash_password_async(req.password),
    }
    if req.deactivated is not None:
        values["deactivated"] = req.deactivated

    user = await users.insert(values)
    logger.info("Registered user %s", user.id)
    return user


async def update_user(
    users: UserRepository,
    user_id: int,
    req: UserUpdateRequest,
) -> None:
    """
    Apply a partial update to *user_id* (always the authenticated user).

    Each present field is validated on its own; absent fields stay as they
    are.  Nothing is written unless every present field is valid.
    """
    changes: Dict[str, Any] = {}

    if req.password is not None:
        _check_password(req.password)

    if req.email is not None:
        existing = await users.find_by_email(req.email)
        if existing is not None and existing.id != user_id:
            raise EmailTaken()
        changes["email"] = req.email

    if req.full_name is not None:
        changes["full_name"] = req.full_name

    if req.deactivated is not None:
        changes["deactivated"] = req.deactivated

    if req.password is not None:
        changes["password"] = await hash_password_async(req.password)

    await users.update(user_id, changes)
    if changes:
        logger.info("Updated user %s (%s)", user_id, ", ".join(sorted(changes)))
