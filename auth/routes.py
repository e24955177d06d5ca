"""
Auth API routes — login, token refresh.

Route prefix: /api/auth
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from auth.dependencies import CurrentUser, get_user_repository, require_user
from auth.errors import InvalidCredentials, MissingField
from auth.password import hash_password, verify_password_async
from auth.tokens import IdentityClaim, create_token
from database.users import UserRepository
from utils.schemas import LoginRequest, TokenResponse
from utils.validators import first_missing_field

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

REQUIRED_LOGIN_FIELDS = ("email", "password")

# verified against when no usable account exists; every failed login costs one bcrypt run
_DUMMY_DIGEST = hash_password("no-such-account-Placeholder1!")


@router.post("/login", response_model=TokenResponse)
async def login(
    req: Optional[LoginRequest] = None,
    users: UserRepository = Depends(get_user_repository),
) -> TokenResponse:
    """Login with email + password."""
    if req is None:
        req = LoginRequest()
    missing = first_missing_field(
        {"email": req.email, "password": req.password}, REQUIRED_LOGIN_FIELDS
    )
    if missing is not None:
        raise MissingField(missing)

    user = await users.find_by_email(req.email)
    if user is None or user.deactivated:
        await verify_password_async(req.password, _DUMMY_DIGEST)
        raise InvalidCredentials()
    if not await verify_password_async(req.password, user.password):
        raise InvalidCredentials()

    token = create_token(IdentityClaim(subject_id=str(user.id), full_name=user.full_name))
    logger.info("Login: user %s", user.id)
    return TokenResponse(auth_token=token)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    current_user: CurrentUser = Depends(require_user),
) -> TokenResponse:
    """Issue a fresh token for the authenticated user."""
    token = create_token(
        IdentityClaim(subject_id=str(current_user.id), full_name=current_user.full_name)
    )
    return TokenResponse(auth_token=token)
