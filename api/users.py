"""
User API routes — register, read, self-update.

Route prefix: /api/users
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status

from auth.dependencies import CurrentUser, get_user_repository, require_user
from auth.errors import NotFound
from core.user_service import register_user, update_user
from database.users import UserRepository
from utils.schemas import RegisterRequest, UserResponse, UserUpdateRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
async def register(
    request: Request,
    response: Response,
    req: Optional[RegisterRequest] = None,
    users: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    """Register a new user."""
    if req is None:
        req = RegisterRequest()
    user = await register_user(users, req)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{user.id}"
    return UserResponse.model_validate(user)


@router.get("", response_model=UserResponse)
async def get_current(
    current_user: CurrentUser = Depends(require_user),
    users: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    """Return the authenticated user."""
    user = await users.find_by_id(current_user.id)
    if user is None:
        raise NotFound("User doesn't exist")
    return UserResponse.model_validate(user)


@router.patch("", status_code=status.HTTP_204_NO_CONTENT)
async def update_current(
    req: Optional[UserUpdateRequest] = None,
    current_user: CurrentUser = Depends(require_user),
    users: UserRepository = Depends(get_user_repository),
) -> Response:
    """Partially update the authenticated user."""
    if req is None:
        req = UserUpdateRequest()
    await update_user(users, current_user.id, req)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    current_user: CurrentUser = Depends(require_user),
    users: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    user = await users.find_by_id(user_id)
    if user is None:
        raise NotFound("User doesn't exist")
    return UserResponse.model_validate(user)
