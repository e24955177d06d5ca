"""
Pydantic schemas for the messaging API.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ═══════════════════════════════════════════════════════════════════════════════
# Users
# ═══════════════════════════════════════════════════════════════════════════════


class RegisterRequest(BaseModel):
    """
    Registration body.

    Fields are optional at the schema level so that a missing one is
    reported as ``Missing '<field>' in request body`` by the service
    instead of a generic validation error.  Unknown keys are ignored.
    """

    email: Optional[str] = None
    password: Optional[str] = None
    full_name: Optional[str] = None
    deactivated: Optional[bool] = None


class UserUpdateRequest(BaseModel):
    """Partial update of the authenticated user; absent fields are untouched."""

    email: Optional[str] = None
    password: Optional[str] = None
    full_name: Optional[str] = None
    deactivated: Optional[bool] = None


class UserResponse(BaseModel):
    """Serialized user.  The password digest is never part of it."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    full_name: str
    deactivated: bool
    date_created: datetime


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class TokenResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    auth_token: str = Field(..., alias="authToken")


# ═══════════════════════════════════════════════════════════════════════════════
# Messages
# ═══════════════════════════════════════════════════════════════════════════════


class MessageCreateRequest(BaseModel):
    content: Optional[str] = None
    conversation_id: Optional[int] = None


class MessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    conversation_id: Optional[int] = None
    user_id: int
    content: str
    msg_read: bool
    date_created: datetime
