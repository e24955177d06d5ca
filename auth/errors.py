"""
Error taxonomy for the user / auth subsystem.

Every error carries the HTTP status and a message that is safe to show to
the caller.  ``api.errors`` turns them into ``{"error": message}`` bodies.
"""

from __future__ import annotations

from fastapi import status

from utils.validators import POLICY_MESSAGES, PolicyRule


class ApiError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    message: str = "Bad request"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingField(ApiError):
    def __init__(self, name: str) -> None:
        self.field = name
        super().__init__(f"Missing '{name}' in request body")


class PolicyViolation(ApiError):
    def __init__(self, kind: PolicyRule) -> None:
        self.kind = kind
        super().__init__(POLICY_MESSAGES[kind])


class EmailTaken(ApiError):
    message = "Email already taken"


class InvalidCredentials(ApiError):
    message = "Incorrect email or password"


class Unauthorized(ApiError):
    """Token missing, malformed, tampered, expired, or identity unusable."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized request"

    def __init__(self) -> None:
        # one message for every cause
        super().__init__()


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class StorageFailure(ApiError):
    """Opaque infrastructure failure; the cause is logged, never returned."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "server error"

    def __init__(self) -> None:
        super().__init__()
