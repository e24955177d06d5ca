"""
Input validators used by the user and auth routes.

Everything here is pure: no I/O, no logging, same input → same output.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Sequence

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 72
# bcrypt only reads the first 72 bytes of its input
PASSWORD_MAX_BYTES = 72
PASSWORD_SPECIAL_CHARACTERS = "!@#$%^&"

_UPPER = re.compile(r"[A-Z]")
_LOWER = re.compile(r"[a-z]")
_DIGIT = re.compile(r"[0-9]")
_SPECIAL = re.compile(f"[{re.escape(PASSWORD_SPECIAL_CHARACTERS)}]")


class PolicyRule(str, Enum):
    TOO_SHORT = "TooShort"
    TOO_LONG = "TooLong"
    PADDED_WHITESPACE = "PaddedWhitespace"
    INSUFFICIENT_COMPLEXITY = "InsufficientComplexity"


POLICY_MESSAGES = {
    PolicyRule.TOO_SHORT: f"Password must be longer than {PASSWORD_MIN_LENGTH} characters",
    PolicyRule.TOO_LONG: f"Password must be less than {PASSWORD_MAX_LENGTH} characters",
    PolicyRule.PADDED_WHITESPACE: "Password must not start or end with empty spaces",
    PolicyRule.INSUFFICIENT_COMPLEXITY: (
        "Password must contain 1 upper case, lower case, number and special character"
    ),
}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of :func:`validate_password`; ``violation`` is None on success."""

    violation: Optional[PolicyRule] = None

    @property
    def ok(self) -> bool:
        return self.violation is None

    @property
    def message(self) -> Optional[str]:
        if self.violation is None:
            return None
        return POLICY_MESSAGES[self.violation]


def validate_password(password: str) -> ValidationResult:
    """
    Check a candidate password against the policy.

    Rules run in a fixed order and the first failure wins:
    length, surrounding whitespace, then character-class complexity.
    """
    if len(password) < PASSWORD_MIN_LENGTH:
        return ValidationResult(PolicyRule.TOO_SHORT)
    if (
        len(password) > PASSWORD_MAX_LENGTH
        or len(password.encode("utf-8")) > PASSWORD_MAX_BYTES
    ):
        return ValidationResult(PolicyRule.TOO_LONG)
    if password != password.strip():
        return ValidationResult(PolicyRule.PADDED_WHITESPACE)
    if not (
        _UPPER.search(password)
        and _LOWER.search(password)
        and _DIGIT.search(password)
        and _SPECIAL.search(password)
    ):
        return ValidationResult(PolicyRule.INSUFFICIENT_COMPLEXITY)
    return ValidationResult()


def first_missing_field(
    values: Mapping[str, Any],
    required: Sequence[str],
) -> Optional[str]:
    """Return the first name in *required* whose value is None, else None."""
    for name in required:
        if values.get(name) is None:
            return name
    return None
