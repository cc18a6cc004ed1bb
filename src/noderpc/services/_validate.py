"""Argument checks shared by the services."""

from __future__ import annotations

import re
from enum import Enum
from typing import TypeVar

from noderpc.services.exceptions import ValidationError

E = TypeVar("E", bound=Enum)

_HASH = re.compile(r"[0-9a-fA-F]{64}")


def require_hash(value: str, what: str) -> str:
    """Check *value* is a 32-byte hex hash (block hash or txid)."""
    if not isinstance(value, str) or not _HASH.fullmatch(value):
        raise ValidationError(
            f"{what} must be 64 hex characters", details={what: value}
        )
    return value.lower()


def require_non_negative(value: int, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{what} must be an integer", details={what: value})
    if value < 0:
        raise ValidationError(f"{what} cannot be negative", details={what: value})
    return value


def require_choice(value: E | str, enum: type[E], what: str) -> E:
    """Coerce *value* to a member of *enum*."""
    try:
        return enum(value)
    except ValueError as e:
        choices = ", ".join(str(member.value) for member in enum)
        raise ValidationError(
            f"Invalid {what}: {value}. Must be one of: {choices}",
            details={what: value},
        ) from e
