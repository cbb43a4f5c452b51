"""Field-level validation predicates.

Each function checks a single field and raises ValidationError naming that
field when the check fails. Application services call them before touching
any repository and wrap the failure with "validation failed" context.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from shared_kernel.errors import ValidationError


def required(field: str, value: str | None) -> None:
    """Require a non-empty string."""
    if value is None or value == "":
        raise ValidationError(field, "is required")


def required_id(field: str, value: Any) -> None:
    """Require an identifier value object (or raw id string) to be present.

    Identifier value objects expose their raw form as ``value``; an
    identifier is considered missing when it is None or its raw form is empty.
    """
    if value is None:
        raise ValidationError(field, "must be a valid identifier")
    raw = getattr(value, "value", value)
    if not isinstance(raw, str) or not raw:
        raise ValidationError(field, "must be a valid identifier")


def max_length(field: str, value: str, limit: int) -> None:
    """Require len(value) <= limit."""
    if len(value) > limit:
        raise ValidationError(field, f"must be at most {limit} characters")


def value_in_range(field: str, value: int, minimum: int, maximum: int) -> None:
    """Require minimum <= value <= maximum."""
    if value < minimum or value > maximum:
        raise ValidationError(field, f"must be between {minimum} and {maximum}")


def non_negative(field: str, value: int) -> None:
    if value < 0:
        raise ValidationError(field, "must be non-negative")


def positive(field: str, value: int) -> None:
    if value <= 0:
        raise ValidationError(field, "must be positive")


def timezone_aware(field: str, value: datetime) -> None:
    """Require a timestamp that carries a UTC offset."""
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValidationError(field, "must include a timezone")


def date_not_past(field: str, value: datetime, now: datetime | None = None) -> None:
    """Require a timezone-aware timestamp that is not before now.

    Args:
        field: Field name for the error message
        value: Timestamp to check
        now: Reference time (defaults to the current UTC time)
    """
    timezone_aware(field, value)
    if value < (now or datetime.now(UTC)):
        raise ValidationError(field, "cannot be in the past")


def date_in_future(field: str, value: datetime, now: datetime | None = None) -> None:
    """Require a timezone-aware timestamp strictly after now."""
    timezone_aware(field, value)
    if value <= (now or datetime.now(UTC)):
        raise ValidationError(field, "must be in the future")
