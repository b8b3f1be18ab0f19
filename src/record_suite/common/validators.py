from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _require_str(value: object, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return value


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not _require_str(value, field_name).strip():
        raise ValidationError(f"{field_name} must not be blank")
    return value.strip()


def optional_text(value: Optional[str], field_name: str) -> str:
    if value is None:
        return ""
    return _require_str(value, field_name).strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(_require_str(value, field_name)) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: Optional[str], field_name: str = "email") -> str:
    value = require_non_empty(value, field_name)
    if not _EMAIL_RE.match(value):
        raise ValidationError(f"{field_name} is not a valid email address")
    return value


def require_int(value: object, field_name: str) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field_name} must be an integer")


def require_decimal(value: object, field_name: str) -> Decimal:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not result.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    return result


def require_positive(value: object, field_name: str) -> Decimal:
    number = require_decimal(value, field_name)
    if number <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return number


def require_non_negative(value: object, field_name: str) -> int:
    number = require_int(value, field_name)
    if number < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return number


def require_in_range(value: object, field_name: str, low: int, high: int) -> int:
    number = require_int(value, field_name)
    if number < low or number > high:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return number


def require_price(value: object, field_name: str, places: int = 2) -> Decimal:
    """Positive amount with at most ``places`` decimals (DECIMAL(12, 2) column)."""

    number = require_positive(value, field_name)
    if number.as_tuple().exponent < -places:
        raise ValidationError(f"{field_name} must have at most {places} decimal places")
    return number
