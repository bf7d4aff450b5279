from __future__ import annotations

import re
from datetime import date

from ..core.exceptions import ValidationError

_SPECIAL_CHARS = re.compile(r'[!@#$%^&*(),.?":{}|<>]')


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters long")
    return value


def require_date_order(start: date, end: date) -> None:
    if end < start:
        raise ValidationError("End date cannot be before start date")


def require_strong_password(password: str) -> str:
    """Password policy applied on sign-up and account creation."""

    require_min_length(password, "Password", 8)
    if not re.search(r"[A-Z]", password):
        raise ValidationError("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        raise ValidationError("Password must contain at least one lowercase letter")
    if not re.search(r"[0-9]", password):
        raise ValidationError("Password must contain at least one number")
    if not _SPECIAL_CHARS.search(password):
        raise ValidationError("Password must contain at least one special character")
    return password
