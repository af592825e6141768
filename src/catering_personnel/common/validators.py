from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_non_negative(value: int, field_name: str) -> int:
    if value is None or int(value) < 0:
        raise ValidationError(f"{field_name} must be zero or positive")
    return int(value)


def optional_text(value: str | None) -> str | None:
    """Strip ``value``; blank or missing input becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None
