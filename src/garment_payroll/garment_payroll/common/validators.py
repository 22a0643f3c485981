from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def normalize_key(value: Optional[str]) -> str:
    """Trim and upper-case a code/grade/status so lookups ignore case and padding."""
    return (value or "").strip().upper()


def normalize_month(value: Optional[str]) -> str:
    return (value or "").strip().lower()
