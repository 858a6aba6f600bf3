from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if is_blank(value):
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def optional_text(value, field_name: str) -> Optional[str]:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    return value


def clean_optional(value: Optional[str]) -> Optional[str]:
    """Strip free text, collapsing blank input to None."""
    if value is None:
        return None
    return str(value).strip() or None
