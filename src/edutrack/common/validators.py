from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required.")
    return value.strip()


def canonical_identifier(value: Optional[str], field_name: str = "Identifier") -> str:
    """Trim and case-fold a roll number / employee id.

    Identifiers are stored upper-cased, so every lookup and comparison goes
    through here first.
    """
    return require_non_empty(value, field_name).upper()


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None
