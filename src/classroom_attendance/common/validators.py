from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_length_between(value: str, field_name: str, min_len: int, max_len: int) -> str:
    if len(value) < min_len or len(value) > max_len:
        raise ValidationError(f"{field_name} must be between {min_len} and {max_len} characters")
    return value


def coerce_positive_int(value: Any) -> Optional[int]:
    """Leading-integer coercion: ``"12"`` and ``"12abc"`` give 12, anything else None.

    Booleans are rejected; floats are truncated like their string form would be.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    s = str(value).strip()
    digits = ""
    for i, ch in enumerate(s):
        if ch in "0123456789":
            digits += ch
        elif i == 0 and ch in "+-":
            digits += ch
        else:
            break
    try:
        num = int(digits)
    except ValueError:
        return None
    return num if num > 0 else None


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None
