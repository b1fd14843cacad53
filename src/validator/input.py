"""
Input-shape checks applied at the boundary before any store call.
"""
import re
from typing import Any, Optional

from src.core.errors import ValidationError

_DIGITS = re.compile(r"^\d+$")
# Largest value an SQLite INTEGER column can hold
MAX_STORAGE_ID = 2**63 - 1
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def is_non_empty_string(value: Any) -> bool:
    """True for a str that is not blank after trimming."""
    return isinstance(value, str) and value.strip() != ""


def is_optional_string(value: Any, supplied: bool = True) -> bool:
    """True when the value was not supplied, or is a str (empty allowed)."""
    return not supplied or isinstance(value, str)


def parse_positive_int(raw: Any, message: str) -> int:
    """
    Parses a raw path/query string as a strictly positive integer.

    Rejects blanks, signs, decimals, exponents and trailing garbage
    ("12abc", "1.5", "1e10", "-1", "0").
    """
    if not isinstance(raw, str):
        raise ValidationError(message)
    candidate = raw.strip()
    if not _DIGITS.match(candidate):
        raise ValidationError(message)
    value = int(candidate)
    if value <= 0:
        raise ValidationError(message)
    return value


def parse_int_or_default(raw: Optional[str], default: int) -> int:
    """Lenient pagination parsing: leading digits win, anything else falls back."""
    if raw is None:
        return default
    match = _LEADING_INT.match(raw)
    if not match:
        return default
    value = int(match.group(1))
    return value if 0 < value <= MAX_STORAGE_ID else default


def is_storable_id(value: int) -> bool:
    """True when the id fits an SQLite INTEGER, so it can be bound in a query."""
    return -MAX_STORAGE_ID - 1 <= value <= MAX_STORAGE_ID


def coerce_id(value: Any) -> Optional[int]:
    """
    Returns an id as int for ints and all-digit strings, else None.

    Ids too large to be stored cannot match any row and also map to None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        candidate = value
    elif isinstance(value, str) and _DIGITS.match(value.strip()):
        candidate = int(value.strip())
    else:
        return None
    return candidate if is_storable_id(candidate) else None


def normalize_description(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None
