"""
Shared utilities for turning raw rows into domain objects.

Stored rows use several spellings for the same field (snake_case from the
database, camelCase from the web app); these helpers pick the first one present.
"""

import logging
from datetime import date, datetime

log = logging.getLogger(__name__)


def get_value(row: dict, candidates: list[str]):
    """Get value from the first candidate key present and not None."""
    for c in candidates:
        if c in row and row[c] is not None:
            return row[c]
    return None


def require_value(row: dict, candidates: list[str]):
    v = get_value(row, candidates)
    if v is None:
        raise ValueError(f"missing field: one of {', '.join(candidates)}")
    return v


def safe_int(val, default: int = 0) -> int:
    """Convert value to int, returning default on failure."""
    if val is None:
        return default
    try:
        return int(float(val))
    except (ValueError, TypeError):
        return default


def safe_float(val, default: float | None = None) -> float | None:
    """Convert value to float, returning default on failure."""
    if val is None:
        return default
    try:
        return float(val)
    except (ValueError, TypeError):
        return default


def safe_date(val) -> date | None:
    """ISO date string, date or datetime -> date; None when unparseable."""
    if val is None or val == "":
        return None
    if isinstance(val, datetime):
        return val.date()
    if isinstance(val, date):
        return val
    try:
        return datetime.fromisoformat(str(val).replace("Z", "+00:00")).date()
    except ValueError:
        log.warning(f"Unparseable date: {val!r}")
        return None


def as_mapping(val, name: str) -> dict:
    """Mapping field or {} when absent; any other type is malformed input."""
    if val is None:
        return {}
    if not isinstance(val, dict):
        raise ValueError(f"{name} must be a mapping, got {type(val).__name__}")
    return val


def as_sequence(val, name: str) -> list:
    """List field or [] when absent; strings and scalars are malformed input."""
    if val is None:
        return []
    if not isinstance(val, (list, tuple)):
        raise ValueError(f"{name} must be a list, got {type(val).__name__}")
    return list(val)
