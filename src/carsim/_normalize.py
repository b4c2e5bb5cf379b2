"""Normalization helpers.

Centralizes defensive parsing of remote field values.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Any

# Strings the channel uses (or users leave behind) for "no value".
_PLACEHOLDERS = frozenset({"", "--", "null", "None"})


def safe_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and value.strip() in _PLACEHOLDERS:
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(parsed)


def safe_datetime(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp (``2024-05-01T12:00:00Z``) as UTC."""
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed
