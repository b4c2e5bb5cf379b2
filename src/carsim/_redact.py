"""Helpers for safe debug logging.

Channel requests carry API keys as query parameters. These helpers strip
them (and shorten oversized values) before anything reaches a log line.
"""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

REDACTED = "<redacted>"

_SENSITIVE_PARAMS: frozenset[str] = frozenset({"api_key", "apikey", "key"})


def redact_params(params: Mapping[str, object], *, max_string: int = 128) -> dict[str, str]:
    """Return a copy of *params* with credentials masked."""
    redacted: dict[str, str] = {}
    for name, value in params.items():
        key = str(name)
        if key.lower() in _SENSITIVE_PARAMS:
            redacted[key] = REDACTED
            continue
        text = str(value)
        if len(text) > max_string:
            text = f"{text[:max_string]}…<truncated>"
        redacted[key] = text
    return redacted


def redact_url(url: str) -> str:
    """Mask credentials inside the query string of *url*."""
    parts = urlsplit(url)
    if not parts.query:
        return url
    query = redact_params(dict(parse_qsl(parts.query, keep_blank_values=True)))
    return urlunsplit(parts._replace(query=urlencode(query, safe="<>")))
