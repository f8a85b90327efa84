"""Helpers for redacting API keys from logs and error messages."""

from __future__ import annotations

import re
from typing import Any

REDACTED = "[REDACTED]"

_SENSITIVE_KEY_RE = re.compile(
    r"(authorization|token|secret|appid|apikey|api[_-]?key|^key$)",
    re.IGNORECASE,
)
# Query-string credentials, e.g. ``?appid=abc`` or ``&key=abc``.
_QUERY_SECRET_RE = re.compile(
    r"(?i)([?&](?:appid|apikey|api_key|key|token)=)[^&\s\"']+",
)
_HEADER_SECRET_RE = re.compile(
    r"(?i)\b(x-access-token|authorization)\s*[:=]\s*([^\s,;]+)",
)


def sanitize_text(text: str) -> str:
    """Redact credentials embedded in URLs and header dumps."""
    sanitized = _QUERY_SECRET_RE.sub(lambda m: f"{m.group(1)}{REDACTED}", text)
    sanitized = _HEADER_SECRET_RE.sub(lambda m: f"{m.group(1)}={REDACTED}", sanitized)
    return sanitized


def sanitize_for_logging(value: Any) -> Any:
    """Recursively redact sensitive values in nested structures."""
    if isinstance(value, dict):
        sanitized: dict[Any, Any] = {}
        for key, child in value.items():
            if _SENSITIVE_KEY_RE.search(str(key)):
                sanitized[key] = REDACTED
            else:
                sanitized[key] = sanitize_for_logging(child)
        return sanitized
    if isinstance(value, list):
        return [sanitize_for_logging(item) for item in value]
    if isinstance(value, tuple):
        return tuple(sanitize_for_logging(item) for item in value)
    if isinstance(value, str):
        return sanitize_text(value)
    return value
