"""Redaction helpers for request configurations written to logs."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

REDACTED_VALUE = "***"

_SENSITIVE_KEY_TOKENS = (
    "password",
    "passwd",
    "secret",
    "token",
    "apikey",
    "api_key",
    "access_key",
    "secret_key",
    "private_key",
    "authorization",
    "cookie",
    "session",
    "credential",
)

_SENSITIVE_VALUE_PREFIXES = (
    "bearer ",
    "basic ",
    "token ",
)


def _compact(value: str) -> str:
    return "".join(ch for ch in value if ch.isalnum())


def is_sensitive_key(key: str) -> bool:
    normalized = key.lower()
    compact = _compact(normalized)
    for token in _SENSITIVE_KEY_TOKENS:
        if token in normalized or _compact(token) in compact:
            return True
    return False


def is_sensitive_value(value: str) -> bool:
    normalized = value.strip().lower()
    return normalized.startswith(_SENSITIVE_VALUE_PREFIXES)


def redact_value(value: Any, *, key: str | None = None) -> Any:
    if key is not None and is_sensitive_key(str(key)):
        return REDACTED_VALUE
    if isinstance(value, Mapping):
        return {k: redact_value(v, key=str(k)) for k, v in value.items()}
    if isinstance(value, tuple):
        return tuple(redact_value(item) for item in value)
    if isinstance(value, list):
        return [redact_value(item) for item in value]
    if isinstance(value, bytes):
        decoded = value.decode("utf-8", errors="ignore")
        if decoded and is_sensitive_value(decoded):
            return REDACTED_VALUE
        return value
    if isinstance(value, str):
        if is_sensitive_value(value):
            return REDACTED_VALUE
        return value
    return value


def redact_config(config: Any) -> Any:
    """
    Return a log-safe rendition of a request configuration.

    Mappings are redacted recursively. Any other object is rendered through
    ``repr`` unless it exposes a ``redacted()`` method of its own.
    """

    redacted = getattr(config, "redacted", None)
    if callable(redacted):
        return redacted()
    if isinstance(config, Mapping):
        return redact_value(config)
    return repr(config)
