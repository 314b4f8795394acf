"""
Process-wide settings for the request lifecycle.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from .errors import ConfigurationError

ENV_PREFIX = "RESOURCEKIT_"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _parse_int(value: str, *, key: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid integer value for '{key}': {value!r}") from exc
    if parsed < 0:
        raise ConfigurationError(f"'{key}' must not be negative, got {parsed}")
    return parsed


def _parse_level(value: str, *, key: str) -> str:
    normalized = value.strip().upper()
    if normalized not in _LOG_LEVELS:
        raise ConfigurationError(f"Invalid log level for '{key}': {value!r}")
    return normalized


@dataclass(frozen=True)
class LifecycleSettings:
    """
    Tunables shared by every resource.

    ``slow_request_ms`` is the duration above which a transport call is
    logged as a warning instead of a debug record.
    """

    slow_request_ms: int = 500
    log_level: str = "INFO"

    @classmethod
    def from_env(
        cls, prefix: str = ENV_PREFIX, environ: Optional[Mapping[str, str]] = None
    ) -> "LifecycleSettings":
        """
        Build settings from ``<prefix>SLOW_REQUEST_MS`` and ``<prefix>LOG_LEVEL``.
        """

        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        slow_key = f"{prefix}SLOW_REQUEST_MS"
        if env.get(slow_key):
            values["slow_request_ms"] = _parse_int(env[slow_key], key=slow_key)
        level_key = f"{prefix}LOG_LEVEL"
        if env.get(level_key):
            values["log_level"] = _parse_level(env[level_key], key=level_key)
        return cls(**values)


_settings: LifecycleSettings | None = None


def get_settings() -> LifecycleSettings:
    global _settings
    if _settings is None:
        _settings = LifecycleSettings.from_env()
    return _settings


def configure(settings: LifecycleSettings | None = None, **overrides: Any) -> LifecycleSettings:
    """
    Replace the process-wide settings, optionally overriding single fields.
    """

    global _settings
    base = settings or get_settings()
    if "log_level" in overrides:
        overrides["log_level"] = _parse_level(str(overrides["log_level"]), key="log_level")
    _settings = replace(base, **overrides)
    logging.getLogger("resourcekit").setLevel(_settings.log_level)
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
