"""
Error hierarchy for resourcekit.
"""

from __future__ import annotations

from typing import Any


class ResourceKitError(Exception):
    """Base error for every failure raised by resourcekit."""


class ConfigurationError(ResourceKitError):
    """Raised when settings or a resource definition are invalid."""


class TransportNotConfiguredError(ConfigurationError):
    """Raised when a request is sent by a resource that has no transport."""


class RequestError(ResourceKitError):
    """
    Rejection of a resource's request chain.

    Carries the owning resource (with ``status`` and ``last_response``
    already populated) rather than the raw transport failure, which is kept
    in ``response``.
    """

    def __init__(self, resource: Any, response: Any = None) -> None:
        self.resource = resource
        self.response = response
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if isinstance(self.response, BaseException):
            detail = f"{type(self.response).__name__}: {self.response}"
        else:
            detail = repr(self.response)
        return f"Request failed for {self.resource!r} ({detail})"


class TransportError(ResourceKitError):
    """
    Failure reported by a transport, with an HTTP-like status and payload.
    """

    def __init__(self, status: int, payload: Any = None, *, message: str | None = None) -> None:
        self.status = status
        self.payload = payload
        super().__init__(message or f"Transport responded with status {status}")
