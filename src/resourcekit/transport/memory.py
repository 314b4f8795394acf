"""
In-process transport routing requests to registered handlers.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..errors import ConfigurationError, TransportError
from ..utils import get_logger, redact_config

RouteHandler = Callable[[Any], Any]


@dataclass(slots=True)
class TransportResponse:
    status: int
    data: Any
    config: Any = field(repr=False, default=None)


@dataclass(slots=True)
class Route:
    method: str
    url: str
    handler: RouteHandler
    delay: float = 0.0


class InMemoryTransport:
    """
    Transport answering from in-process route handlers.

    Configs are mappings (or objects) carrying ``method`` and ``url``.
    Handlers receive the config and return either a payload or a
    ``(status, payload)`` tuple; statuses of 400 and above are raised as
    :class:`~resourcekit.errors.TransportError`.
    """

    def __init__(self, *, delay: float = 0.0) -> None:
        self.delay = delay
        self.calls: List[Any] = []
        self.in_flight = 0
        self.peak_in_flight = 0
        self._routes: Dict[Tuple[str, str], Route] = {}
        self.logger = get_logger("transport.memory")

    # ------------------------------------------------------------------ #
    # Routing
    # ------------------------------------------------------------------ #
    def route(
        self,
        method: str,
        url: str,
        handler: Optional[RouteHandler] = None,
        *,
        delay: Optional[float] = None,
    ):
        if handler is None:

            def decorator(fn: RouteHandler) -> RouteHandler:
                self.route(method, url, fn, delay=delay)
                return fn

            return decorator
        key = (method.upper(), url)
        self._routes[key] = Route(
            method=key[0],
            url=url,
            handler=handler,
            delay=self.delay if delay is None else delay,
        )
        return handler

    def reset(self) -> None:
        self.calls.clear()
        self.in_flight = 0
        self.peak_in_flight = 0

    # ------------------------------------------------------------------ #
    # Execution
    # ------------------------------------------------------------------ #
    async def __call__(self, config: Any) -> TransportResponse:
        method, url = self._target(config)
        self.calls.append(config)
        route = self._routes.get((method, url))
        if route is None:
            self.logger.debug("No route for %s %s", method, url)
            raise TransportError(404, {"error": "not found"}, message=f"No route for {method} {url}")

        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            if route.delay:
                await asyncio.sleep(route.delay)
            result = route.handler(config)
            if inspect.isawaitable(result):
                result = await result
        finally:
            self.in_flight -= 1

        status, payload = self._normalize(result)
        self.logger.debug(
            "%s %s -> %s", method, url, status, extra={"request_config": redact_config(config)}
        )
        if status >= 400:
            raise TransportError(status, payload)
        return TransportResponse(status=status, data=payload, config=config)

    @staticmethod
    def _target(config: Any) -> Tuple[str, str]:
        if isinstance(config, Mapping):
            method = config.get("method", "GET")
            url = config.get("url")
        else:
            method = getattr(config, "method", "GET")
            url = getattr(config, "url", None)
        if not url:
            raise ConfigurationError(f"Request config has no url: {redact_config(config)!r}")
        return str(method).upper(), str(url)

    @staticmethod
    def _normalize(result: Any) -> Tuple[int, Any]:
        if (
            isinstance(result, tuple)
            and len(result) == 2
            and isinstance(result[0], int)
        ):
            return result
        return 200, result
