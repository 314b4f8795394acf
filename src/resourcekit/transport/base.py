"""
Transport protocol definitions for resourcekit.
"""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Protocol, Union, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """
    Callable performing one request.

    Receives the opaque request configuration and returns the response,
    either directly or as an awaitable. Failures are raised. The same
    configuration object may be passed repeatedly; implementations must not
    retry on their own.
    """

    def __call__(self, config: Any) -> Union[Awaitable[Any], Any]: ...


async def invoke(transport: Transport, config: Any) -> Any:
    """
    Call ``transport`` and await its result when it is awaitable.
    """

    result = transport(config)
    if inspect.isawaitable(result):
        result = await result
    return result
