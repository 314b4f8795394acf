"""
Per-resource request queue and send lifecycle.

Requests sent by the same resource run strictly one after the other. Each
request task waits for the previous chain tail to settle, whatever its
outcome, so a failure never blocks the requests queued behind it while the
failure is still reported to whoever awaits that request.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable, List, Optional

from ..config import get_settings
from ..errors import RequestError, TransportNotConfiguredError
from ..hooks import AFTER_REQUEST, AFTER_REQUEST_ERROR, BEFORE_REQUEST
from ..hooks.context import OverrideFunction
from ..transport.base import Transport, invoke
from ..utils import get_logger, redact_config, time_call
from ..utils.logging import set_correlation_id
from .descriptor import RequestDescriptor, RequestStatus

SuccessCallback = Callable[[Any, Any], Any]
ErrorCallback = Callable[[Any, Any], Any]

logger = get_logger("lifecycle.queue")


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _outcome(future: "asyncio.Future[Any]") -> Optional[BaseException]:
    if future.cancelled():
        return None
    return future.exception()


def _retrieve(task: "asyncio.Task[Any]") -> None:
    # Marks the failure as retrieved for chains nobody awaits.
    failure = _outcome(task)
    if failure is not None:
        logger.debug("Request task %s settled with failure: %s", task.get_name(), failure)


class RequestQueue:
    """
    Mixin serializing the requests of one object.

    Must be combined with :class:`~resourcekit.hooks.Dispatchable`; hooks are
    fired through ``dispatch`` with the override captured at send time.
    """

    transport: Optional[Transport] = None
    status: Optional[RequestStatus] = None
    last_response: Any = None

    _pending: Optional[List[RequestDescriptor]] = None
    _chain: Optional["asyncio.Future[Any]"] = None

    # ------------------------------------------------------------------ #
    # State
    # ------------------------------------------------------------------ #
    @property
    def pending(self) -> tuple[RequestDescriptor, ...]:
        return tuple(self._pending or ())

    @property
    def has_pending(self) -> bool:
        return bool(self._pending)

    @property
    def chain(self) -> Optional["asyncio.Future[Any]"]:
        return self._chain

    def get_transport(self) -> Transport:
        if self.transport is None:
            raise TransportNotConfiguredError(f"No transport configured for {self!r}")
        return self.transport

    # ------------------------------------------------------------------ #
    # Sending
    # ------------------------------------------------------------------ #
    def send(
        self,
        config: Any,
        success: Optional[SuccessCallback] = None,
        error: Optional[ErrorCallback] = None,
    ):
        """
        Queue a request and return ``self``.

        ``success(self, response)`` and ``error(self, failure)`` are called
        synchronously right after the matching ``after-request`` or
        ``after-request-error`` hook. Must be called from a running event loop.
        """

        transport = self.get_transport()
        loop = asyncio.get_running_loop()
        override = self.dispatcher()
        descriptor = RequestDescriptor(config)

        if self._pending is None:
            self._pending = []
        self._pending.append(descriptor)

        previous = self._chain
        self._chain = loop.create_task(
            self._run_after(previous, descriptor, transport, override, success, error)
        )
        self._chain.add_done_callback(_retrieve)
        logger.debug(
            "Queued request %s for %r (%s pending)",
            descriptor.request_id,
            self,
            len(self._pending),
            extra={"request_config": redact_config(config)},
        )
        return self

    def cancel(self):
        """
        Cancel every pending request and detach the current chain.

        In-flight transport calls are not aborted; their outcome is ignored
        once they settle.
        """

        pending = self._pending or ()
        for descriptor in pending:
            descriptor.cancel()
        self._chain = None
        if pending:
            logger.debug("Canceled %s pending request(s) for %r", len(pending), self)
        return self

    async def _run_after(
        self,
        previous: Optional["asyncio.Future[Any]"],
        descriptor: RequestDescriptor,
        transport: Transport,
        override: Optional[OverrideFunction],
        success: Optional[SuccessCallback],
        error: Optional[ErrorCallback],
    ):
        if previous is not None:
            await asyncio.wait((previous,))
            failure = _outcome(previous)
            if failure is not None:
                logger.debug(
                    "Previous request for %r failed (%s), running next in queue",
                    self,
                    failure,
                )
        return await self._perform(descriptor, transport, override, success, error)

    async def _perform(
        self,
        descriptor: RequestDescriptor,
        transport: Transport,
        override: Optional[OverrideFunction],
        success: Optional[SuccessCallback],
        error: Optional[ErrorCallback],
    ):
        set_correlation_id(descriptor.request_id)
        if descriptor.canceled:
            return self._settle_canceled(descriptor)

        config = descriptor.config
        self.last_response = None
        try:
            self.dispatch(BEFORE_REQUEST, (config,), override=override)
        except Exception:
            self._discard(descriptor)
            self.status = RequestStatus.ERROR
            raise

        try:
            with time_call(
                "transport",
                logger,
                config=redact_config(config),
                threshold_ms=get_settings().slow_request_ms,
            ):
                response = await invoke(transport, config)
        except asyncio.CancelledError:
            self._discard(descriptor)
            raise
        except Exception as exc:
            if descriptor.canceled:
                return self._settle_canceled(descriptor)

            self._discard(descriptor)
            self.status = RequestStatus.ERROR
            self.last_response = exc
            logger.info("Request %s for %r failed: %s", descriptor.request_id, self, exc)

            self.dispatch(AFTER_REQUEST_ERROR, (exc,), override=override)
            if error is not None:
                error(self, exc)
            raise RequestError(self, exc) from exc

        if descriptor.canceled:
            return self._settle_canceled(descriptor)

        self._discard(descriptor)
        self.status = RequestStatus.OK
        self.last_response = response

        try:
            self.dispatch(AFTER_REQUEST, (response,), override=override)
            if success is not None:
                success(self, response)
        except Exception:
            self.status = RequestStatus.ERROR
            raise
        return self

    def _settle_canceled(self, descriptor: RequestDescriptor):
        self._discard(descriptor)
        self.status = RequestStatus.CANCELED
        logger.debug("Request %s for %r resolved as canceled", descriptor.request_id, self)
        return self

    def _discard(self, descriptor: RequestDescriptor) -> None:
        if self._pending and descriptor in self._pending:
            self._pending.remove(descriptor)

    # ------------------------------------------------------------------ #
    # Chaining
    # ------------------------------------------------------------------ #
    def then(
        self,
        success: Optional[Callable[[Any], Any]] = None,
        error: Optional[Callable[[BaseException], Any]] = None,
    ):
        """
        Attach continuations to the current chain tail.

        ``success(self)`` runs when the chain resolves, ``error(exc)`` when it
        rejects. A handled rejection recovers the chain. Awaitable results
        are awaited. The chain keeps resolving to ``self``.
        """

        loop = asyncio.get_running_loop()
        self._chain = loop.create_task(self._continue(self._chain, success, error))
        self._chain.add_done_callback(_retrieve)
        return self

    def finally_(self, callback: Callable[[Any], Any]):
        """
        Run ``callback(self)`` once the current chain settles, keeping its
        outcome.
        """

        loop = asyncio.get_running_loop()
        self._chain = loop.create_task(self._finally(self._chain, callback))
        self._chain.add_done_callback(_retrieve)
        return self

    async def _continue(self, previous, success, error):
        try:
            if previous is not None:
                await previous
        except Exception as exc:
            if error is None:
                raise
            await _maybe_await(error(exc))
            return self
        if success is not None:
            await _maybe_await(success(self))
        return self

    async def _finally(self, previous, callback):
        try:
            if previous is not None:
                await previous
        finally:
            await _maybe_await(callback(self))
        return self

    # ------------------------------------------------------------------ #
    # Awaiting
    # ------------------------------------------------------------------ #
    def __await__(self):
        return self._resolve().__await__()

    async def _resolve(self):
        chain = self._chain
        if chain is not None:
            await chain
        return self

    async def wait(self):
        """
        Wait for the current chain to settle without raising; inspect
        ``status`` and ``last_response`` afterwards.
        """

        chain = self._chain
        if chain is not None:
            await asyncio.wait((chain,))
            failure = _outcome(chain)
            if failure is not None:
                logger.debug("Chain for %r settled with failure: %s", self, failure)
        return self
