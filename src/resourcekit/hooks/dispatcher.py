"""
Event dispatch for resource-like objects.

Every dispatch visits, in order, the active override, the instance handlers
and then bubbles either to the object's scope or, when there is no viable
scope, to its resource type.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Optional, Protocol, Sequence, runtime_checkable

from .context import OverrideFunction, OverrideSpec, compose_override
from .registry import HookHandler, HookRegistry


class _Current:
    __slots__ = ()

    def __repr__(self) -> str:
        return "CURRENT"


CURRENT: Any = _Current()


@runtime_checkable
class SupportsDispatch(Protocol):
    def dispatch(
        self, hook: str, args: Optional[Sequence[Any]] = None, context: Any = None
    ) -> Any: ...


class Dispatchable:
    """
    Mixin providing instance hooks, decorated contexts and bubbling.

    ``scope`` and ``resource_type`` are plain back-references used for
    bubbling only. Registry and override slot are created on first use.
    """

    scope: Any = None
    resource_type: Any = None

    _hooks: Optional[HookRegistry] = None
    _override: Optional[OverrideFunction] = None

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #
    @property
    def hooks(self) -> HookRegistry:
        if self._hooks is None:
            self._hooks = HookRegistry()
        return self._hooks

    def on(self, hook: str, handler: Optional[HookHandler] = None):
        """
        Register an instance hook, fired only for events of this object.

        Without ``handler`` a decorator is returned.
        """

        if handler is None:

            def decorator(fn: HookHandler) -> HookHandler:
                self.hooks.register(hook, fn)
                return fn

            return decorator
        self.hooks.register(hook, handler)
        return self

    def off(self, hook: str, handler: HookHandler):
        if self._hooks is not None:
            self._hooks.unregister(hook, handler)
        return self

    # ------------------------------------------------------------------ #
    # Dispatch
    # ------------------------------------------------------------------ #
    def dispatch(
        self,
        hook: str,
        args: Optional[Sequence[Any]] = None,
        context: Any = None,
        *,
        override: Any = CURRENT,
    ):
        """
        Fire ``hook`` with ``args``.

        Handlers are called as ``handler(context, *args)`` where ``context``
        defaults to this object. ``override`` replaces the active override for
        this dispatch only; requests use it to fire hooks with the override
        captured when they were sent. Handler exceptions propagate.
        """

        active = self._override
        if override is CURRENT:
            override = active
        if context is None:
            context = self

        # The override must not observe itself while it runs.
        self._override = None
        try:
            if override is not None:
                override(hook, args, context)

            if self._hooks is not None:
                self._hooks.fire(hook, args, context)

            scope = self.scope
            if isinstance(scope, SupportsDispatch):
                scope.dispatch(hook, args, context)
            elif self.resource_type is not None:
                self.resource_type.dispatch(hook, args, context)
        finally:
            self._override = active

        return self

    # ------------------------------------------------------------------ #
    # Decorated contexts
    # ------------------------------------------------------------------ #
    def dispatcher(self) -> Optional[OverrideFunction]:
        """
        Return the active override so it can be re-applied later with
        :meth:`decorate`, typically inside an asynchronous continuation.
        """

        return self._override

    @contextmanager
    def decorated(self, spec: OverrideSpec) -> Iterator["Dispatchable"]:
        previous = self._override
        self._override = compose_override(previous, spec)
        try:
            yield self
        finally:
            self._override = previous

    def decorate(self, spec: OverrideSpec, body, *args: Any, **kwargs: Any) -> Any:
        """
        Run ``body(self, *args, **kwargs)`` with ``spec`` installed as the
        active override and return its result.

        ``spec`` may be a mapping of hook name to handler (composed with the
        current override), an override function (replaces it) or ``None``
        (disables it for the body).
        """

        with self.decorated(spec):
            return body(self, *args, **kwargs)
