"""
Hook registry storing named callback lists.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

HookHandler = Callable[..., Any]

EMPTY_ARGS: tuple = ()


class HookRegistry:
    """
    Ordered table of hook handlers keyed by hook name.

    Insertion order is invocation order and duplicate registrations are kept,
    so a handler registered twice fires twice.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[HookHandler]] = {}

    def register(self, hook: str, handler: Optional[HookHandler] = None):
        if handler is None:

            def decorator(fn: HookHandler) -> HookHandler:
                self.register(hook, fn)
                return fn

            return decorator
        self._handlers.setdefault(hook, []).append(handler)
        return handler

    def unregister(self, hook: str, handler: HookHandler) -> None:
        handlers = self._handlers.get(hook)
        if not handlers or handler not in handlers:
            return
        handlers.remove(handler)
        if not handlers:
            del self._handlers[hook]

    def handlers(self, hook: str) -> tuple[HookHandler, ...]:
        return tuple(self._handlers.get(hook, EMPTY_ARGS))

    def fire(self, hook: str, args: Sequence[Any] | None, context: Any) -> None:
        # Snapshot so handlers registering new handlers do not extend this run.
        for handler in self.handlers(hook):
            handler(context, *(args or EMPTY_ARGS))

    def clear(self) -> None:
        self._handlers.clear()

    def __contains__(self, hook: object) -> bool:
        return hook in self._handlers

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._handlers))

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        counts = ", ".join(f"{name}={len(items)}" for name, items in self._handlers.items())
        return f"<HookRegistry {counts}>"


hooks = HookRegistry()
