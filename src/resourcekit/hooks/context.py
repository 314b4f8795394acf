"""
Call-site hook overrides (decorated contexts).

An override is any callable ``fn(hook, args, context)``. Mappings of hook
name to a single callback are turned into :class:`HookOverride` instances
that chain to the override that was active when they were installed.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Sequence, Union

from .registry import EMPTY_ARGS, HookHandler

OverrideFunction = Callable[[str, Sequence[Any], Any], None]
OverrideSpec = Union[Mapping[str, HookHandler], OverrideFunction, None]


class HookOverride:
    """
    Override built from a hook mapping.

    The previously active override always runs first, then this mapping's
    entry for the hook, if any.
    """

    __slots__ = ("hooks", "parent")

    def __init__(
        self, hooks: Mapping[str, HookHandler], parent: Optional[OverrideFunction] = None
    ) -> None:
        self.hooks = dict(hooks)
        self.parent = parent

    def __call__(self, hook: str, args: Sequence[Any] | None, context: Any) -> None:
        if self.parent is not None:
            self.parent(hook, args, context)
        handler = self.hooks.get(hook)
        if handler is not None:
            handler(context, *(args or EMPTY_ARGS))

    def __repr__(self) -> str:
        return f"<HookOverride hooks={sorted(self.hooks)} parent={self.parent!r}>"


def compose_override(
    previous: Optional[OverrideFunction], spec: OverrideSpec
) -> Optional[OverrideFunction]:
    """
    Build the override that becomes active when ``spec`` is installed on top
    of ``previous``.

    A callable (or ``None``) replaces the active override outright; this is
    how a captured override is re-applied. A mapping composes with it.
    """

    if spec is None or callable(spec):
        return spec
    if isinstance(spec, Mapping):
        return HookOverride(spec, previous)
    raise TypeError(
        f"Hook override must be a mapping, a callable or None, got {type(spec).__name__}"
    )
