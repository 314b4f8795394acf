"""
Resource base class and type-level hook metadata.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Type, TypeVar

from ..errors import ConfigurationError, TransportNotConfiguredError
from ..hooks import Dispatchable
from ..hooks.registry import HookHandler, HookRegistry, hooks as global_hooks
from ..lifecycle import RequestQueue
from ..transport.base import Transport
from ..utils import camel_to_snake


@dataclass(eq=False)
class ResourceType:
    """
    Type-level metadata calculated by :class:`ResourceMeta`.

    Acts as the bubbling target of its resources: fires its own hooks, then
    those of the parent resource type, and finally the global registry.
    """

    resource: Type["Resource"]
    name: str = ""
    transport: Optional[Transport] = None
    parent: Optional["ResourceType"] = None
    hooks: HookRegistry = field(default_factory=HookRegistry)

    def register_hook(self, hook: str, handler: HookHandler) -> None:
        self.hooks.register(hook, handler)

    def dispatch(self, hook: str, args: Optional[Sequence[Any]] = None, context: Any = None):
        if context is None:
            context = self
        self.hooks.fire(hook, args, context)
        if self.parent is not None:
            self.parent.dispatch(hook, args, context)
        else:
            global_hooks.fire(hook, args, context)
        return self

    def __repr__(self) -> str:
        return f"<ResourceType {self.name}>"


TResource = TypeVar("TResource", bound="Resource")


def _declared_hooks(cls_name: str, declared: Any) -> Dict[str, list[HookHandler]]:
    if declared is None:
        return {}
    if not isinstance(declared, Mapping):
        raise ConfigurationError(f"Meta.hooks on '{cls_name}' must be a mapping of hook names")
    normalized: Dict[str, list[HookHandler]] = {}
    for hook, value in declared.items():
        handlers = list(value) if isinstance(value, (list, tuple)) else [value]
        for handler in handlers:
            if not callable(handler):
                raise ConfigurationError(
                    f"Hook '{hook}' on '{cls_name}' must be callable, got {type(handler).__name__}"
                )
        normalized[hook] = handlers
    return normalized


class ResourceMeta(type):
    """
    Metaclass building the :class:`ResourceType` of each resource class.
    """

    def __new__(mcls, name: str, bases: tuple[type, ...], attrs: Dict[str, Any]) -> "ResourceMeta":
        cls = super().__new__(mcls, name, bases, attrs)

        # The base Resource class carries no type metadata.
        parents = [base for base in bases if isinstance(base, ResourceMeta)]
        if not parents:
            return cls

        parent_type: Optional[ResourceType] = next(
            (base.__dict__["_meta"] for base in parents if "_meta" in base.__dict__), None
        )

        # Only the class's own Meta applies; inherited hooks fire via the parent type.
        meta = attrs.get("Meta")
        resource_name = getattr(meta, "name", None) or camel_to_snake(name)
        transport = getattr(meta, "transport", None)
        if transport is None and parent_type is not None:
            transport = parent_type.transport
        if transport is not None and not callable(transport):
            raise ConfigurationError(f"Meta.transport on '{name}' must be callable")

        cls._meta = ResourceType(
            resource=cls, name=resource_name, transport=transport, parent=parent_type
        )
        for hook, handlers in _declared_hooks(name, getattr(meta, "hooks", None)).items():
            for handler in handlers:
                cls._meta.register_hook(hook, handler)

        return cls


class Resource(Dispatchable, RequestQueue, metaclass=ResourceMeta):
    """
    Base class for resource-like objects: hooks plus a serialized request
    queue. Payload mapping and URL building belong to subclasses.
    """

    def __init__(
        self,
        *,
        scope: Any = None,
        transport: Optional[Transport] = None,
        **attrs: Any,
    ) -> None:
        self.scope = scope
        if transport is not None:
            self.transport = transport
        for key, value in attrs.items():
            setattr(self, key, value)

    def __repr__(self) -> str:
        status = self.status.value if self.status is not None else "new"
        return f"<{self.__class__.__name__} status={status}>"

    @property
    def resource_type(self) -> Optional[ResourceType]:
        return getattr(type(self), "_meta", None)

    def get_transport(self) -> Transport:
        if self.transport is not None:
            return self.transport
        resource_type = self.resource_type
        if resource_type is not None and resource_type.transport is not None:
            return resource_type.transport
        raise TransportNotConfiguredError(
            f"No transport configured for '{self.__class__.__name__}'; "
            "pass transport=... or set Meta.transport"
        )

    @classmethod
    def register_hook(cls, hook: str, handler: Optional[HookHandler] = None):
        if "_meta" not in cls.__dict__:
            raise ConfigurationError(f"'{cls.__name__}' has no resource type to register hooks on")
        if handler is None:

            def decorator(fn: HookHandler) -> HookHandler:
                cls._meta.register_hook(hook, fn)
                return fn

            return decorator
        cls._meta.register_hook(hook, handler)
        return handler

    def build(self, resource_cls: Optional[Type[TResource]] = None, **attrs: Any) -> TResource:
        """
        Create a resource scoped to this one, so its hooks bubble here.
        """

        target = resource_cls or type(self)
        attrs.setdefault("transport", self.transport)
        return target(scope=self, **attrs)
