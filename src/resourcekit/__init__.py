"""
resourcekit public package initialization.

Lifecycle substrate for resource-like objects: contextual hooks and a
serialized, cancellable request queue.
"""

from .config import LifecycleSettings, configure, get_settings  # noqa: F401
from .core import Resource, ResourceMeta, ResourceType  # noqa: F401
from .errors import (  # noqa: F401
    ConfigurationError,
    RequestError,
    ResourceKitError,
    TransportError,
    TransportNotConfiguredError,
)
from .hooks import (  # noqa: F401
    AFTER_REQUEST,
    AFTER_REQUEST_ERROR,
    BEFORE_REQUEST,
    Dispatchable,
    HookOverride,
    HookRegistry,
    SupportsDispatch,
    hooks,
)
from .lifecycle import RequestDescriptor, RequestQueue, RequestStatus  # noqa: F401
from .transport import InMemoryTransport, Transport, TransportResponse  # noqa: F401

__all__ = [
    "AFTER_REQUEST",
    "AFTER_REQUEST_ERROR",
    "BEFORE_REQUEST",
    "ConfigurationError",
    "Dispatchable",
    "HookOverride",
    "HookRegistry",
    "InMemoryTransport",
    "LifecycleSettings",
    "RequestDescriptor",
    "RequestError",
    "RequestQueue",
    "RequestStatus",
    "Resource",
    "ResourceKitError",
    "ResourceMeta",
    "ResourceType",
    "SupportsDispatch",
    "Transport",
    "TransportError",
    "TransportNotConfiguredError",
    "TransportResponse",
    "configure",
    "get_settings",
    "hooks",
]
