"""
Hook registration and dispatch for resources.
"""

from .context import HookOverride, compose_override
from .dispatcher import CURRENT, Dispatchable, SupportsDispatch
from .registry import HookRegistry, hooks

BEFORE_REQUEST = "before-request"
AFTER_REQUEST = "after-request"
AFTER_REQUEST_ERROR = "after-request-error"

__all__ = [
    "AFTER_REQUEST",
    "AFTER_REQUEST_ERROR",
    "BEFORE_REQUEST",
    "CURRENT",
    "Dispatchable",
    "HookOverride",
    "HookRegistry",
    "SupportsDispatch",
    "compose_override",
    "hooks",
]
