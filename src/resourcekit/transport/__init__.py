"""
Transport contract and the in-process transport used by demos and tests.
"""

from .base import Transport, invoke
from .memory import InMemoryTransport, Route, TransportResponse

__all__ = ["InMemoryTransport", "Route", "Transport", "TransportResponse", "invoke"]
