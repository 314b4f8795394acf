"""
Request lifecycle: serialized sending, cancellation and chaining.
"""

from .descriptor import RequestDescriptor, RequestStatus
from .queue import RequestQueue

__all__ = ["RequestDescriptor", "RequestQueue", "RequestStatus"]
