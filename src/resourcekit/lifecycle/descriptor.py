"""
Request descriptors and settlement states.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RequestStatus(str, Enum):
    OK = "ok"
    ERROR = "error"
    CANCELED = "canceled"


@dataclass(eq=False)
class RequestDescriptor:
    """
    One submitted request.

    ``config`` is handed to the transport untouched. ``canceled`` is checked
    before the transport call starts and again once it settles. Descriptors
    compare by identity.
    """

    config: Any
    canceled: bool = False
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def cancel(self) -> None:
        self.canceled = True
