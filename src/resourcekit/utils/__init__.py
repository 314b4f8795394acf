"""
Utility helpers shared across resourcekit packages.
"""

from .logging import configure_logging, get_logger, time_call
from .naming import camel_to_snake
from .redaction import redact_config, redact_value

__all__ = [
    "camel_to_snake",
    "configure_logging",
    "get_logger",
    "redact_config",
    "redact_value",
    "time_call",
]
