"""
Traduction JSON-RPC <-> API Rube (dispatcher + handlers).
"""

from .dispatcher import dispatch_line, dispatch_request
from .handlers import (
    HANDLERS,
    encode_uri_component,
    get_handler,
)

__all__ = [
    "dispatch_line",
    "dispatch_request",
    "HANDLERS",
    "encode_uri_component",
    "get_handler",
]
