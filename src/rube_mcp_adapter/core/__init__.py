"""
Noyau de Rube MCP Adapter: constantes, exceptions et modèles JSON-RPC.
"""

from .exceptions import (
    RubeAdapterError,
    ConfigurationError,
    BackendError,
    InvalidEnvelopeError,
    InvalidParamsError,
)
from .models import (
    RpcRequest,
    loads_strict,
    make_result,
    make_error,
    make_initialize_notification,
    server_info_payload,
)

__all__ = [
    "RubeAdapterError",
    "ConfigurationError",
    "BackendError",
    "InvalidEnvelopeError",
    "InvalidParamsError",
    "RpcRequest",
    "loads_strict",
    "make_result",
    "make_error",
    "make_initialize_notification",
    "server_info_payload",
]
