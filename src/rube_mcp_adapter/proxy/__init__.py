"""
Couche HTTP vers l'API Rube.
"""

from .gateway import (
    Gateway,
    build_backend_url,
    build_backend_headers,
    create_gateway,
    create_http_client,
    request_backend,
)

__all__ = [
    "Gateway",
    "build_backend_url",
    "build_backend_headers",
    "create_gateway",
    "create_http_client",
    "request_backend",
]
