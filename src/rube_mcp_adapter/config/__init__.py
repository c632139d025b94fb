"""
Configuration de Rube MCP Adapter.
"""

from .settings import AdapterConfig
from .logging_setup import setup_logging

__all__ = [
    "AdapterConfig",
    "setup_logging",
]
