"""
Rube MCP Adapter - Bridge stdio JSON-RPC vers l'API HTTP Rube.
"""

__version__ = "1.0.0"
