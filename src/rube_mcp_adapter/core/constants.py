"""
Constantes globales pour Rube MCP Adapter.
"""

from .. import __version__

# ============================================================================
# CONFIGURATION PAR DÉFAUT
# ============================================================================
DEFAULT_RUBE_ENDPOINT = "https://api.rube.app"
DEFAULT_LOG_LEVEL = "WARNING"

# Limite readline() sur stdin (asyncio.StreamReader, 64KiB par défaut)
DEFAULT_STREAM_LIMIT = 8 * 1024 * 1024  # 8 MiB
MIN_STREAM_LIMIT = 64 * 1024
MAX_STREAM_LIMIT = 64 * 1024 * 1024  # 64 MiB

# ============================================================================
# PROTOCOLE MCP
# ============================================================================
JSONRPC_VERSION = "2.0"
MCP_PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "rube-mcp-adapter"
SERVER_VERSION = __version__

SERVER_CAPABILITIES = {
    "tools": {},
    "resources": {},
    "prompts": {},
}

# ============================================================================
# CODES D'ERREUR JSON-RPC
# ============================================================================
PARSE_ERROR = -32700
METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603

ERROR_MESSAGES = {
    PARSE_ERROR: "Parse error",
    METHOD_NOT_FOUND: "Method not found",
    INTERNAL_ERROR: "Internal error",
}

# ============================================================================
# API RUBE (chemin backend par méthode)
# ============================================================================
BACKEND_TOOLS_LIST = "/tools/list"
BACKEND_TOOLS_CALL = "/tools/call"
BACKEND_RESOURCES_LIST = "/resources/list"
BACKEND_RESOURCES_READ = "/resources/read"

# Message -32603 par opération (défaut: "Internal error")
OPERATION_FAILURE_MESSAGES = {
    "tools/call": "Tool call failed",
    "resources/read": "Resource read failed",
}
