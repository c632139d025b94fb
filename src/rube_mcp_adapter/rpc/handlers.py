"""rube_mcp_adapter.rpc.handlers

Handlers MCP: chaque handler connaît un seul couple (chemin, verbe) Rube et
la correspondance réponse Rube -> `result` JSON-RPC.

Règle de normalisation:
- Un champ absent/null côté Rube devient `[]` (listes) ou `False` (isError),
  jamais `null`: le client reçoit toujours un résultat bien typé.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable
from urllib.parse import quote

from ..core.constants import (
    BACKEND_RESOURCES_LIST,
    BACKEND_RESOURCES_READ,
    BACKEND_TOOLS_CALL,
    BACKEND_TOOLS_LIST,
)
from ..core.exceptions import BackendError, InvalidParamsError
from ..core.models import server_info_payload
from ..proxy.gateway import Gateway

logger = logging.getLogger(__name__)

Handler = Callable[[dict[str, object], Gateway], Awaitable[dict[str, object]]]

# Caractères non échappés par encodeURIComponent (en plus de A-Z a-z 0-9).
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    """Percent-encode une valeur destinée à la query string (UTF-8)."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def _as_list(value: object) -> list[object]:
    return value if isinstance(value, list) else []


def _unwrap_list(payload: object, key: str) -> list[object]:
    # Rube peut renvoyer soit la liste brute, soit {key: [...]}.
    if isinstance(payload, dict):
        return _as_list(payload.get(key))
    return _as_list(payload)


def _as_object(payload: object, *, path: str) -> dict[str, object]:
    if payload is None:
        return {}
    if isinstance(payload, dict):
        return payload
    raise BackendError(
        message=f"Réponse Rube inattendue (attendu objet JSON, reçu {type(payload).__name__})",
        code="unexpected_payload",
        details={"path": path},
    )


def _require_str(params: dict[str, object], name: str, *, method: str) -> str:
    value = params.get(name)
    if not isinstance(value, str) or not value:
        raise InvalidParamsError(
            f"Paramètre '{name}' requis pour {method}",
            method=method,
            param=name,
        )
    return value


async def handle_tools_list(params: dict[str, object], gateway: Gateway) -> dict[str, object]:
    """tools/list -> GET /tools/list"""
    tools = await gateway(BACKEND_TOOLS_LIST, "GET")
    return {"tools": _unwrap_list(tools, "tools")}


async def handle_tools_call(params: dict[str, object], gateway: Gateway) -> dict[str, object]:
    """tools/call -> POST /tools/call {name, arguments}"""
    name = _require_str(params, "name", method="tools/call")
    arguments = params.get("arguments")
    if arguments is None:
        arguments = {}

    logger.info("Appel outil Rube: %s", name)

    result = _as_object(
        await gateway(BACKEND_TOOLS_CALL, "POST", {"name": name, "arguments": arguments}),
        path=BACKEND_TOOLS_CALL,
    )
    return {
        "content": _as_list(result.get("content")),
        "isError": result.get("isError") is True,
    }


async def handle_resources_list(params: dict[str, object], gateway: Gateway) -> dict[str, object]:
    """resources/list -> GET /resources/list"""
    resources = await gateway(BACKEND_RESOURCES_LIST, "GET")
    return {"resources": _unwrap_list(resources, "resources")}


async def handle_resources_read(params: dict[str, object], gateway: Gateway) -> dict[str, object]:
    """resources/read -> GET /resources/read?uri=<percent-encoded>"""
    uri = _require_str(params, "uri", method="resources/read")
    path = f"{BACKEND_RESOURCES_READ}?uri={encode_uri_component(uri)}"

    resource = _as_object(await gateway(path, "GET"), path=BACKEND_RESOURCES_READ)
    return {"contents": _as_list(resource.get("contents"))}


async def handle_initialize(params: dict[str, object], gateway: Gateway) -> dict[str, object]:
    """initialize: répondu localement, sans appel Rube."""
    client_info = params.get("clientInfo")
    if isinstance(client_info, dict):
        logger.info("Client MCP: %s %s", client_info.get("name"), client_info.get("version"))
    return server_info_payload()


async def handle_ping(params: dict[str, object], gateway: Gateway) -> dict[str, object]:
    return {}


# Opérations relayées vers Rube
BACKEND_HANDLERS: dict[str, Handler] = {
    "tools/list": handle_tools_list,
    "tools/call": handle_tools_call,
    "resources/list": handle_resources_list,
    "resources/read": handle_resources_read,
}

# Méthodes de cycle de vie MCP traitées localement
LOCAL_HANDLERS: dict[str, Handler] = {
    "initialize": handle_initialize,
    "ping": handle_ping,
}

HANDLERS: dict[str, Handler] = {**BACKEND_HANDLERS, **LOCAL_HANDLERS}


def get_handler(method: str) -> Handler | None:
    return HANDLERS.get(method)
