"""rube_mcp_adapter.core.models

Modèles JSON-RPC 2.0 (requêtes entrantes, enveloppes sortantes).

Les requêtes sont des dataclasses immuables; les enveloppes de réponse restent
des `dict` JSON prêts à sérialiser (ordre des clés: jsonrpc, id, result|error).
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass

from .constants import (
    ERROR_MESSAGES,
    JSONRPC_VERSION,
    MCP_PROTOCOL_VERSION,
    SERVER_CAPABILITIES,
    SERVER_NAME,
    SERVER_VERSION,
)
from .exceptions import InvalidEnvelopeError

RequestId = str | int | float | None


def safe_jsonrpc_id(req_id: object | None) -> RequestId:
    # JSON-RPC 2.0: id is string | number | null.
    if req_id is None or isinstance(req_id, bool):
        return None
    if isinstance(req_id, float) and not math.isfinite(req_id):
        # 1e400 -> inf: non réémissible en JSON
        return None
    if isinstance(req_id, (str, int, float)):
        return req_id
    return None


@dataclass(frozen=True)
class RpcRequest:
    """Requête JSON-RPC entrante.

    `has_id` distingue une notification (membre `id` absent) d'une requête
    explicitement adressée avec `"id": null`.
    """

    method: str
    id: RequestId = None
    params: dict[str, object] | None = None
    has_id: bool = True

    @property
    def is_notification(self) -> bool:
        return not self.has_id

    @classmethod
    def parse(cls, obj: object) -> RpcRequest:
        """Construit une requête depuis un objet JSON décodé.

        Raises:
            InvalidEnvelopeError: si `obj` n'est pas un objet JSON avec un
                `method` de type string.
        """
        if not isinstance(obj, dict):
            raise InvalidEnvelopeError(
                f"Requête JSON-RPC invalide (attendu objet JSON, reçu {type(obj).__name__})"
            )

        req_id = safe_jsonrpc_id(obj.get("id"))
        method = obj.get("method")
        if not isinstance(method, str):
            raise InvalidEnvelopeError("Champ 'method' absent ou invalide", request_id=req_id)

        params = obj.get("params")
        return cls(
            method=method,
            id=req_id,
            params=params if isinstance(params, dict) else None,
            has_id="id" in obj,
        )


def make_result(req_id: RequestId, result: dict[str, object]) -> dict[str, object]:
    return {"jsonrpc": JSONRPC_VERSION, "id": req_id, "result": result}


def make_error(req_id: RequestId, code: int, message: str | None = None) -> dict[str, object]:
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": req_id,
        "error": {"code": int(code), "message": message or ERROR_MESSAGES.get(code, "Error")},
    }


def server_info_payload() -> dict[str, object]:
    """Payload `initialize` (capabilities + serverInfo) partagé notification/réponse."""
    return {
        "protocolVersion": MCP_PROTOCOL_VERSION,
        "capabilities": {key: dict(value) for key, value in SERVER_CAPABILITIES.items()},
        "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
    }


def make_initialize_notification() -> dict[str, object]:
    """Notification non sollicitée émise au démarrage du bridge."""
    return {
        "jsonrpc": JSONRPC_VERSION,
        "method": "initialize",
        "params": server_info_payload(),
    }


def _reject_json_constant(name: str) -> object:
    raise ValueError(f"Constante non JSON: {name}")


def loads_strict(text: str | bytes) -> object:
    """`json.loads` refusant NaN / Infinity / -Infinity (hors grammaire JSON).

    Raises:
        ValueError: texte non JSON (dont `json.JSONDecodeError`).
    """
    return json.loads(text, parse_constant=_reject_json_constant)
