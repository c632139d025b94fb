"""rube_mcp_adapter.rpc.dispatcher

Dispatcher JSON-RPC: ligne brute -> requête -> handler -> enveloppe.

Contrat:
- Sans état: ne lit que sa requête et le gateway reçu en argument.
- Aucune exception ne sort d'ici: toute erreur devient une enveloppe
  JSON-RPC (-32700 / -32601 / -32603).
- La cause d'une erreur interne n'est jamais renvoyée au client, seulement
  loggée (stderr).
"""

from __future__ import annotations

import logging

from ..core.constants import (
    INTERNAL_ERROR,
    METHOD_NOT_FOUND,
    OPERATION_FAILURE_MESSAGES,
    PARSE_ERROR,
)
from ..core.exceptions import InvalidEnvelopeError
from ..core.models import RpcRequest, loads_strict, make_error, make_result
from ..proxy.gateway import Gateway
from .handlers import get_handler

logger = logging.getLogger(__name__)


async def dispatch_request(request: RpcRequest, gateway: Gateway) -> dict[str, object] | None:
    """Exécute une requête déjà décodée.

    Returns:
        L'enveloppe de réponse, ou None pour une notification.
    """

    handler = get_handler(request.method)
    if handler is None:
        if request.is_notification:
            logger.debug("Notification ignorée: %s", request.method)
            return None
        logger.warning("Méthode inconnue: %s (id=%r)", request.method, request.id)
        return make_error(request.id, METHOD_NOT_FOUND)

    try:
        result = await handler(request.params or {}, gateway)
    except Exception:
        logger.exception("Échec de %s (id=%r)", request.method, request.id)
        if request.is_notification:
            return None
        return make_error(request.id, INTERNAL_ERROR, OPERATION_FAILURE_MESSAGES.get(request.method))

    if request.is_notification:
        return None
    return make_result(request.id, result)


async def dispatch_line(line: str, gateway: Gateway) -> dict[str, object] | None:
    """Décode une unité textuelle (1 ligne) puis la dispatch."""

    try:
        request_obj = loads_strict(line)
    except ValueError as e:
        logger.error("JSON invalide: %s", e)
        return make_error(None, PARSE_ERROR)

    try:
        request = RpcRequest.parse(request_obj)
    except InvalidEnvelopeError as e:
        logger.error("Enveloppe JSON-RPC invalide: %s", e)
        return make_error(e.request_id, PARSE_ERROR)

    logger.debug("Reçu: %s (id=%r)", request.method, request.id)
    return await dispatch_request(request, gateway)
