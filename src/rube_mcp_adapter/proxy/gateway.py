"""rube_mcp_adapter.proxy.gateway

Remote Gateway: appels HTTP vers l'API Rube.

Couche Proxy:
- Contient l'I/O HTTP (httpx.AsyncClient)
- Ne connaît pas JSON-RPC: (path, verb, body) -> JSON décodé ou BackendError
- Pas de retry ni de timeout (le client httpx est créé avec timeout=None)
"""

from __future__ import annotations

import json
import logging
from typing import Awaitable, Callable

import httpx

from ..config.settings import AdapterConfig
from ..core.exceptions import BackendError
from ..core.models import loads_strict

logger = logging.getLogger(__name__)

# Signature commune aux handlers: await gateway(path, verb, body)
Gateway = Callable[..., Awaitable[object]]


def build_backend_url(endpoint: str, path: str) -> str:
    """Compose l'origine configurée et le chemin backend (query string incluse)."""
    return f"{endpoint.rstrip('/')}/{path.lstrip('/')}"


def build_backend_headers(config: AdapterConfig) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Authorization": config.authorization_header,
    }


def create_http_client() -> httpx.AsyncClient:
    """
    Crée le client HTTP partagé par toutes les requêtes en vol.

    Le client ne porte aucun état métier: uniquement le pool de connexions.
    """
    return httpx.AsyncClient(timeout=None)


async def request_backend(
    config: AdapterConfig,
    client: httpx.AsyncClient,
    path: str,
    verb: str = "GET",
    body: object | None = None,
) -> object:
    """Effectue un aller-retour HTTP vers Rube.

    Args:
        config: configuration immuable (origine, token)
        client: client httpx (pool de connexions)
        path: chemin backend, query string déjà encodée
        verb: méthode HTTP
        body: payload JSON optionnel

    Returns:
        La réponse JSON (objet Python) retournée par Rube.

    Raises:
        BackendError: pour erreurs réseau, statut HTTP hors 2xx ou corps non JSON.
    """

    url = build_backend_url(config.endpoint, path)
    content = None
    if body is not None:
        content = json.dumps(body, ensure_ascii=False).encode("utf-8")

    logger.debug("→ Rube %s %s", verb, url)

    try:
        response = await client.request(
            verb,
            url,
            headers=build_backend_headers(config),
            content=content,
        )
    except httpx.TransportError as e:
        raise BackendError(
            message="Erreur de connexion à l'API Rube",
            code="connect_error",
            url=url,
            details={"error": str(e)},
        ) from e

    if not response.is_success:
        raise BackendError(
            message=f"Réponse HTTP inattendue: {response.status_code}",
            code="http_error",
            url=url,
            status_code=response.status_code,
            details={"body": response.text[:500]},
        )

    try:
        # NaN / Infinity refusés: ils ne pourraient pas être réémis en JSON
        return loads_strict(response.content)
    except ValueError as e:
        raise BackendError(
            message="Réponse Rube non JSON",
            code="invalid_json",
            url=url,
            status_code=response.status_code,
            details={"error": str(e), "body": response.text[:500]},
        ) from e


def create_gateway(config: AdapterConfig, client: httpx.AsyncClient) -> Gateway:
    """
    Factory du gateway: lie la config et le client dans une fonction async.

    Les handlers ne voient que la fonction retournée, ce qui permet de la
    remplacer par un double de test.
    """

    async def gateway(path: str, verb: str = "GET", body: object | None = None) -> object:
        return await request_backend(config, client, path, verb, body)

    return gateway
