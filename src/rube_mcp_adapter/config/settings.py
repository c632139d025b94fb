"""src.rube_mcp_adapter.config.settings

Configuration immuable de l'adapter, lue une seule fois depuis l'environnement.

Note d'architecture:
- La config est construite au démarrage puis passée explicitement au gateway.
- Aucune lecture d'environnement ne doit avoir lieu pendant le traitement d'un
  message.
"""
import os
from dataclasses import dataclass
from typing import Mapping, Optional
from urllib.parse import urlparse

from ..core.constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_RUBE_ENDPOINT,
    DEFAULT_STREAM_LIMIT,
    MAX_STREAM_LIMIT,
    MIN_STREAM_LIMIT,
)
from ..core.exceptions import ConfigurationError


def _env_str(env: Mapping[str, str], name: str, *, default: str) -> str:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _env_int(env: Mapping[str, str], name: str, *, default: int) -> int:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _clamp_stream_limit(configured: int) -> int:
    if configured <= 0:
        return DEFAULT_STREAM_LIMIT
    return min(MAX_STREAM_LIMIT, max(MIN_STREAM_LIMIT, configured))


def _validate_endpoint(endpoint: str) -> str:
    parsed = urlparse(endpoint)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ConfigurationError(
            message=f"URL Rube invalide (attendu http(s)://hôte): {endpoint}",
            config_key="RUBE_ENDPOINT",
        )
    return endpoint.rstrip("/")


@dataclass(frozen=True)
class AdapterConfig:
    """Configuration de l'adapter (origine backend, token, logs)."""

    endpoint: str = DEFAULT_RUBE_ENDPOINT
    auth_token: str = ""
    log_level: str = DEFAULT_LOG_LEVEL
    stream_limit: int = DEFAULT_STREAM_LIMIT

    @property
    def authorization_header(self) -> str:
        # Token absent: header syntaxiquement valide (rejeté par Rube, pas de crash).
        return f"Bearer {self.auth_token}"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AdapterConfig":
        """
        Charge la configuration depuis les variables d'environnement.

        Args:
            env: Mapping à utiliser à la place de `os.environ` (tests)

        Returns:
            Instance AdapterConfig

        Raises:
            ConfigurationError: Si RUBE_ENDPOINT n'est pas une URL http(s)
        """
        if env is None:
            env = os.environ

        return cls(
            endpoint=_validate_endpoint(_env_str(env, "RUBE_ENDPOINT", default=DEFAULT_RUBE_ENDPOINT)),
            auth_token=env.get("RUBE_AUTH_TOKEN", "").strip(),
            log_level=_env_str(env, "RUBE_LOG_LEVEL", default=DEFAULT_LOG_LEVEL).upper(),
            stream_limit=_clamp_stream_limit(
                _env_int(env, "RUBE_STDIO_STREAM_LIMIT", default=DEFAULT_STREAM_LIMIT)
            ),
        )
