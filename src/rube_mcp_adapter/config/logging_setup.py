"""
Configuration du logging (canal de diagnostic opérateur).

Important:
- stdout est réservé au flux JSON-RPC: tous les logs partent sur stderr.
"""
import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "WARNING", stream: Optional[TextIO] = None) -> logging.Handler:
    """
    Installe un handler unique sur le logger racine du package.

    Args:
        level: Niveau de log (DEBUG, INFO, WARNING, ...)
        stream: Flux de sortie (défaut: sys.stderr)

    Returns:
        Le handler installé
    """
    logger = logging.getLogger("rube_mcp_adapter")

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    # Ré-appel idempotent (tests, reload)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    logger.addHandler(handler)
    logger.setLevel(numeric_level)
    logger.propagate = False
    return handler
