"""
Point d'entrée pour `python -m rube_mcp_adapter`.
"""
import asyncio
import logging
import signal
import sys

from .config import AdapterConfig, setup_logging
from .core.exceptions import ConfigurationError
from .main import serve

logger = logging.getLogger("rube_mcp_adapter")


async def _run(config: AdapterConfig) -> int:
    # SIGTERM -> annulation de la tâche principale (sortie propre, code 0)
    loop = asyncio.get_running_loop()
    task = asyncio.current_task()
    try:
        loop.add_signal_handler(signal.SIGTERM, task.cancel)
        handles_sigterm = True
    except (NotImplementedError, RuntimeError, ValueError):
        # Windows ou thread secondaire: pas de add_signal_handler
        handles_sigterm = False

    try:
        return await serve(config)
    except asyncio.CancelledError:
        logger.info("Arrêt demandé (SIGTERM)")
        return 0
    finally:
        if handles_sigterm:
            loop.remove_signal_handler(signal.SIGTERM)


def main():
    """Fonction principale."""
    try:
        config = AdapterConfig.from_env()
    except ConfigurationError as e:
        sys.stderr.write(f"rube-mcp-adapter: {e}\n")
        sys.exit(1)

    setup_logging(config.log_level)

    try:
        code = asyncio.run(_run(config))
    except KeyboardInterrupt:
        logger.info("Bridge interrompu")
        code = 0

    sys.exit(code)


if __name__ == "__main__":
    main()
