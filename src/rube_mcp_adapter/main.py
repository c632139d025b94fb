"""
Rube MCP Adapter - assemblage du bridge stdio -> HTTP.

Lit les requêtes JSON-RPC sur stdin, les relaie vers l'API Rube et écrit
les réponses sur stdout.
"""
import logging
from typing import Optional

from .config.settings import AdapterConfig
from .core.models import make_initialize_notification
from .proxy.gateway import Gateway, create_gateway, create_http_client
from .transport.stdio import EnvelopeWriter, LineReader, connect_stdin_reader, run_loop

logger = logging.getLogger(__name__)


async def serve(
    config: AdapterConfig,
    reader: Optional[LineReader] = None,
    writer: Optional[EnvelopeWriter] = None,
    gateway: Optional[Gateway] = None,
) -> int:
    """
    Lance le bridge jusqu'à EOF sur stdin.

    Args:
        config: Configuration immuable (chargée une fois au démarrage)
        reader: Source des lignes (défaut: stdin)
        writer: Destination des enveloppes (défaut: stdout)
        gateway: Gateway Rube (défaut: httpx vers config.endpoint)

    Returns:
        Code de sortie du process
    """
    if writer is None:
        writer = EnvelopeWriter()

    logger.info("Rube MCP Adapter démarré, endpoint: %s", config.endpoint)

    # Notification non sollicitée: le client doit la tolérer.
    await writer.write(make_initialize_notification())

    if reader is None:
        reader = await connect_stdin_reader(config.stream_limit)

    if gateway is not None:
        await run_loop(reader, writer, gateway)
        return 0

    async with create_http_client() as client:
        await run_loop(reader, writer, create_gateway(config, client))
    return 0
