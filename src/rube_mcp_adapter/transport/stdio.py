"""rube_mcp_adapter.transport.stdio

Transport stdio: lecture ligne à ligne (stdin) et écriture des enveloppes
JSON-RPC (stdout).

Important:
- Ne jamais écrire de logs sur stdout (sinon corruption JSON-RPC).
- Chaque ligne reçue est traitée dans sa propre tâche asyncio: les réponses
  sont écrites dans l'ordre de complétion, pas dans l'ordre d'arrivée. Le
  client corrèle par `id`.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Protocol, TextIO

from ..core.constants import INTERNAL_ERROR, PARSE_ERROR
from ..core.models import make_error
from ..proxy.gateway import Gateway
from ..rpc.dispatcher import dispatch_line

logger = logging.getLogger(__name__)


class LineReader(Protocol):
    async def readline(self) -> bytes: ...


async def connect_stdin_reader(limit: int) -> asyncio.StreamReader:
    """Retourne un StreamReader non-bloquant connecté à stdin (binaire)."""

    loop = asyncio.get_running_loop()
    # IMPORTANT: la limite par défaut (64KiB) peut faire échouer readline()
    # sur des requêtes JSON-RPC volumineuses (gros arguments d'outil).
    reader = asyncio.StreamReader(limit=limit)
    protocol = asyncio.StreamReaderProtocol(reader)
    await loop.connect_read_pipe(lambda: protocol, sys.stdin.buffer)
    return reader


def encode_envelope(envelope: dict[str, object]) -> str:
    """Sérialise une enveloppe en une ligne JSON compacte terminée par '\\n'.

    Les caractères non ASCII restent lisibles, sauf si la ligne contient un
    surrogate isolé (ex: emoji tronqué côté Rube): elle est alors échappée
    intégralement en ASCII (`\\ud83d`), seule forme encodable en UTF-8.

    Raises:
        ValueError: si l'enveloppe contient NaN / Infinity.
    """
    line = json.dumps(envelope, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
    try:
        line.encode("utf-8")
    except UnicodeEncodeError:
        line = json.dumps(envelope, ensure_ascii=True, allow_nan=False, separators=(",", ":"))
    return line + "\n"


class EnvelopeWriter:
    """Écrit des enveloppes JSON-RPC, une par ligne, sans entrelacement.

    Chaque enveloppe part en un seul `write()` suivi d'un `flush()`, sous
    verrou: deux réponses concurrentes ne peuvent pas mélanger leurs octets.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = asyncio.Lock()
        self.written_total = 0

    @property
    def stream(self) -> TextIO:
        # Résolu à l'écriture: sys.stdout peut être remplacé (tests).
        return self._stream if self._stream is not None else sys.stdout

    async def write(self, envelope: dict[str, object]) -> None:
        # Sérialisé hors verrou: un échec d'encodage n'écrit rien.
        line = encode_envelope(envelope)
        async with self._lock:
            stream = self.stream
            stream.write(line)
            stream.flush()
            self.written_total += 1


async def _process_line(line: str, gateway: Gateway, writer: EnvelopeWriter) -> None:
    envelope = await dispatch_line(line, gateway)
    if envelope is None:
        return
    try:
        try:
            await writer.write(envelope)
        except ValueError as e:
            # Résultat Rube non réémissible (NaN / Infinity): -32603 à la place.
            logger.error("Réponse non sérialisable (id=%r): %s", envelope.get("id"), e)
            await writer.write(make_error(envelope.get("id"), INTERNAL_ERROR))
    except OSError as e:
        # stdout fermé par le client: rien d'autre à faire que tracer.
        logger.error("Écriture stdout impossible (id=%r): %s", envelope.get("id"), e)


def _overrun_left_line_open(error: ValueError) -> bool:
    # StreamReader.readline: "Separator is not found, and chunk exceed the limit"
    # -> seul le début de la ligne a été jeté, la suite arrive encore.
    return "not found" in str(error)


async def run_loop(reader: LineReader, writer: EnvelopeWriter, gateway: Gateway) -> int:
    """Boucle pull: lit une ligne, lance son traitement, lit la suivante.

    Returns:
        Le nombre de lignes non vides traitées.

    Une ligne trop longue donne une seule erreur -32700, même si elle arrive
    en plusieurs morceaux: la fin est ignorée jusqu'au prochain '\\n'.

    À EOF, attend la fin des requêtes encore en vol avant de rendre la main.
    En cas d'annulation (signal d'arrêt), les requêtes en vol sont annulées
    sans rien écrire.
    """

    inflight: set[asyncio.Task[None]] = set()
    processed = 0
    discarding = False

    try:
        while True:
            try:
                raw = await reader.readline()
            except ValueError as e:
                if discarding:
                    discarding = _overrun_left_line_open(e)
                    continue
                logger.error("Ligne stdin trop volumineuse (RUBE_STDIO_STREAM_LIMIT): %s", e)
                await writer.write(make_error(None, PARSE_ERROR))
                discarding = _overrun_left_line_open(e)
                continue

            if not raw:
                break

            if discarding:
                # Fin de la ligne trop longue (ou fragment final avant EOF)
                discarding = not raw.endswith(b"\n")
                continue

            line = raw.decode("utf-8", errors="replace").strip()
            if not line:
                continue

            processed += 1
            task = asyncio.create_task(_process_line(line, gateway, writer))
            inflight.add(task)
            task.add_done_callback(inflight.discard)

        if inflight:
            await asyncio.gather(*inflight)
    except asyncio.CancelledError:
        for task in list(inflight):
            task.cancel()
        await asyncio.gather(*inflight, return_exceptions=True)
        raise

    logger.debug(
        "EOF stdin: %d message(s) traité(s), %d enveloppe(s) écrite(s)",
        processed,
        writer.written_total,
    )
    return processed
