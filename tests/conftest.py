"""
Configuration des tests pytest.
"""
import json
import logging
import os
import sys

import pytest

# Ajoute src au path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))
# Ajoute tests/ au path (fixtures partagées)
sys.path.insert(0, os.path.dirname(__file__))


def pytest_configure(config):
    """Déclare les markers du projet."""
    config.addinivalue_line(
        "markers", "asyncio: marque un test comme asynchrone"
    )
    config.addinivalue_line(
        "markers", "unit: test unitaire sans I/O réseau réel"
    )


class FakeLineReader:
    """Reader stdin factice (duck-typing de asyncio.StreamReader.readline)."""

    def __init__(self, lines):
        self._lines = list(lines)

    async def readline(self) -> bytes:
        return self._lines.pop(0) if self._lines else b""


def encode_lines(*messages) -> list:
    """Encode des messages (dict ou str brute) en lignes stdin."""
    lines = []
    for message in messages:
        text = message if isinstance(message, str) else json.dumps(message)
        lines.append(text.encode("utf-8") + b"\n")
    return lines


@pytest.fixture
def make_reader():
    """Fabrique de FakeLineReader à partir de messages."""
    def _make(*messages):
        return FakeLineReader(encode_lines(*messages))
    return _make


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Restaure le logger du package (setup_logging coupe la propagation)."""
    logger = logging.getLogger("rube_mcp_adapter")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate
