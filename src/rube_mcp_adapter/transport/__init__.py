"""
Transport stdio (lecture stdin, écriture stdout).
"""

from .stdio import (
    EnvelopeWriter,
    connect_stdin_reader,
    encode_envelope,
    run_loop,
)

__all__ = [
    "EnvelopeWriter",
    "connect_stdin_reader",
    "encode_envelope",
    "run_loop",
]
