"""
Stream selection.

The algorithm is chosen once per stream, at construction. The chosen name
is persisted with every record so that replay can ask for the same one.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from .streams import (
    MULBERRY32,
    NUMPY_PCG64,
    FloatStream,
    Mulberry32Stream,
    NumpyStream,
    numpy_available,
)

logger = logging.getLogger(__name__)

_fallback_logged = False
_fallback_lock = threading.Lock()


@dataclass(frozen=True)
class StreamSelection:
    """
    Result of create_stream().

    Fields:
        stream: Fresh float stream
        name: Algorithm actually used
        version: Algorithm version, when known
    """
    stream: FloatStream
    name: str
    version: Optional[str]


def _log_fallback_once(requested: str) -> None:
    global _fallback_logged
    with _fallback_lock:
        if _fallback_logged:
            return
        _fallback_logged = True
    logger.warning(
        "RNG %s requested but numpy is not installed; falling back to %s",
        requested,
        MULBERRY32,
    )


def reset_fallback_notice() -> None:
    """Allow the fallback notice to be logged again (tests)."""
    global _fallback_logged
    with _fallback_lock:
        _fallback_logged = False


def create_stream(
    seed: str,
    prefer_external: bool = False,
    algorithm: Optional[str] = None,
) -> StreamSelection:
    """
    Build a new float stream for seed.

    Args:
        seed: Seed string
        prefer_external: Use the numpy generator when available
        algorithm: Persisted algorithm name; overrides prefer_external

    Returns:
        StreamSelection with the stream and the algorithm actually used
    """
    if algorithm:
        if algorithm not in (MULBERRY32, NUMPY_PCG64):
            logger.warning("Unknown RNG algorithm %r; using %s", algorithm, MULBERRY32)
        want_external = algorithm == NUMPY_PCG64
    else:
        want_external = prefer_external

    if want_external:
        if numpy_available():
            stream = NumpyStream(seed)
            return StreamSelection(stream=stream, name=stream.name, version=stream.version)
        _log_fallback_once(NUMPY_PCG64)

    stream = Mulberry32Stream.from_seed(seed)
    return StreamSelection(stream=stream, name=stream.name, version=None)
