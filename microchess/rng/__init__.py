"""
Seeded random streams.

This module provides:
- fnv1a_32: Seed string -> unsigned 32-bit integer
- Mulberry32Stream: Built-in float stream
- NumpyStream: Optional external float stream (requires numpy)
- create_stream: Algorithm selection with silent fallback
"""

from .streams import (
    MULBERRY32,
    NUMPY_PCG64,
    FloatStream,
    Mulberry32Stream,
    NumpyStream,
    fnv1a_32,
    numpy_available,
)
from .factory import StreamSelection, create_stream, reset_fallback_notice

__all__ = [
    "MULBERRY32",
    "NUMPY_PCG64",
    "FloatStream",
    "Mulberry32Stream",
    "NumpyStream",
    "fnv1a_32",
    "numpy_available",
    "StreamSelection",
    "create_stream",
    "reset_fallback_notice",
]
