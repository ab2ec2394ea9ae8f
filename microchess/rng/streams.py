"""
Seeded float streams.

Every stream produces values in [0, 1) and is consumed exactly once per
ply. Streams are not rewindable: replay builds a new one from the seed.

Mulberry32 over an FNV-1a seed hash is the built-in algorithm. Historical
records depend on it, so its output must stay bit-for-bit stable.
"""

import hashlib
from abc import ABC, abstractmethod
from typing import Optional

try:
    import numpy as np
except ImportError:  # optional external generator
    np = None  # type: ignore

MASK_32 = 0xFFFFFFFF
TWO_POW_32 = 4294967296.0

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619
MULBERRY_INCREMENT = 0x6D2B79F5

MULBERRY32 = "mulberry32"
NUMPY_PCG64 = "numpy-pcg64"


def _code_units(text: str):
    """
    UTF-16 code units of text.

    Characters outside the BMP contribute their surrogate pair, which keeps
    seed hashes stable for records produced by earlier generators.
    """
    data = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def fnv1a_32(text: str) -> int:
    """
    Hash a seed string to an unsigned 32-bit integer (FNV-1a).

    Example:
        fnv1a_32("") -> 2166136261
    """
    h = FNV_OFFSET_BASIS
    for unit in _code_units(text):
        h = ((h ^ unit) * FNV_PRIME) & MASK_32
    return h


class FloatStream(ABC):
    """
    Deterministic source of floats in [0, 1).

    Instances are callable so the generator can treat them as plain
    draw functions.
    """

    name: str = ""

    @abstractmethod
    def next(self) -> float:
        ...

    def __call__(self) -> float:
        return self.next()

    @property
    def version(self) -> Optional[str]:
        return None


class Mulberry32Stream(FloatStream):
    """
    Mulberry32 mixing stream over 32-bit unsigned state.

    All arithmetic is reduced mod 2^32 at every step.
    """

    name = MULBERRY32

    def __init__(self, seed: int) -> None:
        self._t = seed & MASK_32

    @classmethod
    def from_seed(cls, seed: str) -> "Mulberry32Stream":
        return cls(fnv1a_32(seed))

    def next_uint32(self) -> int:
        t = (self._t + MULBERRY_INCREMENT) & MASK_32
        self._t = t
        r = ((t ^ (t >> 15)) * (t | 1)) & MASK_32
        r = (r ^ ((r + (((r ^ (r >> 7)) * (r | 61)) & MASK_32)) & MASK_32)) & MASK_32
        return (r ^ (r >> 14)) & MASK_32

    def next(self) -> float:
        return self.next_uint32() / TWO_POW_32


def numpy_available() -> bool:
    return np is not None


def numpy_seed(seed: str) -> int:
    """Seed string -> 64-bit integer for PCG64 (first 8 bytes of SHA-256)."""
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


class NumpyStream(FloatStream):
    """
    External generator: numpy PCG64 seeded from the seed string.

    Raises:
        RuntimeError: If numpy is not installed
    """

    name = NUMPY_PCG64

    def __init__(self, seed: str) -> None:
        if np is None:
            raise RuntimeError("numpy not installed (pip install numpy)")
        self._gen = np.random.Generator(np.random.PCG64(numpy_seed(seed)))

    def next(self) -> float:
        return float(self._gen.random())

    @property
    def version(self) -> Optional[str]:
        return np.__version__
