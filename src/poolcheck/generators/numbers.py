"""Integer and floating point generators.

Encoding rules:
    Unsigned: big-endian fold of ``width`` bytes, so byte order is value order
    Signed: unsigned draw; low bit clear means negative, magnitude is ``u >> 1``
    Float: same sign rule, ``u >> 1`` reinterpreted as IEEE-754 bits
    Uniform float: top mantissa bits of the draw scaled into ``[0, 1)``

All-zero bytes decode to 0 (or -0.0) for every generator here.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import TYPE_CHECKING

from poolcheck.constants import POINTER_WIDTH

from .base import Generator

if TYPE_CHECKING:
    from poolcheck.data import InfoSource

__all__ = [
    "FloatGenerator",
    "IntGenerator",
    "SignedIntGenerator",
    "UniformFloatGenerator",
    "UptoGenerator",
    "f32s",
    "f64s",
    "i8s",
    "i16s",
    "i32s",
    "i64s",
    "isizes",
    "scale_int",
    "u8s",
    "u16s",
    "u32s",
    "u64s",
    "uniform_f32s",
    "uniform_f64s",
    "uptos",
    "usizes",
]

_FLOAT_FORMATS = {4: ">f", 8: ">d"}

# Mantissa precision (including the implicit bit) per float width.
_MANTISSA_BITS = {4: 24, 8: 53}


def scale_int(value: int, limit: int, bits: int) -> int:
    """Map ``value`` in ``[0, 2**bits)`` onto ``[0, limit)``.

    Multiply-shift scaling: monotonic in ``value`` and free of modulo bias.
    A limit of 0 always yields 0.
    """
    return (value * limit) >> bits


def _fold(source: InfoSource, width: int) -> int:
    value = 0
    for _ in range(width):
        value = (value << 8) | source.draw_u8()
    return value


@dataclass(frozen=True, slots=True)
class IntGenerator(Generator[int]):
    """Unsigned integers of ``width`` bytes."""

    width: int

    def __post_init__(self) -> None:
        if self.width < 1:
            msg = f"Integer width must be at least 1 byte, got {self.width}"
            raise ValueError(msg)

    @property
    def bits(self) -> int:
        return self.width * 8

    def generate(self, source: InfoSource) -> int:
        return _fold(source, self.width)

    def upto(self, limit: int) -> UptoGenerator:
        """Integers in ``[0, limit)`` (always 0 when limit is 0)."""
        return uptos(self, limit)

    def between(self, low: int, high: int) -> Generator[int]:
        """Integers in the inclusive range ``[low, high]``."""
        if low > high:
            msg = f"Empty range: low ({low}) is greater than high ({high})"
            raise ValueError(msg)
        return uptos(self, high - low + 1).map(lambda value: value + low)


@dataclass(frozen=True, slots=True)
class SignedIntGenerator(Generator[int]):
    """Signed integers of ``width`` bytes, shrinking towards 0."""

    width: int

    def __post_init__(self) -> None:
        if self.width < 1:
            msg = f"Integer width must be at least 1 byte, got {self.width}"
            raise ValueError(msg)

    def generate(self, source: InfoSource) -> int:
        unsigned = _fold(source, self.width)
        magnitude = unsigned >> 1
        if unsigned & 1 == 0:
            return -magnitude
        return magnitude


@dataclass(frozen=True, slots=True)
class FloatGenerator(Generator[float]):
    """Arbitrary IEEE-754 floats, NaN and infinities included.

    Single precision values are widened to Python floats exactly.
    """

    width: int

    def __post_init__(self) -> None:
        if self.width not in _FLOAT_FORMATS:
            msg = f"Float width must be 4 or 8 bytes, got {self.width}"
            raise ValueError(msg)

    def generate(self, source: InfoSource) -> float:
        unsigned = _fold(source, self.width)
        pattern = (unsigned >> 1).to_bytes(self.width, "big")
        (value,) = struct.unpack(_FLOAT_FORMATS[self.width], pattern)
        if unsigned & 1 == 0:
            return -value
        return value


@dataclass(frozen=True, slots=True)
class UniformFloatGenerator(Generator[float]):
    """Floats evenly spread over ``[0, 1)``.

    Only as many high bits as the float type can hold exactly are used, so
    rounding can never produce 1.0. This differs from dividing the whole
    draw by its maximum, which could round up to 1.0 and so reach outside
    ``[0, 1)``.
    """

    width: int

    def __post_init__(self) -> None:
        if self.width not in _MANTISSA_BITS:
            msg = f"Float width must be 4 or 8 bytes, got {self.width}"
            raise ValueError(msg)

    def generate(self, source: InfoSource) -> float:
        precision = _MANTISSA_BITS[self.width]
        unsigned = _fold(source, self.width)
        return (unsigned >> (self.width * 8 - precision)) / (1 << precision)


@dataclass(frozen=True, slots=True)
class UptoGenerator(Generator[int]):
    """Unsigned draw scaled into ``[0, limit)``."""

    inner: IntGenerator
    limit: int

    def __post_init__(self) -> None:
        if self.limit < 0:
            msg = f"limit must be non-negative, got {self.limit}"
            raise ValueError(msg)

    def generate(self, source: InfoSource) -> int:
        return scale_int(self.inner.generate(source), self.limit, self.inner.bits)


def uptos(inner: IntGenerator, limit: int) -> UptoGenerator:
    """Integers from ``inner`` scaled into ``[0, limit)``."""
    return UptoGenerator(inner, limit)


def u8s() -> IntGenerator:
    return IntGenerator(1)


def u16s() -> IntGenerator:
    return IntGenerator(2)


def u32s() -> IntGenerator:
    return IntGenerator(4)


def u64s() -> IntGenerator:
    return IntGenerator(8)


def usizes() -> IntGenerator:
    """Pointer-sized (64-bit) unsigned integers."""
    return IntGenerator(POINTER_WIDTH)


def i8s() -> SignedIntGenerator:
    return SignedIntGenerator(1)


def i16s() -> SignedIntGenerator:
    return SignedIntGenerator(2)


def i32s() -> SignedIntGenerator:
    return SignedIntGenerator(4)


def i64s() -> SignedIntGenerator:
    return SignedIntGenerator(8)


def isizes() -> SignedIntGenerator:
    """Pointer-sized (64-bit) signed integers."""
    return SignedIntGenerator(POINTER_WIDTH)


def f32s() -> FloatGenerator:
    return FloatGenerator(4)


def f64s() -> FloatGenerator:
    return FloatGenerator(8)


def uniform_f32s() -> UniformFloatGenerator:
    return UniformFloatGenerator(4)


def uniform_f64s() -> UniformFloatGenerator:
    return UniformFloatGenerator(8)
