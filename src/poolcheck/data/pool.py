"""Recorded byte pools and the spans of structural draws inside them.

An InfoPool is the unit the shrinker works on: a flat byte buffer plus the
half-open ranges that structural draws consumed while it was recorded.
Generators only ever see the bytes; spans are shrinking metadata.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import random
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from poolcheck.constants import MAX_DEPTH

if TYPE_CHECKING:
    from .source import InfoReplay

__all__ = ["InfoPool", "Span"]


@dataclass(frozen=True, slots=True, order=True)
class Span:
    """Byte range ``[start, end)`` consumed by one structural draw.

    Attributes:
        start: Offset of the first byte drawn
        end: Offset one past the last byte drawn
        level: Nesting depth of the draw (0 = outermost)
    """

    start: int
    end: int
    level: int = 0

    def __post_init__(self) -> None:
        """Validate range bounds."""
        if self.start < 0:
            msg = f"Span start must be non-negative, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span end ({self.end}) must not precede start ({self.start})"
            raise ValueError(msg)
        if self.level < 0:
            msg = f"Span level must be non-negative, got {self.level}"
            raise ValueError(msg)

    @property
    def length(self) -> int:
        """Number of bytes covered."""
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        """True for draws that consumed no bytes."""
        return self.start == self.end

    def remove_from(self, data: bytes) -> bytes:
        """Return ``data`` with this span's bytes cut out."""
        return data[: self.start] + data[self.end :]

    def clip(self, limit: int) -> Span | None:
        """Restrict the span to ``[0, limit)``; None if nothing is left."""
        if self.start >= limit:
            return None
        if self.end <= limit:
            return self
        return Span(self.start, limit, self.level)


@dataclass(frozen=True, slots=True, order=True)
class InfoPool:
    """Immutable byte buffer with the spans recorded while it was drawn.

    Equality, ordering and hashing consider ``data`` only, so two pools with
    the same bytes are interchangeable inputs regardless of how they were
    recorded.

    Attributes:
        data: The raw bytes
        spans: Spans in recording order (children before their parent)
    """

    data: bytes
    spans: tuple[Span, ...] = field(default=(), compare=False, repr=False)

    def __post_init__(self) -> None:
        """Normalize buffer-like input to bytes."""
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))
        if not isinstance(self.spans, tuple):
            object.__setattr__(self, "spans", tuple(self.spans))

    @classmethod
    def of_bytes(cls, data: bytes | bytearray | list[int]) -> InfoPool:
        """Create a pool from literal bytes, with no spans."""
        return cls(bytes(data))

    @classmethod
    def random(cls, size: int, rng: random.Random | None = None) -> InfoPool:
        """Create a pool of ``size`` random bytes.

        Args:
            size: Number of bytes
            rng: Random generator to draw from (default: fresh Random())

        Returns:
            New pool without spans
        """
        if size < 0:
            msg = f"Pool size must be non-negative, got {size}"
            raise ValueError(msg)
        rng = rng if rng is not None else random.Random()  # noqa: S311 - test data
        return cls(rng.randbytes(size))

    @property
    def buffer(self) -> bytes:
        """The underlying bytes."""
        return self.data

    def __len__(self) -> int:
        return len(self.data)

    def replay(self, *, strict: bool = False, max_depth: int = MAX_DEPTH) -> InfoReplay:
        """Return a fresh source reading this pool from offset 0."""
        from .source import InfoReplay  # noqa: PLC0415 - circular

        return InfoReplay(self.data, strict=strict, max_depth=max_depth)

    def spans_iter(self) -> Iterator[Span]:
        """Iterate recorded spans, most recently recorded first."""
        return reversed(self.spans)

    def truncated(self, length: int) -> InfoPool:
        """Return the first ``length`` bytes, with spans clipped to match."""
        if length >= len(self.data):
            return self
        clipped = (span.clip(length) for span in self.spans)
        return InfoPool(self.data[:length], tuple(s for s in clipped if s is not None))

    def hex(self) -> str:
        """Space-separated hex dump of the buffer."""
        return self.data.hex(" ")

    def __repr__(self) -> str:
        return f"InfoPool(data=<{self.hex()}>, spans={list(self.spans)!r})"
