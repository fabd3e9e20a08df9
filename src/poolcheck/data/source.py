"""Byte sources that generators decode values from.

Generators never see randomness directly. They pull bytes one at a time
from an InfoSource and mark composite values with structural draws
(``source.draw(sink)``) so that a recorder can note which byte range
produced which sub-value.

Sources:
    RngSource: Endless pseudo-random bytes, refilled in chunks
    InfoReplay: Replays a fixed buffer, zero-filled past its end
    InfoRecorder: Wraps another source and records bytes and spans

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import random
import secrets
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Protocol

from poolcheck.constants import DEFAULT_POOL_SIZE, MAX_DEPTH
from poolcheck.core.depth_guard import DepthGuard
from poolcheck.diagnostics import ErrorTemplate, PoolExhaustedError

from .pool import InfoPool, Span

__all__ = [
    "InfoRecorder",
    "InfoReplay",
    "InfoSink",
    "InfoSource",
    "RngSource",
]

logger = logging.getLogger(__name__)


class InfoSink[T](Protocol):
    """Anything that can consume bytes from a source to produce a value."""

    def generate(self, source: InfoSource) -> T: ...


class InfoSource(ABC):
    """Abstract stream of bytes.

    Leaf sources (RngSource, InfoReplay) run structural draws inside a
    DepthGuard. InfoRecorder forwards structural draws to the source it
    wraps, so the guard applies exactly once per level whatever the stack
    of wrappers.
    """

    __slots__ = ("_depth_guard",)

    def __init__(
        self,
        *,
        max_depth: int = MAX_DEPTH,
        depth_guard: DepthGuard | None = None,
    ) -> None:
        # Wrappers pass the wrapped source's guard instead of building one.
        if depth_guard is None:
            depth_guard = DepthGuard(max_depth=max_depth)
        self._depth_guard = depth_guard

    @abstractmethod
    def draw_u8(self) -> int:
        """Return the next byte (0-255)."""

    def draw[T](self, sink: InfoSink[T]) -> T:
        """Structural draw: let ``sink`` consume bytes as one unit.

        Raises:
            DepthLimitExceededError: Nesting deeper than max_depth
        """
        with self._depth_guard:
            return sink.generate(self)

    def draw_bytes(self, n: int) -> bytes:
        """Return ``n`` consecutive bytes."""
        return bytes(self.draw_u8() for _ in range(n))

    @property
    def depth(self) -> int:
        """Current structural nesting depth."""
        return self._depth_guard.depth


class RngSource(InfoSource):
    """Infinite source of pseudo-random bytes.

    Bytes are pre-drawn from ``rng`` in chunks of ``chunk_size`` and
    refilled whenever the chunk runs out.

    Attributes:
        seed: Seed used when the source created its own generator, else None
    """

    __slots__ = ("_buffer", "_chunk_size", "_offset", "_rng", "seed")

    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        chunk_size: int = DEFAULT_POOL_SIZE,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        super().__init__(max_depth=max_depth)
        if chunk_size < 1:
            msg = f"chunk_size must be positive, got {chunk_size}"
            raise ValueError(msg)
        self.seed: int | None = None
        if rng is None:
            self.seed = secrets.randbits(64)
            rng = random.Random(self.seed)  # noqa: S311 - test data, not crypto
        self._rng = rng
        self._chunk_size = chunk_size
        self._buffer = b""
        self._offset = 0

    @classmethod
    def seeded(
        cls,
        seed: int,
        *,
        chunk_size: int = DEFAULT_POOL_SIZE,
        max_depth: int = MAX_DEPTH,
    ) -> RngSource:
        """Create a reproducible source from an explicit seed."""
        source = cls(
            random.Random(seed),  # noqa: S311 - test data, not crypto
            chunk_size=chunk_size,
            max_depth=max_depth,
        )
        source.seed = seed
        return source

    def draw_u8(self) -> int:
        if self._offset >= len(self._buffer):
            self._buffer = self._rng.randbytes(self._chunk_size)
            self._offset = 0
        byte = self._buffer[self._offset]
        self._offset += 1
        return byte


class InfoReplay(InfoSource):
    """Replays a fixed buffer from offset 0.

    Past the end of the buffer every read returns 0, which decodes to the
    minimal value of every generator. With ``strict=True`` such a read
    raises PoolExhaustedError instead.
    """

    __slots__ = ("_data", "_offset", "_strict")

    def __init__(
        self,
        data: bytes,
        *,
        strict: bool = False,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        super().__init__(max_depth=max_depth)
        self._data = bytes(data)
        self._offset = 0
        self._strict = strict

    def draw_u8(self) -> int:
        if self._offset < len(self._data):
            byte = self._data[self._offset]
            self._offset += 1
            return byte
        if self._strict:
            raise PoolExhaustedError(ErrorTemplate.pool_exhausted(self._offset))
        return 0

    @property
    def position(self) -> int:
        """Offset of the next byte to be read."""
        return self._offset

    @property
    def remaining(self) -> int:
        """Bytes left before zero fill (or exhaustion) starts."""
        return len(self._data) - self._offset

    @property
    def is_exhausted(self) -> bool:
        """True once every recorded byte has been read."""
        return self._offset >= len(self._data)


class _Redirect[T]:
    """Runs ``sink`` against the recorder rather than the wrapped source."""

    __slots__ = ("_recorder", "_sink")

    def __init__(self, recorder: InfoRecorder, sink: InfoSink[T]) -> None:
        self._recorder = recorder
        self._sink = sink

    def generate(self, source: InfoSource) -> T:  # noqa: ARG002 - wrapped source
        return self._sink.generate(self._recorder)


class InfoRecorder(InfoSource):
    """Source wrapper recording every byte drawn and every structural span.

    Nested structural draws push their spans before the enclosing one, so
    ``spans`` lists children before parents. A span is recorded even when
    the sink raises, keeping the buffer in step with the wrapped source.

    Example:
        >>> recorder = InfoRecorder(InfoPool.of_bytes([1, 2, 3]).replay())
        >>> recorder.draw(u16s())
        258
        >>> recorder.into_pool().spans
        (Span(start=0, end=2, level=0),)
    """

    __slots__ = ("_data", "_inner", "_level", "_spans")

    def __init__(self, inner: InfoSource, *, level: int = 0) -> None:
        super().__init__(depth_guard=inner._depth_guard)  # noqa: SLF001
        self._inner = inner
        self._data = bytearray()
        self._spans: list[Span] = []
        self._level = level

    def draw_u8(self) -> int:
        byte = self._inner.draw_u8()
        self._data.append(byte)
        return byte

    def draw[T](self, sink: InfoSink[T]) -> T:
        start = len(self._data)
        level = self._level
        self._level += 1
        try:
            return self._inner.draw(_Redirect(self, sink))
        finally:
            self._level = level
            span = Span(start, len(self._data), level)
            logger.debug("Span: %s", span)
            self._spans.append(span)

    @property
    def buffer(self) -> bytes:
        """Bytes recorded so far."""
        return bytes(self._data)

    @property
    def spans(self) -> tuple[Span, ...]:
        """Spans recorded so far, in recording order."""
        return tuple(self._spans)

    def spans_iter(self) -> Iterator[Span]:
        """Iterate recorded spans, most recently recorded first."""
        return reversed(self.spans)

    def into_pool(self) -> InfoPool:
        """Snapshot the recording as an immutable pool."""
        return InfoPool(bytes(self._data), tuple(self._spans))
