"""Primitive generators and structural combinators.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from poolcheck.constants import BOOLEAN_THRESHOLD, MAX_DEPTH
from poolcheck.data.shrinkers import minimize
from poolcheck.diagnostics import DataError
from poolcheck.outcome import Err, Ok

from .base import Generator
from .numbers import scale_int, u32s, uniform_f32s

if TYPE_CHECKING:
    from poolcheck.data import InfoPool, InfoRecorder, InfoSource

__all__ = [
    "BoolGenerator",
    "Const",
    "LazyGenerator",
    "OneOfGenerator",
    "OptionalGenerator",
    "ResultGenerator",
    "WeightedCoinGenerator",
    "booleans",
    "consts",
    "find_minimal",
    "lazy",
    "one_of",
    "optional",
    "optional_by",
    "result",
    "weighted_coin",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BoolGenerator(Generator[bool]):
    """One byte; ``>= 0x80`` is True, so zero decodes to False."""

    def generate(self, source: InfoSource) -> bool:
        return source.draw_u8() >= BOOLEAN_THRESHOLD


@dataclass(frozen=True, slots=True)
class Const[T](Generator[T]):
    """Always ``value``; consumes no bytes."""

    value: T

    def generate(self, source: InfoSource) -> T:  # noqa: ARG002
        return self.value


@dataclass(frozen=True, slots=True)
class WeightedCoinGenerator(Generator[bool]):
    """True with probability ``p``.

    Draws a uniform float ``v`` and returns ``v > 1 - p``: low bytes give
    False, so the coin shrinks towards False.
    """

    p: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.p <= 1.0:
            msg = f"Probability must be within [0, 1], got {self.p}"
            raise ValueError(msg)

    def generate(self, source: InfoSource) -> bool:
        return uniform_f32s().generate(source) > 1.0 - self.p


@dataclass(frozen=True, slots=True)
class OptionalGenerator[T](Generator[T | None]):
    """``None`` or a value, decided by a boolean generator.

    Both the flag and the value are drawn structurally, so a None records
    one span and a value records two.
    """

    flags: Generator[bool]
    inner: Generator[T]

    def generate(self, source: InfoSource) -> T | None:
        if source.draw(self.flags):
            return source.draw(self.inner)
        return None


@dataclass(frozen=True, slots=True)
class ResultGenerator[T, E](Generator[Ok[T] | Err[E]]):
    """Ok or Err, chosen by a boolean; False (the minimum) picks Ok."""

    ok: Generator[T]
    err: Generator[E]

    def generate(self, source: InfoSource) -> Ok[T] | Err[E]:
        if BoolGenerator().generate(source):
            return Err(self.err.generate(source))
        return Ok(self.ok.generate(source))


@dataclass(frozen=True, slots=True)
class OneOfGenerator[T](Generator[T]):
    """Picks one of several alternatives.

    The index is a 32-bit draw scaled onto the alternatives, so zero bytes
    pick the first alternative and shrinking moves towards it.
    """

    alternatives: tuple[Generator[T], ...]

    def __post_init__(self) -> None:
        if not self.alternatives:
            msg = "one_of() requires at least one alternative"
            raise ValueError(msg)

    def or_(self, alternative: Generator[T]) -> OneOfGenerator[T]:
        """Return a generator with ``alternative`` appended."""
        return OneOfGenerator((*self.alternatives, alternative))

    def generate(self, source: InfoSource) -> T:
        index = scale_int(u32s().generate(source), len(self.alternatives), 32)
        return source.draw(self.alternatives[index])


@dataclass(frozen=True, slots=True)
class LazyGenerator[T](Generator[T]):
    """Builds its generator at draw time; enables recursive definitions."""

    thunk: Callable[[], Generator[T]]

    def generate(self, source: InfoSource) -> T:
        return self.thunk().generate(source)


def booleans() -> BoolGenerator:
    return BoolGenerator()


def consts[T](value: T) -> Const[T]:
    return Const(value)


def weighted_coin(p: float) -> WeightedCoinGenerator:
    return WeightedCoinGenerator(p)


def optional[T](inner: Generator[T]) -> OptionalGenerator[T]:
    """``None`` or a value from ``inner``, with even odds."""
    return OptionalGenerator(BoolGenerator(), inner)


def optional_by[T](flags: Generator[bool], inner: Generator[T]) -> OptionalGenerator[T]:
    """``None`` or a value from ``inner``, decided by ``flags``."""
    return OptionalGenerator(flags, inner)


def result[T, E](ok: Generator[T], err: Generator[E]) -> ResultGenerator[T, E]:
    return ResultGenerator(ok, err)


def one_of[T](*alternatives: Generator[T]) -> OneOfGenerator[T]:
    """Pick between ``alternatives``; extend later with ``.or_()``.

    Example:
        >>> gen = one_of(consts(1)).or_(consts(2)).or_(consts(3))
    """
    return OneOfGenerator(tuple(alternatives))


def lazy[T](thunk: Callable[[], Generator[T]]) -> LazyGenerator[T]:
    return LazyGenerator(thunk)


def find_minimal[T](
    gen: Generator[T],
    pool: InfoPool,
    check: Callable[[T], bool],
    *,
    max_depth: int = MAX_DEPTH,
) -> InfoPool:
    """Return the smallest pool from which ``gen`` produces a value passing ``check``.

    Candidates that ``gen`` cannot decode count as not passing.

    Args:
        gen: Generator to decode candidates with
        pool: Starting pool (``check`` should hold for its value)
        check: Acceptance test for decoded values
        max_depth: Nesting limit candidates are decoded under

    Returns:
        The minimized pool, or ``pool`` when nothing smaller passes
    """

    def accepts(recorder: InfoRecorder) -> bool:
        try:
            value = recorder.draw(gen)
        except DataError as e:
            logger.debug("Candidate rejected by generator: %s", e)
            return False
        return bool(check(value))

    return minimize(pool, accepts, max_depth=max_depth)
