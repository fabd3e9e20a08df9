"""Generator base class and the value-transforming combinators.

A generator decodes one value from an InfoSource. It never touches
randomness itself, so the same bytes always produce the same value and
smaller bytes produce smaller values.

Generators are immutable: filter(), map() and friends return new
generators wrapping the original.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from poolcheck.diagnostics import ErrorTemplate, SkipItemError

if TYPE_CHECKING:
    from poolcheck.data import InfoPool, InfoSource

__all__ = [
    "FilterMapped",
    "Filtered",
    "FlatMapped",
    "Generator",
    "Mapped",
]


class Generator[T](ABC):
    """Decodes values of type ``T`` from a byte source.

    Subclasses implement generate(). Every generator is also an InfoSink,
    so it can be passed to ``source.draw()`` for a structural draw.
    """

    __slots__ = ()

    @abstractmethod
    def generate(self, source: InfoSource) -> T:
        """Produce one value, consuming bytes from ``source``.

        Raises:
            DataError: The bytes cannot produce a value (skip or exhaustion)
        """

    def generate_from(self, pool: InfoPool) -> T:
        """Produce one value by replaying ``pool`` from the start."""
        return self.generate(pool.replay())

    def filter(self, predicate: Callable[[T], bool]) -> Filtered[T]:
        """Skip values for which ``predicate`` is false."""
        return Filtered(self, predicate)

    def filter_map[R](self, fn: Callable[[T], R]) -> FilterMapped[T, R]:
        """Transform values; ``fn`` may raise SkipItemError to skip."""
        return FilterMapped(self, fn)

    def map[R](self, fn: Callable[[T], R]) -> Mapped[T, R]:
        """Transform every value with ``fn``."""
        return Mapped(self, fn)

    def flat_map[R](self, fn: Callable[[T], Generator[R]]) -> FlatMapped[T, R]:
        """Pick a second generator from the value of this one.

        The second generator is drawn structurally, so the bytes it consumes
        form one span whatever their count.
        """
        return FlatMapped(self, fn)


@dataclass(frozen=True, slots=True)
class Filtered[T](Generator[T]):
    inner: Generator[T]
    predicate: Callable[[T], bool]

    def generate(self, source: InfoSource) -> T:
        value = self.inner.generate(source)
        if not self.predicate(value):
            raise SkipItemError(ErrorTemplate.filter_rejected())
        return value


@dataclass(frozen=True, slots=True)
class FilterMapped[T, R](Generator[R]):
    inner: Generator[T]
    fn: Callable[[T], R]

    def generate(self, source: InfoSource) -> R:
        return self.fn(self.inner.generate(source))


@dataclass(frozen=True, slots=True)
class Mapped[T, R](Generator[R]):
    inner: Generator[T]
    fn: Callable[[T], R]

    def generate(self, source: InfoSource) -> R:
        return self.fn(self.inner.generate(source))


@dataclass(frozen=True, slots=True)
class FlatMapped[T, R](Generator[R]):
    inner: Generator[T]
    fn: Callable[[T], Generator[R]]

    def generate(self, source: InfoSource) -> R:
        follow_up: Generator[Any] = self.fn(self.inner.generate(source))
        return source.draw(follow_up)
