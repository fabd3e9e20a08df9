"""Collection generators.

Collections are built with a geometric continuation: before each element
a weighted coin decides whether to carry on. All-zero bytes stop at once,
so every collection shrinks towards empty, and each element is a separate
structural draw the shrinker can cut out.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from poolcheck.constants import DEFAULT_COLLECTION_MEAN_LENGTH, DEFAULT_VEC_MEAN_LENGTH
from poolcheck.data import InfoPool
from poolcheck.diagnostics import ErrorTemplate, SkipItemError

from .base import Generator
from .core import OptionalGenerator, optional_by, weighted_coin
from .numbers import uptos, usizes

if TYPE_CHECKING:
    from poolcheck.data import InfoSource

__all__ = [
    "ChoiceGenerator",
    "CollectionGenerator",
    "InfoPoolGenerator",
    "VecGenerator",
    "choice",
    "collections",
    "info_pools",
    "vecs",
]

logger = logging.getLogger(__name__)


def _singleton[T](value: T) -> tuple[T]:
    return (value,)


def _continuation[T](inner: Generator[T], mean: int) -> OptionalGenerator[tuple[T]]:
    # Elements are boxed so that an inner None is not read as the end.
    p_is_final = 1.0 / (1.0 + mean)
    return optional_by(weighted_coin(1.0 - p_is_final), inner.map(_singleton))


def _draw_elements[T](source: InfoSource, inner: Generator[T], mean: int) -> list[T]:
    element = _continuation(inner, mean)
    items: list[T] = []
    while (boxed := source.draw(element)) is not None:
        items.append(boxed[0])
    return items


def _validate_mean(mean: int) -> None:
    if mean < 0:
        msg = f"Mean length must be non-negative, got {mean}"
        raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class VecGenerator[T](Generator[list[T]]):
    """Lists of values from ``inner``.

    A list of ``k`` elements performs ``k + 1`` structural draws, the last
    one being the None that ends it.
    """

    inner: Generator[T]
    mean: int = DEFAULT_VEC_MEAN_LENGTH

    def __post_init__(self) -> None:
        _validate_mean(self.mean)

    def mean_length(self, mean: int) -> VecGenerator[T]:
        """Return a copy whose lists average ``mean`` elements."""
        return dataclasses.replace(self, mean=mean)

    def generate(self, source: InfoSource) -> list[T]:
        return _draw_elements(source, self.inner, self.mean)


@dataclass(frozen=True, slots=True)
class CollectionGenerator[T, C](Generator[C]):
    """Any collection built by ``factory`` from an iterable of elements."""

    inner: Generator[T]
    factory: Callable[[Iterable[T]], C]
    mean: int = DEFAULT_COLLECTION_MEAN_LENGTH

    def __post_init__(self) -> None:
        _validate_mean(self.mean)

    def mean_length(self, mean: int) -> CollectionGenerator[T, C]:
        """Return a copy whose collections average ``mean`` insertions."""
        return dataclasses.replace(self, mean=mean)

    def generate(self, source: InfoSource) -> C:
        return self.factory(_draw_elements(source, self.inner, self.mean))


@dataclass(frozen=True, slots=True)
class ChoiceGenerator[T](Generator[T]):
    """One item of a fixed sequence, shrinking towards the first."""

    items: tuple[T, ...]

    def generate(self, source: InfoSource) -> T:
        if not self.items:
            logger.warning("Empty instance of ChoiceGenerator")
            raise SkipItemError(ErrorTemplate.empty_choice())
        offset = source.draw(uptos(usizes(), len(self.items)))
        return self.items[offset]


@dataclass(frozen=True, slots=True)
class InfoPoolGenerator(Generator[InfoPool]):
    """Pools of exactly ``length`` drawn bytes."""

    length: int

    def __post_init__(self) -> None:
        if self.length < 0:
            msg = f"Pool length must be non-negative, got {self.length}"
            raise ValueError(msg)

    def generate(self, source: InfoSource) -> InfoPool:
        return InfoPool.of_bytes(source.draw_bytes(self.length))


def vecs[T](inner: Generator[T]) -> VecGenerator[T]:
    return VecGenerator(inner)


def collections[T, C](
    inner: Generator[T],
    factory: Callable[[Iterable[T]], C],
) -> CollectionGenerator[T, C]:
    """Collections such as sets or deques, e.g. ``collections(u8s(), set)``."""
    return CollectionGenerator(inner, factory)


def choice[T](items: Sequence[T]) -> ChoiceGenerator[T]:
    return ChoiceGenerator(tuple(items))


def info_pools(length: int) -> InfoPoolGenerator:
    return InfoPoolGenerator(length)
