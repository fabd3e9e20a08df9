"""Generators written as plain functions of a byte source.

Useful when a value needs imperative decoding logic, for example drawing a
length and then that many elements:

    >>> @generator_fn
    ... def pairs(source):
    ...     n = source.draw(u8s().upto(4))
    ...     return [source.draw(u8s()) for _ in range(n)]

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .base import Generator

if TYPE_CHECKING:
    from poolcheck.data import InfoSource

__all__ = ["FnGenerator", "generator_fn"]


@dataclass(frozen=True, slots=True)
class FnGenerator[T](Generator[T]):
    fn: Callable[[InfoSource], T]

    def generate(self, source: InfoSource) -> T:
        return self.fn(source)


def generator_fn[T](fn: Callable[[InfoSource], T]) -> FnGenerator[T]:
    """Wrap ``fn(source) -> value`` as a generator; usable as a decorator."""
    return FnGenerator(fn)
