"""Tuple generator.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .base import Generator

if TYPE_CHECKING:
    from poolcheck.data import InfoSource

__all__ = ["TupleGenerator", "tuples"]


@dataclass(frozen=True, slots=True)
class TupleGenerator(Generator[tuple[Any, ...]]):
    """Draws each component in order, without structural draws of its own."""

    components: tuple[Generator[Any], ...]

    def generate(self, source: InfoSource) -> tuple[Any, ...]:
        return tuple(component.generate(source) for component in self.components)


def tuples(*components: Generator[Any]) -> TupleGenerator:
    """Tuples of any arity, e.g. ``tuples(u8s(), booleans())``."""
    return TupleGenerator(components)
