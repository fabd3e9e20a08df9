"""Byte pools, byte sources and the pool shrinker.

Python 3.13+. Zero external dependencies.
"""

from .pool import InfoPool, Span
from .shrinkers import (
    IntervalShrinker,
    RemovalShrinker,
    ScalarShrinker,
    Shrinker,
    ShrinkPredicate,
    minimize,
)
from .source import InfoRecorder, InfoReplay, InfoSink, InfoSource, RngSource

__all__ = [
    "InfoPool",
    "InfoRecorder",
    "InfoReplay",
    "InfoSink",
    "InfoSource",
    "IntervalShrinker",
    "RemovalShrinker",
    "RngSource",
    "ScalarShrinker",
    "ShrinkPredicate",
    "Shrinker",
    "Span",
    "minimize",
]
