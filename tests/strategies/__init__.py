"""Hypothesis strategies for poolcheck property-based testing.

Usage:
    from tests.strategies import info_pools, simple_generators
"""

from .pools import byte_buffers, info_pools, simple_generators

__all__ = [
    "byte_buffers",
    "info_pools",
    "simple_generators",
]
