"""Performance benchmarks for value generation and recording.

Python 3.13+.
"""

from __future__ import annotations

import random

from poolcheck.data import InfoPool, InfoRecorder
from poolcheck.generators import booleans, one_of, tuples, u8s, u16s, u64s, vecs

_POOL = InfoPool.random(1 << 16, random.Random(0))


class TestGenerationBenchmarks:
    """Benchmark decoding values from a replayed pool."""

    def test_generate_u64s(self, benchmark) -> None:
        """Benchmark a single fixed-width integer."""
        gen = u64s()

        result = benchmark(gen.generate_from, _POOL)

        assert 0 <= result < 1 << 64

    def test_generate_vec_of_tuples(self, benchmark) -> None:
        """Benchmark a list of composite elements."""
        gen = vecs(tuples(u8s(), booleans(), u16s())).mean_length(50)

        result = benchmark(gen.generate_from, _POOL)

        assert isinstance(result, list)

    def test_generate_one_of(self, benchmark) -> None:
        """Benchmark alternative selection."""
        gen = vecs(one_of(u8s(), u16s(), u64s())).mean_length(20)

        result = benchmark(gen.generate_from, _POOL)

        assert isinstance(result, list)


class TestRecordingBenchmarks:
    """Benchmark span recording overhead."""

    def test_record_nested_vecs(self, benchmark) -> None:
        """Benchmark recording nested structural draws."""
        gen = vecs(vecs(u8s()).mean_length(8)).mean_length(8)

        def record() -> InfoPool:
            recorder = InfoRecorder(_POOL.replay())
            recorder.draw(gen)
            return recorder.into_pool()

        pool = benchmark(record)

        assert len(pool.spans) >= 1
