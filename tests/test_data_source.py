"""Tests for data/source.py: RngSource, InfoReplay and InfoRecorder.

Python 3.13+.
"""

from __future__ import annotations

import logging
import random

import pytest
from hypothesis import given

from poolcheck.core import DepthLimitExceededError
from poolcheck.data import InfoPool, InfoRecorder, InfoReplay, InfoSource, RngSource, Span
from poolcheck.diagnostics import DiagnosticCode, PoolExhaustedError
from poolcheck.generators import generator_fn, u16s, u8s, vecs
from tests.strategies import byte_buffers, simple_generators


def _take(source: InfoSource, n: int) -> list[int]:
    return [source.draw_u8() for _ in range(n)]


# ============================================================================
# RngSource
# ============================================================================


class TestRngSource:
    """Test the random byte source."""

    def test_seeded_sources_agree(self) -> None:
        """Two sources with the same seed produce the same bytes."""
        assert _take(RngSource.seeded(42), 100) == _take(RngSource.seeded(42), 100)

    def test_refills_past_chunk(self) -> None:
        """Draws beyond one chunk keep going."""
        source = RngSource(random.Random(1), chunk_size=4)

        assert len(source.draw_bytes(10)) == 10

    def test_chunking_does_not_change_stream(self) -> None:
        """The byte stream is independent of whole-chunk boundaries."""
        small = RngSource(random.Random(3), chunk_size=8)
        large = RngSource(random.Random(3), chunk_size=8)

        assert small.draw_bytes(8) + small.draw_bytes(8) == large.draw_bytes(16)

    def test_unseeded_source_records_seed(self) -> None:
        """A source without rng picks a seed that reproduces its stream."""
        source = RngSource()

        assert source.seed is not None
        assert _take(RngSource.seeded(source.seed), 16) == _take(source, 16)

    def test_rejects_non_positive_chunk(self) -> None:
        """chunk_size must be positive."""
        with pytest.raises(ValueError, match="chunk_size"):
            RngSource(chunk_size=0)


# ============================================================================
# InfoReplay
# ============================================================================


class TestInfoReplay:
    """Test replaying a recorded buffer."""

    def test_can_act_as_source(self) -> None:
        """Replay yields the buffer in order."""
        replay = InfoPool.of_bytes([4, 3, 2, 1]).replay()

        assert _take(replay, 4) == [4, 3, 2, 1]

    def test_zero_fills_past_end(self) -> None:
        """Reads beyond the buffer return 0 forever."""
        replay = InfoReplay(b"\x07")

        assert _take(replay, 4) == [7, 0, 0, 0]

    def test_strict_mode_raises(self) -> None:
        """Strict replays signal exhaustion instead of zero-filling."""
        replay = InfoReplay(b"\x07", strict=True)
        replay.draw_u8()

        with pytest.raises(PoolExhaustedError) as exc_info:
            replay.draw_u8()

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.POOL_EXHAUSTED

    def test_position_tracking(self) -> None:
        """position, remaining and is_exhausted follow the cursor."""
        replay = InfoReplay(b"\x01\x02")
        assert (replay.position, replay.remaining, replay.is_exhausted) == (0, 2, False)

        replay.draw_bytes(2)
        assert (replay.position, replay.remaining, replay.is_exhausted) == (2, 0, True)

    def test_structural_draw_passes_through(self) -> None:
        """draw() runs the sink against the replay itself."""
        replay = InfoReplay(b"\x01\x02")

        assert replay.draw(u16s()) == 0x0102

    def test_depth_limit_raises_skip(self) -> None:
        """Nesting beyond max_depth raises DepthLimitExceededError."""

        @generator_fn
        def bottomless(source: InfoSource) -> int:
            return source.draw(bottomless)

        with pytest.raises(DepthLimitExceededError):
            InfoReplay(b"", max_depth=10).draw(bottomless)


# ============================================================================
# InfoRecorder
# ============================================================================


class TestInfoRecorder:
    """Test byte and span recording."""

    def test_records_no_spans_for_primitive_draws(self) -> None:
        """Plain byte draws are recorded without spans."""
        recorder = InfoRecorder(RngSource.seeded(0))
        _take(recorder, 4)

        assert list(recorder.spans_iter()) == []
        assert len(recorder.buffer) == 4

    def test_records_child_reads(self) -> None:
        """A structural draw of four bytes records Span(0, 4)."""
        recorder = InfoRecorder(RngSource.seeded(0))
        recorder.draw(generator_fn(lambda src: _take(src, 4)))

        assert list(recorder.spans_iter()) == [Span(0, 4)]

    def test_mixed_child_reads(self) -> None:
        """Bytes drawn before and after a structural draw frame Span(2, 6)."""
        recorder = InfoRecorder(RngSource.seeded(0))
        _take(recorder, 2)
        recorder.draw(generator_fn(lambda src: _take(src, 4)))
        _take(recorder, 2)

        assert recorder.into_pool().spans == (Span(2, 6),)

    def test_span_slices_equal_drawn_values(self) -> None:
        """The bytes under a span are the bytes the sink saw."""
        buf = bytes([4, 3, 2, 1, 3, 4])
        recorder = InfoRecorder(InfoPool.of_bytes(buf).replay())
        _take(recorder, 2)
        seen = recorder.draw(generator_fn(lambda src: bytes(_take(src, 4))))

        assert [buf[s.start : s.end] for s in recorder.spans_iter()] == [seen]

    def test_works_recursively(self) -> None:
        """Nested draws record deeper levels; children precede parents."""

        @generator_fn
        def widget(source: InfoSource) -> list[int]:
            return [source.draw(generator_fn(lambda src: _take(src, 2))) for _ in range(4)]

        recorder = InfoRecorder(RngSource.seeded(0))
        recorder.draw(widget)
        spans = recorder.spans

        assert Span(2, 4, 1) in spans
        assert spans[-1] == Span(0, 8, 0)
        assert [s.level for s in spans[:-1]] == [1, 1, 1, 1]

    def test_span_recorded_when_sink_raises(self) -> None:
        """A failing sink still leaves its bytes and span in the recording."""

        @generator_fn
        def failing(source: InfoSource) -> int:
            source.draw_u8()
            msg = "boom"
            raise RuntimeError(msg)

        recorder = InfoRecorder(InfoReplay(b"\x05"))
        with pytest.raises(RuntimeError, match="boom"):
            recorder.draw(failing)

        assert recorder.buffer == b"\x05"
        assert recorder.spans == (Span(0, 1),)

    def test_recorder_of_recorder(self) -> None:
        """Both recorders of a stack record the same bytes and boundaries."""
        inner = InfoRecorder(InfoReplay(b"\x01\x02\x03"))
        outer = InfoRecorder(inner)
        outer.draw(u16s())
        outer.draw_u8()

        assert outer.buffer == inner.buffer == b"\x01\x02\x03"
        assert outer.spans == inner.spans == (Span(0, 2),)

    def test_depth_guard_enforced_through_recorder(self) -> None:
        """The wrapped source's depth limit applies to recorded draws."""

        @generator_fn
        def bottomless(source: InfoSource) -> int:
            return source.draw(bottomless)

        recorder = InfoRecorder(InfoReplay(b"", max_depth=5))
        with pytest.raises(DepthLimitExceededError):
            recorder.draw(bottomless)

        assert recorder.depth == 0

    def test_shares_wrapped_source_guard(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Recorders build no depth guard; they report the leaf source's depth."""
        source = InfoReplay(b"")
        built: list[int] = []
        monkeypatch.setattr(
            "poolcheck.data.source.DepthGuard",
            lambda *, max_depth: built.append(max_depth),
        )
        outer = InfoRecorder(InfoRecorder(source))
        depths = outer.draw(generator_fn(lambda src: (src.depth, source.depth)))

        assert built == []
        assert depths == (1, 1)
        assert outer.depth == source.depth == 0

    def test_logs_spans(self, caplog: pytest.LogCaptureFixture) -> None:
        """Each span is logged at debug level."""
        caplog.set_level(logging.DEBUG, logger="poolcheck.data.source")
        InfoRecorder(InfoReplay(b"\x01")).draw(u8s())

        assert "Span" in caplog.text


class TestRecorderProperties:
    """Property-based tests for recording."""

    @given(data=byte_buffers(), named=simple_generators())
    def test_recorded_pool_replays_same_value(self, data: bytes, named: tuple) -> None:
        """INVARIANT: replaying the recorded pool reproduces the value."""
        _, gen = named
        recorder = InfoRecorder(InfoReplay(data))
        value = recorder.draw(gen)

        assert recorder.into_pool().replay().draw(gen) == value

    @given(data=byte_buffers())
    def test_spans_nest_properly(self, data: bytes) -> None:
        """INVARIANT: spans lie inside the buffer and never partially overlap."""
        recorder = InfoRecorder(InfoReplay(data))
        recorder.draw(vecs(vecs(u8s()).mean_length(3)).mean_length(3))
        pool = recorder.into_pool()

        for span in pool.spans:
            assert 0 <= span.start <= span.end <= len(pool)
        for a in pool.spans:
            for b in pool.spans:
                disjoint = a.end <= b.start or b.end <= a.start
                nested = (a.start <= b.start and b.end <= a.end) or (
                    b.start <= a.start and a.end <= b.end
                )
                assert disjoint or nested
