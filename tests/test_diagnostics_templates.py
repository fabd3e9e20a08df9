"""Property-based tests for diagnostics/templates.py: ErrorTemplate.

Each factory is tested for code assignment and message content.

Python 3.13+.
"""

from __future__ import annotations

from hypothesis import event, given
from hypothesis import strategies as st

from poolcheck.diagnostics import DiagnosticCode, ErrorCategory, ErrorTemplate

_reprs = st.text(min_size=1, max_size=60)
_hex = st.binary(max_size=32).map(lambda b: b.hex(" "))
_seeds = st.none() | st.integers(min_value=0, max_value=(1 << 64) - 1)
_counts = st.integers(min_value=0, max_value=10_000)


class TestDataTemplates:
    """Templates for decoding errors (1000-1999)."""

    @given(position=_counts)
    def test_pool_exhausted(self, position: int) -> None:
        """PROPERTY: pool_exhausted names the offset."""
        d = ErrorTemplate.pool_exhausted(position)

        assert d.code == DiagnosticCode.POOL_EXHAUSTED
        assert str(position) in d.message
        assert d.hint is not None

    @given(reason=_reprs)
    def test_skip_item(self, reason: str) -> None:
        """PROPERTY: skip_item carries the reason."""
        d = ErrorTemplate.skip_item(reason)

        assert d.code == DiagnosticCode.SKIP_ITEM
        assert reason in d.message

    def test_fixed_templates(self) -> None:
        """Argument-free templates have their codes and hints."""
        for d, code in [
            (ErrorTemplate.filter_rejected(), DiagnosticCode.FILTER_REJECTED),
            (ErrorTemplate.empty_choice(), DiagnosticCode.EMPTY_CHOICE),
        ]:
            assert d.code == code
            assert d.hint
            assert d.code.category == ErrorCategory.DATA

    @given(max_depth=st.integers(min_value=1, max_value=1000))
    def test_depth_exceeded(self, max_depth: int) -> None:
        """PROPERTY: depth_exceeded names the limit."""
        d = ErrorTemplate.depth_exceeded(max_depth)

        assert d.code == DiagnosticCode.DEPTH_EXCEEDED
        assert f"({max_depth})" in d.message


class TestPropertyTemplates:
    """Templates for property errors (2000-2999)."""

    @given(argument=_reprs, check_result=_reprs, pool=_hex, seed=_seeds)
    def test_predicate_failed(
        self, argument: str, check_result: str, pool: str, seed: int | None
    ) -> None:
        """PROPERTY: predicate_failed carries every field."""
        event(f"seeded={seed is not None}")
        d = ErrorTemplate.predicate_failed(argument, check_result, pool, seed)

        assert d.code == DiagnosticCode.PREDICATE_FAILED
        assert d.message == f"Predicate failed for argument {argument}"
        assert (d.argument, d.check_result, d.pool, d.seed) == (argument, check_result, pool, seed)
        assert d.raised is None

    @given(argument=_reprs, raised=_reprs, pool=_hex, seed=_seeds)
    def test_predicate_raised(self, argument: str, raised: str, pool: str, seed: int | None) -> None:
        """PROPERTY: predicate_raised puts the exception text in the message."""
        d = ErrorTemplate.predicate_raised(argument, raised, pool, seed)

        assert d.code == DiagnosticCode.PREDICATE_RAISED
        assert d.message.endswith(f"; raised {raised}")
        assert d.raised == raised
        assert d.check_result is None

    @given(tests_run=_counts, num_tests=_counts, skipped=_counts)
    def test_skip_budget_exhausted(self, tests_run: int, num_tests: int, skipped: int) -> None:
        """PROPERTY: the message reports progress and skip count."""
        d = ErrorTemplate.skip_budget_exhausted(tests_run, num_tests, skipped)

        assert d.code == DiagnosticCode.SKIP_BUDGET_EXHAUSTED
        assert d.message == (
            f"Could not complete {tests_run}/{num_tests} tests (have skipped {skipped} times)"
        )
        assert d.code.category == ErrorCategory.PROPERTY

    def test_unsupported_check_result(self) -> None:
        """The returned type is named."""
        d = ErrorTemplate.unsupported_check_result("int")

        assert d.code == DiagnosticCode.UNSUPPORTED_CHECK_RESULT
        assert "'int'" in d.message
