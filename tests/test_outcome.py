"""Tests for outcome.py: check result classification.

Python 3.13+.
"""

from __future__ import annotations

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from poolcheck import CheckOutcome, Err, Ok, evaluate_check


class TestClassification:
    """Every supported return value maps to pass or fail."""

    @pytest.mark.parametrize(
        ("result", "failed"),
        [
            (None, False),
            (True, False),
            (False, True),
            (Ok(1), False),
            (Ok(None), False),
            (Err("bad"), True),
        ],
    )
    def test_results(self, result: object, failed: bool) -> None:
        """None, True and Ok pass; False and Err fail."""
        outcome = evaluate_check(lambda _: result, 0)

        assert outcome.failed is failed
        assert outcome.result == result
        assert not outcome.raised

    @pytest.mark.parametrize("result", [0, 1, "", "yes", [], object()])
    def test_unsupported_results_raise(self, result: object) -> None:
        """Truthy or falsy non-results are rejected, not coerced."""
        with pytest.raises(TypeError, match="unsupported type"):
            evaluate_check(lambda _: result, 0)

    @given(value=st.integers())
    def test_argument_passed_through(self, value: int) -> None:
        """PROPERTY: the subject receives the argument unchanged."""
        outcome = evaluate_check(lambda v: v == value, value)

        assert not outcome.failed


class TestRaisingSubjects:
    """Exceptions from the subject are failures."""

    def test_exception_captured(self, caplog: pytest.LogCaptureFixture) -> None:
        """The exception is stored on the outcome and logged at debug."""
        caplog.set_level(logging.DEBUG, logger="poolcheck.outcome")
        error = ValueError("Big bad boom")

        def explode(_: int) -> bool:
            raise error

        outcome = evaluate_check(explode, 0)

        assert outcome.failed
        assert outcome.raised
        assert outcome.error is error
        assert outcome.result is None
        assert outcome.describe_error() == "ValueError: Big bad boom"
        assert "ValueError" in caplog.text

    def test_base_exceptions_propagate(self) -> None:
        """KeyboardInterrupt is not a property failure."""

        def interrupt(_: int) -> bool:
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            evaluate_check(interrupt, 0)

    def test_describe_error_without_exception(self) -> None:
        """describe_error() is None when nothing was raised."""
        assert CheckOutcome(failed=True, result=False).describe_error() is None


class TestOkErr:
    """Result value types."""

    def test_equality_and_repr(self) -> None:
        """Ok and Err compare by payload and never equal each other."""
        assert Ok(1) == Ok(1)
        assert Ok(1) != Err(1)
        assert repr(Err("x")) == "Err(error='x')"

    def test_pattern_matching(self) -> None:
        """Ok and Err destructure in match statements."""
        match Err("boom"):
            case Err(error):
                assert error == "boom"
            case _:
                pytest.fail("Err did not match")
