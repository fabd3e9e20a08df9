"""Tests for core/depth_guard.py.

Tests DepthGuard context manager, explicit check(), and depth_clamp().

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from poolcheck.constants import MAX_DEPTH
from poolcheck.core import DepthGuard, DepthLimitExceededError, depth_clamp
from poolcheck.diagnostics import DataError, DiagnosticCode, ErrorCategory, SkipItemError

# ============================================================================
# Construction
# ============================================================================


class TestDepthGuardConstruction:
    """Test DepthGuard construction and defaults."""

    def test_default_construction(self) -> None:
        """DepthGuard uses MAX_DEPTH by default."""
        guard = DepthGuard()

        assert guard.max_depth == MAX_DEPTH
        assert guard.current_depth == 0

    def test_post_init_clamps_max_depth(self) -> None:
        """__post_init__ clamps max_depth against the recursion limit."""
        limit = sys.getrecursionlimit()
        guard = DepthGuard(max_depth=limit + 1000)

        assert guard.max_depth == limit - 50

    @pytest.mark.parametrize("max_depth", [0, -1])
    def test_rejects_non_positive(self, max_depth: int) -> None:
        """max_depth below one raises ValueError."""
        with pytest.raises(ValueError, match="max_depth"):
            DepthGuard(max_depth=max_depth)


# ============================================================================
# Context Manager
# ============================================================================


class TestDepthGuardContextManager:
    """Test DepthGuard as context manager."""

    def test_nested_levels(self) -> None:
        """Each nested entry adds one level; exits restore zero."""
        guard = DepthGuard(max_depth=10)

        with guard:
            assert guard.depth == 1
            with guard:
                assert guard.depth == 2

        assert guard.depth == 0

    def test_raises_when_exceeded(self) -> None:
        """Entering past max_depth raises DepthLimitExceededError."""
        guard = DepthGuard(max_depth=2)

        with guard, guard:
            with pytest.raises(DepthLimitExceededError) as exc_info:
                with guard:
                    pass
            assert guard.current_depth == 2

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.DEPTH_EXCEEDED
        assert "(2)" in str(exc_info.value)
        assert guard.current_depth == 0

    def test_depth_restored_on_error(self) -> None:
        """Depth is restored when the guarded block raises."""
        guard = DepthGuard(max_depth=10)
        msg = "Test error"

        with pytest.raises(ValueError, match=msg), guard:
            raise ValueError(msg)

        assert guard.current_depth == 0

    def test_returns_self(self) -> None:
        """__enter__ returns the guard."""
        guard = DepthGuard()

        with guard as g:
            assert g is guard


# ============================================================================
# check(), is_exceeded(), reset()
# ============================================================================


class TestExplicitChecks:
    """Test the non-context-manager API."""

    def test_is_exceeded_at_limit(self) -> None:
        """is_exceeded() turns true once max_depth levels are open."""
        guard = DepthGuard(max_depth=1)

        assert not guard.is_exceeded()
        with guard:
            assert guard.is_exceeded()

    def test_check_raises_above_limit(self) -> None:
        """check() raises when depth was set past the limit."""
        guard = DepthGuard(max_depth=2)
        guard.current_depth = 5

        with pytest.raises(DepthLimitExceededError):
            guard.check()

    def test_reset(self) -> None:
        """reset() returns depth to zero."""
        guard = DepthGuard()
        guard.current_depth = 7
        guard.reset()

        assert guard.depth == 0


class TestDepthLimitExceededError:
    """Depth errors are skips, not failures."""

    def test_is_a_skip(self) -> None:
        """DepthLimitExceededError is a SkipItemError and a DataError."""
        assert issubclass(DepthLimitExceededError, SkipItemError)
        assert issubclass(DepthLimitExceededError, DataError)

    def test_category_is_data(self) -> None:
        """The diagnostic is in the DATA category."""
        guard = DepthGuard(max_depth=1)
        with guard, pytest.raises(DepthLimitExceededError) as exc_info:
            guard.check()

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code.category == ErrorCategory.DATA


# ============================================================================
# depth_clamp
# ============================================================================


class TestDepthClamp:
    """Test depth_clamp()."""

    def test_small_depth_unchanged(self) -> None:
        """Depths well under the recursion limit pass through."""
        assert depth_clamp(10) == 10

    def test_clamp_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        """Clamping logs a warning naming the recursion limit."""
        caplog.set_level(logging.WARNING, logger="poolcheck.core.depth_guard")
        limit = sys.getrecursionlimit()

        assert depth_clamp(limit * 2) == limit - 50
        assert "Clamping" in caplog.text

    @given(
        requested=st.integers(min_value=1, max_value=100_000),
        reserve=st.integers(min_value=0, max_value=200),
    )
    def test_clamp_never_exceeds_safe_depth(self, requested: int, reserve: int) -> None:
        """PROPERTY: clamped depth is min(requested, limit - reserve)."""
        safe = sys.getrecursionlimit() - reserve
        event(f"clamped={requested > safe}")

        assert depth_clamp(requested, reserve) == min(requested, safe)
