"""Shared constants for poolcheck.

Centralized defaults used by the data layer, the generators and the
property runner. Placing constants here avoids circular imports and
provides a single source of truth.

Constants are grouped by domain:
- Runner limits: trial count, skip budget, random pool size
- Depth limits: structural nesting protection for recursive generators
- Generator policy: thresholds and default collection lengths

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Runner limits
    "DEFAULT_NUM_TESTS",
    "MAX_SKIPS_PER_TEST",
    "DEFAULT_POOL_SIZE",
    # Depth limits
    "MAX_DEPTH",
    # Generator policy
    "BOOLEAN_THRESHOLD",
    "DEFAULT_VEC_MEAN_LENGTH",
    "DEFAULT_COLLECTION_MEAN_LENGTH",
    "POINTER_WIDTH",
]

# ============================================================================
# RUNNER LIMITS
# ============================================================================

# Number of trials a property runs when no CheckConfig is given.
DEFAULT_NUM_TESTS: int = 100

# Skip budget multiplier: a run aborts after num_tests * MAX_SKIPS_PER_TEST
# rejected draws (filter rejections, empty choices, depth overruns).
MAX_SKIPS_PER_TEST: int = 10

# Bytes pre-drawn from the random generator per refill. The random source
# grows on demand, so this is a batching size, not a hard cap.
DEFAULT_POOL_SIZE: int = 1024

# ============================================================================
# DEPTH LIMITS
# ============================================================================
#
# Every structural draw (InfoSource.draw) enters a DepthGuard on the leaf
# source. Recursive generators built with lazy() nest one structural draw
# per level, and each level costs a handful of Python frames
# (draw -> generate -> draw ...). 100 levels stays well inside the default
# recursion limit of 1000 while allowing any reasonable data shape.
#
# Exceeding the limit raises DepthLimitExceededError, a SkipItemError: the
# runner discards the draw and counts it against the skip budget.
#
# ============================================================================

MAX_DEPTH: int = 100

# ============================================================================
# GENERATOR POLICY
# ============================================================================

# booleans(): byte >= 0x80 is True, so all-zero data decodes to False.
BOOLEAN_THRESHOLD: int = 0x80

# Mean lengths of the geometric continuation used by vecs() and collections().
DEFAULT_VEC_MEAN_LENGTH: int = 10
DEFAULT_COLLECTION_MEAN_LENGTH: int = 16

# Width in bytes of usizes() / isizes() (64-bit pointer-sized integers).
POINTER_WIDTH: int = 8
