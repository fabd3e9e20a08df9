"""Core utilities shared by the data and generator layers.

Exports:
    DepthGuard: Context manager for draw nesting depth limiting
    DepthLimitExceededError: Skip raised when the depth limit is exceeded
    depth_clamp: Clamp a depth against the interpreter recursion limit

Python 3.13+.
"""

from .depth_guard import DepthGuard, DepthLimitExceededError, depth_clamp

__all__ = ["DepthGuard", "DepthLimitExceededError", "depth_clamp"]
