"""Fuzz testing infrastructure for poolcheck.

This package contains:
- test_data_shrinker_property: Soundness and termination of minimize()
- test_data_recorder_state_machine: InfoRecorder against a shadow recorder
- test_core_depth_guard_exhaustion: Boundary testing for MAX_DEPTH limits

Python 3.13+.
"""
