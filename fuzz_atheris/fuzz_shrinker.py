#!/usr/bin/env python3
# FUZZ_PLUGIN_HEADER_START
# FUZZ_PLUGIN: shrinker - Generators, Recorder, Shrinker & Runner
# Intentional: This header is intentionally placed for dynamic plugin discovery.
# FUZZ_PLUGIN_HEADER_END
"""Shrinker Fuzzer (Atheris).

Targets: poolcheck.data.minimize, poolcheck.data.InfoRecorder,
poolcheck.properties.Property.check

Concern boundary: libFuzzer mutates the raw byte pools that generators
decode. Checks decode determinism, recorder round trips and span shape,
shrinker soundness and idempotency, and the runner's failure reports.
The checks live in shrinker_invariants so findings replay without
Atheris (see fuzz_atheris_replay_finding.py).

Pattern Routing:
Pattern selection uses deterministic round-robin over a weighted schedule,
immune to libFuzzer's coverage-guided mutation bias.

Metrics:
- Pattern coverage and per-pattern wall time
- Performance profiling (mean/median/p99/max)
- Real memory usage (RSS via psutil)
- Seed corpus management

Requires Python 3.13+ (uses PEP 695 type aliases).
"""

from __future__ import annotations

import argparse
import atexit
import gc
import logging
import pathlib
import sys
import time
from dataclasses import dataclass
from typing import Any

# --- Dependency Checks ---
_psutil_mod: Any = None
_atheris_mod: Any = None

try:  # noqa: SIM105 - need module ref for check_dependencies
    import psutil as _psutil_mod  # type: ignore[no-redef]
except ImportError:
    pass

try:  # noqa: SIM105 - need module ref for check_dependencies
    import atheris as _atheris_mod  # type: ignore[no-redef]
except ImportError:
    pass

from fuzz_common import (  # noqa: E402 - after dependency capture
    GC_INTERVAL,
    BaseFuzzerState,
    build_base_stats_dict,
    build_weighted_schedule,
    check_dependencies,
    emit_checkpoint_report,
    emit_final_report,
    print_fuzzer_banner,
    record_iteration_metrics,
    record_memory,
    run_fuzzer,
    select_pattern_round_robin,
    write_finding_artifact,
)

check_dependencies(["psutil", "atheris"], [_psutil_mod, _atheris_mod])

import atheris  # noqa: E402

# --- Domain Metrics ---


@dataclass
class ShrinkerMetrics:
    """Domain-specific metrics for the shrinker fuzzer."""

    invariant_violations: int = 0


# --- Global State ---

_state = BaseFuzzerState(
    seed_corpus_max_size=200,
    fuzzer_name="shrinker",
    fuzzer_target="minimize / InfoRecorder / Property.check",
)
_domain = ShrinkerMetrics()

# Pattern weights: (name, weight)
_PATTERN_WEIGHTS: tuple[tuple[str, int], ...] = (
    ("determinism", 10),
    ("recorder_roundtrip", 25),
    ("shrink_soundness", 40),
    ("runner", 25),
)

_PATTERN_SCHEDULE: tuple[str, ...] = build_weighted_schedule(
    [name for name, _ in _PATTERN_WEIGHTS],
    [weight for _, weight in _PATTERN_WEIGHTS],
)

_state.pattern_intended_weights = {name: float(weight) for name, weight in _PATTERN_WEIGHTS}

# --- Reporting ---

_REPORT_DIR = pathlib.Path(".fuzz_atheris_corpus") / "shrinker"
_FINDINGS_DIR = _REPORT_DIR / "findings"
_REPORT_FILENAME = "fuzz_shrinker_report.json"


def _build_stats_dict() -> dict[str, Any]:
    """Build complete stats dictionary including domain metrics."""
    stats = build_base_stats_dict(_state)
    stats["invariant_violations"] = _domain.invariant_violations
    return stats


def _emit_checkpoint() -> None:
    """Emit periodic checkpoint."""
    emit_checkpoint_report(_state, _build_stats_dict(), _REPORT_DIR, _REPORT_FILENAME)


def _emit_report() -> None:
    """Emit comprehensive final report (crash-proof)."""
    emit_final_report(_state, _build_stats_dict(), _REPORT_DIR, _REPORT_FILENAME)


atexit.register(_emit_report)


# Suppress logging and instrument imports
logging.getLogger("poolcheck").setLevel(logging.CRITICAL)

with atheris.instrument_imports(include=["poolcheck"]):
    from shrinker_invariants import InvariantViolation, run_pattern


def test_one_input(data: bytes) -> None:
    """Atheris entry point: route the input to one invariant check."""
    _state.iterations += 1
    pattern = select_pattern_round_robin(_state, _PATTERN_SCHEDULE)
    _state.pattern_coverage[pattern] = _state.pattern_coverage.get(pattern, 0) + 1
    start_time = time.perf_counter()

    if _state.iterations % _state.checkpoint_interval == 0:
        _emit_checkpoint()

    try:
        run_pattern(pattern, data)

    except InvariantViolation as e:
        _state.findings += 1
        _domain.invariant_violations += 1
        path = write_finding_artifact(
            _state, _FINDINGS_DIR, data, {"pattern": pattern, "error": str(e)}
        )
        print(f"\n[FINDING] {pattern}: {e}\n  saved to {path}", file=sys.stderr, flush=True)
        raise

    finally:
        is_interesting = (time.perf_counter() - start_time) * 1000 > 10.0
        record_iteration_metrics(_state, pattern, start_time, data, is_interesting=is_interesting)

        if _state.iterations % GC_INTERVAL == 0:
            gc.collect()

        if _state.iterations % 100 == 0:
            record_memory(_state)


def main() -> None:
    """Run the shrinker fuzzer with CLI support."""
    parser = argparse.ArgumentParser(
        description="Shrinker and recorder fuzzer using Atheris/libFuzzer",
        epilog="All unrecognized arguments are passed to libFuzzer.",
    )
    parser.add_argument(
        "--checkpoint-interval",
        type=int,
        default=500,
        help="Emit report every N iterations (default: 500)",
    )
    parser.add_argument(
        "--seed-corpus-size",
        type=int,
        default=200,
        help="Maximum size of in-memory seed corpus (default: 200)",
    )

    args, remaining = parser.parse_known_args()
    _state.checkpoint_interval = args.checkpoint_interval
    _state.seed_corpus_max_size = args.seed_corpus_size

    if not any(arg.startswith("-rss_limit_mb") for arg in remaining):
        remaining.append("-rss_limit_mb=4096")
    if not any(arg.startswith("-max_len") for arg in remaining):
        remaining.append("-max_len=512")

    sys.argv = [sys.argv[0], *remaining]

    print_fuzzer_banner(
        title="Shrinker Fuzzer (Atheris)",
        target=_state.fuzzer_target,
        state=_state,
        schedule_len=len(_PATTERN_SCHEDULE),
        mutator="Byte mutation (no custom mutator)",
    )

    run_fuzzer(_state, test_one_input=test_one_input)


if __name__ == "__main__":
    main()
