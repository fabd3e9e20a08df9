"""Shared fuzzing infrastructure for Atheris-based fuzzers.

Provides common observability, metrics, seed corpus management, finding
artifacts and reporting used by the fuzz targets. Each fuzzer imports from
this module and composes domain-specific state alongside BaseFuzzerState.

Not a fuzz target itself -- no FUZZ_PLUGIN header.
"""

from __future__ import annotations

import hashlib
import heapq
import json
import os
import pathlib
import statistics
import sys
import time
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

# --- PEP 695 Type Aliases ---

type FuzzStats = dict[str, int | str | float | list[Any]]
type InterestingInput = tuple[float, str, str]  # (neg_duration_ms, pattern, input_hash)

# --- Constants ---

GC_INTERVAL = 256
"""Periodic gc.collect() interval to reclaim Atheris instrumentation cycles."""


# --- Process Handle (lazy singleton) ---

_process: Any = None


def get_process() -> Any:
    """Lazy-initialize psutil process handle."""
    global _process  # noqa: PLW0603  # pylint: disable=global-statement
    if _process is None:
        import psutil  # noqa: PLC0415 - checked by check_dependencies first

        _process = psutil.Process(os.getpid())
    return _process


# --- Dependency Checks ---


def check_dependencies(dep_names: Sequence[str], dep_modules: Sequence[Any]) -> None:
    """Verify fuzzing dependencies are importable, exit with instructions if not.

    Args:
        dep_names: Human-readable names (e.g., ["psutil", "atheris"])
        dep_modules: Corresponding module objects (None if import failed)
    """
    missing = [name for name, mod in zip(dep_names, dep_modules, strict=True) if mod is None]
    if missing:
        print("-" * 80, file=sys.stderr)
        print("ERROR: Missing required dependencies for fuzzing:", file=sys.stderr)
        for dep in missing:
            print(f"  - {dep}", file=sys.stderr)
        print("", file=sys.stderr)
        print("Install with: pip install -e '.[atheris]'", file=sys.stderr)
        print("-" * 80, file=sys.stderr)
        sys.exit(1)


# --- Base Fuzzer State ---


@dataclass
class BaseFuzzerState:
    """Common observability state shared by all fuzzers."""

    fuzzer_name: str = "unknown"
    fuzzer_target: str = "unknown"

    # Core stats
    iterations: int = 0
    findings: int = 0
    status: str = "incomplete"

    # Performance tracking (bounded deques)
    performance_history: deque[float] = field(default_factory=lambda: deque(maxlen=10000))
    memory_history: deque[float] = field(default_factory=lambda: deque(maxlen=1000))

    # Pattern coverage
    pattern_coverage: dict[str, int] = field(default_factory=dict)
    error_counts: dict[str, int] = field(default_factory=dict)
    pattern_wall_time: dict[str, float] = field(default_factory=dict)
    pattern_intended_weights: dict[str, float] = field(default_factory=dict)

    # Interesting inputs (max-heap for slowest, in-memory corpus)
    slowest_operations: list[InterestingInput] = field(default_factory=list)
    seed_corpus: dict[str, bytes] = field(default_factory=dict)
    corpus_entries_added: int = 0
    corpus_evictions: int = 0

    initial_memory_mb: float = 0.0
    finding_counter: int = 0

    # Configuration
    checkpoint_interval: int = 500
    seed_corpus_max_size: int = 500


# --- Weighted Schedule ---


def build_weighted_schedule(items: Sequence[str], weights: Sequence[int]) -> tuple[str, ...]:
    """Pre-compute a weighted schedule: each item repeated ``weight`` times."""
    schedule: list[str] = []
    for item, weight in zip(items, weights, strict=True):
        schedule.extend([item] * weight)
    return tuple(schedule)


def select_pattern_round_robin(state: BaseFuzzerState, schedule: tuple[str, ...]) -> str:
    """Deterministic round-robin immune to coverage-guided mutation bias.

    All fuzzers increment state.iterations before calling this function,
    so (iterations - 1) maps iteration 1 to schedule index 0.
    """
    return schedule[(state.iterations - 1) % len(schedule)]


# --- Input Hashing / Corpus ---


def hash_input(data: bytes) -> str:
    """Compute truncated SHA-256 hex digest for corpus deduplication."""
    return hashlib.sha256(data).hexdigest()[:16]


def _track_slowest(state: BaseFuzzerState, duration_ms: float, pattern: str, key: str) -> None:
    entry: InterestingInput = (-duration_ms, pattern, key)
    if len(state.slowest_operations) < 10:
        heapq.heappush(state.slowest_operations, entry)
    elif -duration_ms < state.slowest_operations[0][0]:
        heapq.heapreplace(state.slowest_operations, entry)


def _track_seed_corpus(state: BaseFuzzerState, key: str, data: bytes) -> None:
    if key in state.seed_corpus:
        return
    state.seed_corpus[key] = data
    state.corpus_entries_added += 1
    if len(state.seed_corpus) > state.seed_corpus_max_size:
        del state.seed_corpus[next(iter(state.seed_corpus))]
        state.corpus_evictions += 1


def record_memory(state: BaseFuzzerState) -> None:
    """Sample current RSS memory usage (call every ~100 iterations)."""
    state.memory_history.append(get_process().memory_info().rss / (1024 * 1024))


def record_iteration_metrics(
    state: BaseFuzzerState,
    pattern: str,
    start_time: float,
    input_data: bytes,
    *,
    is_interesting: bool,
) -> None:
    """Record per-iteration performance and corpus metrics.

    Call in the finally block of test_one_input.
    """
    elapsed_ms = (time.perf_counter() - start_time) * 1000
    state.performance_history.append(elapsed_ms)
    state.pattern_wall_time[pattern] = state.pattern_wall_time.get(pattern, 0.0) + elapsed_ms

    key = hash_input(input_data)
    _track_slowest(state, elapsed_ms, pattern, key)
    if is_interesting:
        _track_seed_corpus(state, key, input_data)


# --- Finding Artifacts ---


def write_finding_artifact(
    state: BaseFuzzerState,
    findings_dir: pathlib.Path,
    data: bytes,
    meta: dict[str, Any],
) -> pathlib.Path:
    """Persist a finding as ``finding_NNNN.bin`` plus ``finding_NNNN_meta.json``.

    Returns:
        Path of the written .bin file
    """
    state.finding_counter += 1
    findings_dir.mkdir(parents=True, exist_ok=True)
    stem = f"finding_{state.finding_counter:04d}"
    bin_path = findings_dir / f"{stem}.bin"
    bin_path.write_bytes(data)
    meta = {**meta, "iteration": state.iterations, "input_hash": hash_input(data)}
    (findings_dir / f"{stem}_meta.json").write_text(
        json.dumps(meta, sort_keys=True, default=str), encoding="utf-8"
    )
    return bin_path


# --- Stats Building ---


def build_base_stats_dict(state: BaseFuzzerState) -> FuzzStats:
    """Build common stats dictionary for JSON report."""
    stats: FuzzStats = {
        "fuzzer": state.fuzzer_name,
        "target": state.fuzzer_target,
        "status": state.status,
        "iterations": state.iterations,
        "findings": state.findings,
    }

    if state.performance_history:
        perf = list(state.performance_history)
        stats["perf_mean_ms"] = round(statistics.mean(perf), 3)
        stats["perf_median_ms"] = round(statistics.median(perf), 3)
        stats["perf_max_ms"] = round(max(perf), 3)
        if len(perf) >= 100:
            stats["perf_p99_ms"] = round(statistics.quantiles(perf, n=100)[98], 3)

    if state.memory_history:
        mem = list(state.memory_history)
        stats["memory_peak_mb"] = round(max(mem), 2)
        stats["memory_delta_mb"] = round(max(mem) - state.initial_memory_mb, 2)

    stats["patterns_tested"] = len(state.pattern_coverage)
    for pattern, count in sorted(state.pattern_coverage.items()):
        stats[f"pattern_{pattern}"] = count
    for pattern, total_ms in sorted(state.pattern_wall_time.items()):
        stats[f"wall_time_ms_{pattern}"] = round(total_ms, 1)

    stats["error_types"] = len(state.error_counts)
    for error_type, count in sorted(state.error_counts.items()):
        stats[f"error_{error_type[:50]}"] = count

    stats["seed_corpus_size"] = len(state.seed_corpus)
    stats["corpus_entries_added"] = state.corpus_entries_added
    stats["corpus_evictions"] = state.corpus_evictions
    return stats


# --- Reporting ---


def _write_report(stats: FuzzStats, report_dir: pathlib.Path, report_filename: str) -> str:
    report = json.dumps(stats, sort_keys=True)
    try:
        report_dir.mkdir(parents=True, exist_ok=True)
        (report_dir / report_filename).write_text(report, encoding="utf-8")
    except OSError as e:
        print(f"[REPORT] Could not write {report_filename}: {e}", file=sys.stderr)
    return report


def emit_checkpoint_report(
    state: BaseFuzzerState,
    stats: FuzzStats,
    report_dir: pathlib.Path,
    report_filename: str,
) -> None:
    """Emit a periodic JSON checkpoint to stderr and file."""
    report = _write_report(stats, report_dir, report_filename)
    print(
        f"\n[CHECKPOINT-JSON-BEGIN]{report}[CHECKPOINT-JSON-END] iter={state.iterations}",
        file=sys.stderr,
        flush=True,
    )


def emit_final_report(
    state: BaseFuzzerState,
    stats: FuzzStats,
    report_dir: pathlib.Path,
    report_filename: str,
) -> None:
    """Emit crash-proof JSON report to stderr and file."""
    state.status = "complete"
    stats["status"] = state.status
    report = _write_report(stats, report_dir, report_filename)
    print(f"\n[SUMMARY-JSON-BEGIN]{report}[SUMMARY-JSON-END]", file=sys.stderr, flush=True)


# --- Runner ---


def print_fuzzer_banner(
    *,
    title: str,
    target: str,
    state: BaseFuzzerState,
    schedule_len: int,
    mutator: str,
) -> None:
    """Print the startup banner."""
    print("=" * 80)
    print(title)
    print("=" * 80)
    print(f"Target:     {target}")
    print(f"Checkpoint: Every {state.checkpoint_interval} iterations")
    print(f"Corpus Max: {state.seed_corpus_max_size} entries")
    print(f"Schedule:   {schedule_len} slots")
    print(f"Mutator:    {mutator}")
    print("=" * 80)


def run_fuzzer(state: BaseFuzzerState, *, test_one_input: Callable[[bytes], None]) -> None:
    """Record the memory baseline and hand control to libFuzzer."""
    import atheris  # noqa: PLC0415 - checked by check_dependencies first

    state.initial_memory_mb = get_process().memory_info().rss / (1024 * 1024)
    atheris.Setup(sys.argv, test_one_input)
    atheris.Fuzz()
