#!/usr/bin/env python3
"""Replay a fuzzer finding artifact to confirm reproducibility.

Reads a finding .bin file (written by fuzz_common.write_finding_artifact),
looks up the pattern that produced it in the matching _meta.json, and runs
the same invariant check from shrinker_invariants against the bytes.

This script runs in the main project venv (not .venv-atheris). If a finding
reproduces here, it is a real poolcheck bug. If it does NOT reproduce, the
check depended on state outside the input bytes during the fuzzing run.

Usage:
    python fuzz_atheris/fuzz_atheris_replay_finding.py \\
        .fuzz_atheris_corpus/shrinker/findings/finding_0001.bin
    python fuzz_atheris/fuzz_atheris_replay_finding.py \\
        .fuzz_atheris_corpus/shrinker/findings/  # replay all

Exit codes:
    0 - No findings reproduced (or no files given)
    1 - At least one finding reproduced (real bug confirmed)
"""

from __future__ import annotations

import json
import pathlib
import sys

from shrinker_invariants import PATTERNS, InvariantViolation, run_pattern


def _read_pattern(path: pathlib.Path) -> str | None:
    meta_path = path.with_name(f"{path.stem}_meta.json")
    if not meta_path.exists():
        return None
    try:
        meta = json.loads(meta_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as e:
        print(f"  Could not read {meta_path.name}: {e}")
        return None
    print(f"  Metadata: pattern={meta.get('pattern')}, iteration={meta.get('iteration')}")
    return meta.get("pattern")


def replay_file(path: pathlib.Path) -> bool:
    """Replay a single finding, return True if it reproduces.

    Without metadata every pattern is tried in turn.
    """
    data = path.read_bytes()
    pattern = _read_pattern(path)
    patterns = [pattern] if pattern in PATTERNS else sorted(PATTERNS)

    for name in patterns:
        try:
            run_pattern(name, data)
        except InvariantViolation as e:
            print(f"  [{path.name}] [CONFIRMED] {name}: {e}")
            return True

    print(f"  [{path.name}] Not reproduced ({', '.join(patterns)})")
    return False


def main() -> int:
    """Entry point."""
    if len(sys.argv) < 2:
        print("Usage: python fuzz_atheris/fuzz_atheris_replay_finding.py "
              "<finding.bin | findings_dir/>")
        return 0

    target = pathlib.Path(sys.argv[1])
    any_reproduced = False

    if target.is_dir():
        findings = sorted(target.glob("finding_*.bin"))
        if not findings:
            print(f"No finding_*.bin files found in {target}")
            return 0

        print(f"Replaying {len(findings)} finding(s) from {target}")
        print()
        for finding in findings:
            if replay_file(finding):
                any_reproduced = True
            print()
    elif target.is_file():
        print(f"Replaying {target}")
        print()
        any_reproduced = replay_file(target)
    else:
        print(f"Path not found: {target}", file=sys.stderr)
        return 1

    print()
    if any_reproduced:
        print("[RESULT] At least one finding REPRODUCED without Atheris (real bug)")
        return 1

    print("[RESULT] No findings reproduced without Atheris")
    return 0


if __name__ == "__main__":
    sys.exit(main())
