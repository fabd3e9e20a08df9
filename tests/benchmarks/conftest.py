"""pytest-benchmark configuration for poolcheck benchmarks.

Python 3.13+.
"""

from __future__ import annotations

import sys


def pytest_benchmark_update_json(config, benchmarks, output_json):  # noqa: ARG001
    """Add poolcheck metadata to benchmark results.

    Args:
        config: pytest config (required by pytest-benchmark hook signature)
        benchmarks: benchmark results (required by pytest-benchmark hook signature)
        output_json: JSON output dict to modify
    """
    output_json["project"] = "poolcheck"
    output_json["python_version"] = sys.version.split()[0]
    output_json["recursion_limit"] = sys.getrecursionlimit()
