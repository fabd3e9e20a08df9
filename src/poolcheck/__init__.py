"""poolcheck - property-based testing over shrinkable byte pools.

Generators decode test input from a stream of bytes. When a property
fails, the bytes that produced the failing input are shrunk until no
smaller pool reproduces it, and the value decoded from that minimal pool
is reported.

Public API:
    property - Build a property over a generator; call .check(subject)
    CheckConfig - Trial count, skip budget, seed and depth limit
    Ok / Err - Explicit check results (also produced by result())

Exceptions:
    PoolCheckError - Base exception class
    PropertyFailedError - A property failed; carries the minimal argument
    SkipBudgetExhaustedError - Too many skipped draws to finish the run
    DataError - A generator could not decode a value (SkipItemError,
        PoolExhaustedError)

Submodules:
    poolcheck.generators - Generator combinators (booleans, vecs, one_of, ...)
    poolcheck.data - InfoPool, byte sources and the shrinker
    poolcheck.diagnostics - Error codes, templates and formatting
"""

from .diagnostics import (
    DataError,
    PoolCheckError,
    PoolExhaustedError,
    PropertyError,
    PropertyFailedError,
    SkipBudgetExhaustedError,
    SkipItemError,
)
from .outcome import CheckOutcome, Err, Ok, evaluate_check
from .properties import CheckConfig, Property, property  # noqa: A004

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError  # noqa: E402
from importlib.metadata import version as _get_version  # noqa: E402

try:
    __version__ = _get_version("poolcheck")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CheckConfig",
    "CheckOutcome",
    "DataError",
    "Err",
    "Ok",
    "PoolCheckError",
    "PoolExhaustedError",
    "Property",
    "PropertyError",
    "PropertyFailedError",
    "SkipBudgetExhaustedError",
    "SkipItemError",
    "__version__",
    "evaluate_check",
    "property",
]
