"""Diagnostic system for poolcheck errors.

Provides structured error diagnostics with codes, hints, the failing
argument and the minimal byte pool that reproduces it.
Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, ErrorCategory
from .errors import (
    DataError,
    PoolCheckError,
    PoolExhaustedError,
    PropertyError,
    PropertyFailedError,
    SkipBudgetExhaustedError,
    SkipItemError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "DataError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorCategory",
    "ErrorTemplate",
    "OutputFormat",
    "PoolCheckError",
    "PoolExhaustedError",
    "PropertyError",
    "PropertyFailedError",
    "SkipBudgetExhaustedError",
    "SkipItemError",
]
