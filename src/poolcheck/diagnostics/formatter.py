"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Rust compiler-style output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Turns Diagnostic objects into human-readable or machine-readable output.
    Generated arguments and pool dumps can be arbitrarily large, so the
    formatter can truncate them when ``sanitize`` is set.

    Attributes:
        output_format: Output style (rust, simple, json)
        sanitize: Truncate content to keep reports readable
        color: Enable ANSI color codes (for terminal output)
        max_content_length: Maximum content length when sanitizing

    Example:
        >>> formatter = DiagnosticFormatter()
        >>> diagnostic = ErrorTemplate.empty_choice()
        >>> print(formatter.format(diagnostic))
        error[EMPTY_CHOICE]: Cannot choose from an empty sequence of items
          = help: Pass at least one item to choice()

        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(diagnostic))
        EMPTY_CHOICE: Cannot choose from an empty sequence of items
    """

    output_format: OutputFormat = OutputFormat.RUST
    sanitize: bool = False
    color: bool = False
    max_content_length: int = 100

    def __post_init__(self) -> None:
        """Validate truncation length."""
        if self.max_content_length < 1:
            msg = f"max_content_length must be positive, got {self.max_content_length}"
            raise ValueError(msg)

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Format multiple diagnostics separated by blank lines."""
        return "\n\n".join(self.format(d) for d in diagnostics)

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in Rust compiler style.

        Example output:
            error[PREDICATE_RAISED]: Predicate failed for argument 0; raised ...
              = raised: ValueError: Big bad boom
              = pool: 00
              = seed: 42
              = help: The argument above is the smallest input that raises
        """
        severity = diagnostic.severity if diagnostic.severity == "warning" else "error"

        if self.color:
            if severity == "error":
                severity_str = f"\033[1;31m{severity}\033[0m"  # Bold red
            else:
                severity_str = f"\033[1;33m{severity}\033[0m"  # Bold yellow
        else:
            severity_str = severity

        message = self._maybe_sanitize(diagnostic.message)
        parts = [f"{severity_str}[{diagnostic.code.name}]: {message}"]

        if diagnostic.check_result is not None:
            parts.append(f"  = check returned: {self._maybe_sanitize(diagnostic.check_result)}")

        if diagnostic.raised is not None:
            parts.append(f"  = raised: {self._maybe_sanitize(diagnostic.raised)}")

        if diagnostic.pool is not None:
            parts.append(f"  = pool: {self._maybe_sanitize(diagnostic.pool)}")

        if diagnostic.seed is not None:
            parts.append(f"  = seed: {diagnostic.seed}")

        if diagnostic.hint:
            parts.append(f"  = help: {self._maybe_sanitize(diagnostic.hint)}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in single-line format.

        Example output:
            FILTER_REJECTED: Filter predicate rejected the generated value
        """
        message = self._maybe_sanitize(diagnostic.message)
        return f"{diagnostic.code.name}: {message}"

    def _format_json(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic as JSON.

        Example output:
            {"code": "PREDICATE_FAILED", "code_value": 2001, "message": "...", ...}
        """
        data: dict[str, str | int | None] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "category": str(diagnostic.code.category),
            "message": self._maybe_sanitize(diagnostic.message),
            "severity": diagnostic.severity,
        }

        if diagnostic.argument is not None:
            data["argument"] = self._maybe_sanitize(diagnostic.argument)

        if diagnostic.check_result is not None:
            data["check_result"] = self._maybe_sanitize(diagnostic.check_result)

        if diagnostic.raised is not None:
            data["raised"] = self._maybe_sanitize(diagnostic.raised)

        if diagnostic.pool is not None:
            data["pool"] = self._maybe_sanitize(diagnostic.pool)

        if diagnostic.seed is not None:
            data["seed"] = diagnostic.seed

        if diagnostic.hint:
            data["hint"] = self._maybe_sanitize(diagnostic.hint)

        return json.dumps(data, ensure_ascii=False)

    def _maybe_sanitize(self, text: str) -> str:
        """Truncate text if sanitization is enabled."""
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text
