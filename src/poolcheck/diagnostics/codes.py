"""Diagnostic codes and data structures.

Defines error codes and structured diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ErrorCategory",
]


class ErrorCategory(StrEnum):
    """Error categorization for poolcheck exceptions.

    Inherits from ``StrEnum`` so that ``str(category)`` and direct string
    comparisons work without accessing ``.value``.

    Categories:
        DATA: A generator could not decode a value from the byte source
        PROPERTY: A property check failed or could not complete
    """

    DATA = "data"
    PROPERTY = "property"


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Data errors (raised while decoding a byte source)
        2000-2999: Property errors (raised by the property runner)
    """

    # Data errors (1000-1999)
    POOL_EXHAUSTED = 1001
    SKIP_ITEM = 1002
    FILTER_REJECTED = 1003
    EMPTY_CHOICE = 1004
    DEPTH_EXCEEDED = 1005

    # Property errors (2000-2999)
    PREDICATE_FAILED = 2001
    PREDICATE_RAISED = 2002
    SKIP_BUDGET_EXHAUSTED = 2003
    UNSUPPORTED_CHECK_RESULT = 2004

    @property
    def category(self) -> ErrorCategory:
        """Category derived from the numeric code range."""
        if self.value < 2000:
            return ErrorCategory.DATA
        return ErrorCategory.PROPERTY


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Carries the failing argument and
    check result of a property failure so that both humans and tools can
    read them without parsing the message text.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        argument: repr() of the (minimal) generated argument
        check_result: repr() of what the predicate returned
        raised: "ExceptionType: message" when the predicate raised
        pool: Hex dump of the minimal byte pool
        seed: Seed of the trial that found the failure
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    argument: str | None = None
    check_result: str | None = None
    raised: str | None = None
    pool: str | None = None
    seed: int | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like the Rust compiler.

        Delegates to DiagnosticFormatter for consistent output.

        Example output:
            error[PREDICATE_FAILED]: Predicate failed for argument [False]
              = check returned: False
              = pool: ff 00 00 00 00
              = seed: 1234
              = help: The value above is the smallest failing input found

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
