"""poolcheck exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from poolcheck.data.pool import InfoPool
    from poolcheck.outcome import CheckOutcome

__all__ = [
    "DataError",
    "PoolCheckError",
    "PoolExhaustedError",
    "PropertyError",
    "PropertyFailedError",
    "SkipBudgetExhaustedError",
    "SkipItemError",
]


class PoolCheckError(Exception):
    """Base exception for all poolcheck errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize PoolCheckError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class DataError(PoolCheckError):
    """A generator could not produce a value from its byte source.

    Raised from Generator.generate(). Never a bug in the system under test:
    the runner either retries with fresh bytes or, while shrinking, treats
    the candidate as not reproducing the failure.
    """


class PoolExhaustedError(DataError):
    """The byte source ran out of meaningful data.

    Only strict replay sources raise this. The default replay source
    zero-fills past the end of its buffer instead, which the shrinker's
    removal strategies depend on.
    """


class SkipItemError(DataError):
    """A combinator declined to produce a value for these bytes.

    Examples:
    - filter() predicate returned False
    - choice() over an empty item list
    - filter_map() function rejected the value

    The caller must retry with a new draw, bounded by a skip budget.
    """


class PropertyError(PoolCheckError):
    """A property check did not pass."""


class PropertyFailedError(PropertyError):
    """The predicate failed for some generated argument.

    The argument reported is the minimal counterexample found by shrinking.
    When the predicate raised, the original exception is chained as
    ``__cause__`` and its message is included verbatim.

    Attributes:
        argument: The minimal failing argument
        outcome: Classified predicate result for that argument
        pool: The minimal byte pool that decodes to the argument
        seed: Seed of the trial that first found the failure
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        argument: object,
        outcome: CheckOutcome,
        pool: InfoPool,
        seed: int | None = None,
    ) -> None:
        """Initialize PropertyFailedError.

        Args:
            message: Error message string OR Diagnostic object
            argument: The minimal failing argument
            outcome: Predicate outcome for the minimal argument
            pool: Minimal byte pool
            seed: Seed of the failing trial
        """
        super().__init__(message)
        self.argument = argument
        self.outcome = outcome
        self.pool = pool
        self.seed = seed


class SkipBudgetExhaustedError(PropertyError):
    """Too many draws were skipped to complete the requested trials.

    Reported immediately, without shrinking: there is no failing input.

    Attributes:
        tests_run: Trials completed before the budget ran out
        num_tests: Trials requested
        skipped: Draws skipped
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        tests_run: int,
        num_tests: int,
        skipped: int,
    ) -> None:
        """Initialize SkipBudgetExhaustedError.

        Args:
            message: Error message string OR Diagnostic object
            tests_run: Trials completed
            num_tests: Trials requested
            skipped: Draws skipped
        """
        super().__init__(message)
        self.tests_run = tests_run
        self.num_tests = num_tests
        self.skipped = skipped
