"""Check results and their classification.

A predicate may answer in several ways: return a bool, return None,
return an Ok/Err value, or raise. evaluate_check() folds all of them into
one CheckOutcome so the runner has a single notion of failure.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from poolcheck.diagnostics import ErrorTemplate

__all__ = ["CheckOutcome", "Err", "Ok", "evaluate_check"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful result carrying ``value``."""

    value: T


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed result carrying ``error``."""

    error: E


@dataclass(frozen=True, slots=True)
class CheckOutcome:
    """Classified result of one predicate call.

    Attributes:
        failed: Whether the predicate rejected the argument
        result: What the predicate returned (None when it raised)
        error: The exception the predicate raised, if any
    """

    failed: bool
    result: object = None
    error: Exception | None = None

    @property
    def raised(self) -> bool:
        return self.error is not None

    def describe_error(self) -> str | None:
        """``"ExceptionType: message"`` for a raised predicate, else None."""
        if self.error is None:
            return None
        return f"{type(self.error).__name__}: {self.error}"


def _classify(result: object) -> bool:
    """Return True when ``result`` means failure."""
    match result:
        case None:
            return False
        case bool():
            return not result
        case Ok():
            return False
        case Err():
            return True
        case _:
            raise TypeError(ErrorTemplate.unsupported_check_result(type(result).__name__).message)


def evaluate_check[T](subject: Callable[[T], object], value: T) -> CheckOutcome:
    """Run ``subject(value)`` and classify the answer.

    Any Exception raised by ``subject`` is a failing outcome carrying that
    exception. BaseExceptions such as KeyboardInterrupt propagate.

    Raises:
        TypeError: ``subject`` returned something that is not a check result
    """
    try:
        result = subject(value)
    except Exception as e:  # noqa: BLE001 - predicate failures are data
        logger.debug("Predicate raised %s", type(e).__name__)
        return CheckOutcome(failed=True, error=e)
    return CheckOutcome(failed=_classify(result), result=result)
