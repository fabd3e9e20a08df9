"""Property runner.

``property(gen).check(subject)`` draws ``num_tests`` arguments from
``gen``, runs ``subject`` on each and, on the first failure, shrinks the
recorded byte pool to the smallest one that still fails before raising
PropertyFailedError.

Example:
    >>> from poolcheck import property
    >>> from poolcheck.generators import booleans, vecs
    >>> property(vecs(booleans())).check(
    ...     lambda l: list(reversed(list(reversed(l)))) == l
    ... )

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import random
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field

from poolcheck.constants import (
    DEFAULT_NUM_TESTS,
    DEFAULT_POOL_SIZE,
    MAX_DEPTH,
    MAX_SKIPS_PER_TEST,
)
from poolcheck.data import InfoPool, InfoRecorder, RngSource, minimize
from poolcheck.diagnostics import (
    DataError,
    ErrorTemplate,
    PropertyFailedError,
    SkipBudgetExhaustedError,
)
from poolcheck.generators import Generator
from poolcheck.outcome import CheckOutcome, evaluate_check

__all__ = ["CheckConfig", "Property", "property"]

logger = logging.getLogger(__name__)

type Subject[T] = Callable[[T], object]


@dataclass(frozen=True, slots=True)
class CheckConfig:
    """Parameters of a property run.

    Attributes:
        num_tests: Trials that must pass
        max_skips: Skipped draws tolerated before giving up
            (default: 10 per requested trial)
        pool_size: Chunk size of each trial's random byte source
        seed: Master seed for a reproducible run (default: fresh entropy)
        max_depth: Structural nesting limit for generated values
    """

    num_tests: int = DEFAULT_NUM_TESTS
    max_skips: int | None = None
    pool_size: int = DEFAULT_POOL_SIZE
    seed: int | None = None
    max_depth: int = MAX_DEPTH

    def __post_init__(self) -> None:
        """Validate limits and derive the default skip budget."""
        if self.num_tests < 1:
            msg = f"num_tests must be at least 1, got {self.num_tests}"
            raise ValueError(msg)
        if self.max_skips is None:
            object.__setattr__(self, "max_skips", self.num_tests * MAX_SKIPS_PER_TEST)
        elif self.max_skips < 1:
            msg = f"max_skips must be at least 1, got {self.max_skips}"
            raise ValueError(msg)
        if self.pool_size < 1:
            msg = f"pool_size must be at least 1, got {self.pool_size}"
            raise ValueError(msg)
        if self.max_depth < 1:
            msg = f"max_depth must be at least 1, got {self.max_depth}"
            raise ValueError(msg)

    def skip_budget(self) -> int:
        """Skip budget with the default applied."""
        if self.max_skips is None:  # pragma: no cover - set in __post_init__
            return self.num_tests * MAX_SKIPS_PER_TEST
        return self.max_skips

    def property[T](self, gen: Generator[T]) -> Property[T]:
        """Build a property over ``gen`` that runs with this configuration."""
        return Property(gen, self)


@dataclass(frozen=True, slots=True)
class Property[T]:
    """A generator paired with run parameters, ready to check a subject."""

    gen: Generator[T]
    config: CheckConfig = field(default_factory=CheckConfig)

    def check(self, subject: Subject[T]) -> None:
        """Run ``subject`` against generated arguments.

        Returns None when every trial passes.

        Raises:
            PropertyFailedError: A trial failed; carries the minimal argument
            SkipBudgetExhaustedError: Too many draws were skipped
            TypeError: ``subject`` returned an unsupported result type
        """
        config = self.config
        budget = config.skip_budget()
        seeds = self._trial_seeds()
        tests_run = 0
        skipped = 0

        while tests_run < config.num_tests:
            seed = next(seeds)
            recorder = InfoRecorder(
                RngSource.seeded(seed, chunk_size=config.pool_size, max_depth=config.max_depth)
            )
            try:
                value = recorder.draw(self.gen)
            except DataError as e:
                skipped += 1
                logger.debug("Skipped draw %d (seed %d): %s", skipped, seed, e)
                if skipped >= budget:
                    raise SkipBudgetExhaustedError(
                        ErrorTemplate.skip_budget_exhausted(tests_run, config.num_tests, skipped),
                        tests_run=tests_run,
                        num_tests=config.num_tests,
                        skipped=skipped,
                    ) from None
                continue

            outcome = evaluate_check(subject, value)
            tests_run += 1
            logger.debug("Trial %d (seed %d) failed=%s", tests_run, seed, outcome.failed)
            if outcome.failed:
                self._report_failure(subject, recorder.into_pool(), value, outcome, seed)

        logger.info("Passed %d tests (%d skipped)", tests_run, skipped)

    def _trial_seeds(self) -> _SeedStream:
        return _SeedStream(self.config.seed)

    def _reproduces(self, subject: Subject[T]) -> Callable[[InfoRecorder], bool]:
        def predicate(recorder: InfoRecorder) -> bool:
            try:
                value = recorder.draw(self.gen)
            except DataError:
                return False
            return evaluate_check(subject, value).failed

        return predicate

    def _report_failure(
        self,
        subject: Subject[T],
        pool: InfoPool,
        value: T,
        outcome: CheckOutcome,
        seed: int,
    ) -> None:
        logger.debug("Failure found with seed %d; shrinking %d bytes", seed, len(pool))
        minimal = minimize(pool, self._reproduces(subject), max_depth=self.config.max_depth)

        min_value = minimal.replay(max_depth=self.config.max_depth).draw(self.gen)
        min_outcome = evaluate_check(subject, min_value)
        if min_outcome.failed:
            pool, value, outcome = minimal, min_value, min_outcome
        else:
            logger.warning("Minimal pool no longer fails; reporting the original argument")

        argument = repr(value)
        raised = outcome.describe_error()
        if raised is not None:
            diagnostic = ErrorTemplate.predicate_raised(argument, raised, pool.hex(), seed)
        else:
            diagnostic = ErrorTemplate.predicate_failed(
                argument, repr(outcome.result), pool.hex(), seed
            )
        raise PropertyFailedError(
            diagnostic,
            argument=value,
            outcome=outcome,
            pool=pool,
            seed=seed,
        ) from outcome.error


class _SeedStream:
    """Per-trial seeds: derived from a master seed, or fresh entropy."""

    __slots__ = ("_master",)

    def __init__(self, seed: int | None) -> None:
        self._master = random.Random(seed) if seed is not None else None  # noqa: S311

    def __iter__(self) -> _SeedStream:
        return self

    def __next__(self) -> int:
        if self._master is None:
            return secrets.randbits(64)
        return self._master.getrandbits(64)


def property[T](gen: Generator[T], config: CheckConfig | None = None) -> Property[T]:  # noqa: A001
    """Entry point: a property over ``gen``, checked with ``.check(subject)``."""
    return Property(gen, config if config is not None else CheckConfig())
