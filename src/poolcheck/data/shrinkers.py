"""Shrinking byte pools towards a minimal failing input.

Generators map smaller bytes to smaller values: fewer bytes mean shorter
collections and zero bytes mean minimal scalars. Minimizing the pool
therefore minimizes the value, without the shrinker knowing anything
about the value's type.

Candidate strategies, tried in this order every round:
    IntervalShrinker: Remove the bytes of one recorded structural draw
    RemovalShrinker: Delta debugging, remove halves, then quarters, ...
    ScalarShrinker: Lower one byte at a time, zero first

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from poolcheck.constants import MAX_DEPTH

from .pool import InfoPool
from .source import InfoRecorder

__all__ = [
    "IntervalShrinker",
    "RemovalShrinker",
    "ScalarShrinker",
    "Shrinker",
    "ShrinkPredicate",
    "minimize",
]

logger = logging.getLogger(__name__)

type ShrinkPredicate = Callable[[InfoRecorder], bool]


@dataclass(frozen=True, slots=True)
class IntervalShrinker:
    """Candidates with one recorded span removed.

    Spans are visited most recently recorded first. Since children are
    recorded before their parent, outer values are tried before their parts.
    """

    seed: InfoPool

    def __iter__(self) -> Iterator[InfoPool]:
        data = self.seed.data
        tried: set[tuple[int, int]] = set()
        for span in self.seed.spans_iter():
            clipped = span.clip(len(data))
            if clipped is None or clipped.is_empty:
                continue
            key = (clipped.start, clipped.end)
            if key in tried:
                continue
            tried.add(key)
            logger.debug("removed span %d,%d", clipped.start, clipped.end)
            yield InfoPool(clipped.remove_from(data))


@dataclass(frozen=True, slots=True)
class RemovalShrinker:
    """Delta-debugging removal of contiguous chunks.

    For a buffer of ``n`` bytes with ``log2sz = (n - 1).bit_length()``,
    level ``k`` removes chunks of width ``1 << (log2sz - k)``: first the
    whole buffer, then each half, each quarter, and so on down to single
    bytes.
    """

    seed: InfoPool

    def __iter__(self) -> Iterator[InfoPool]:
        data = self.seed.data
        size = len(data)
        log2sz = max(size - 1, 0).bit_length()
        for level in range(log2sz + 1):
            width = 1 << (log2sz - level)
            for start in range(0, size, width):
                end = min(start + width, size)
                logger.debug("removed %d,%d", start, end)
                yield InfoPool(data[:start] + data[end:])


@dataclass(frozen=True, slots=True)
class ScalarShrinker:
    """Candidates with a single byte lowered.

    Each byte ``b`` is replaced in turn by ``b - (b >> shift)`` for shift
    0, 1, 2, ...: zero first, then half, three quarters, seven eighths,
    approaching the original value. Together with re-shrinking from each
    accepted candidate this is a binary search for the smallest byte that
    still fails.
    """

    seed: InfoPool

    def __iter__(self) -> Iterator[InfoPool]:
        data = self.seed.data
        for pos, original in enumerate(data):
            for shift in range(original.bit_length()):
                lowered = original - (original >> shift)
                if lowered == original:
                    continue
                logger.debug("shrunk item -(bitoff:%d) %d %d->%d", shift, pos, original, lowered)
                candidate = bytearray(data)
                candidate[pos] = lowered
                yield InfoPool(bytes(candidate))


def _candidates(pool: InfoPool) -> Iterator[InfoPool]:
    return itertools.chain(
        IntervalShrinker(pool),
        RemovalShrinker(pool),
        ScalarShrinker(pool),
    )


@dataclass(slots=True)
class Shrinker:
    """Greedy pool minimizer.

    Each round walks the candidates of the current best pool and restarts
    from the first one the predicate accepts. The predicate receives an
    InfoRecorder over the candidate, so the accepted pool carries fresh
    spans for the next round's IntervalShrinker.

    Every accepted pool is strictly smaller than its predecessor in
    shortlex order (shorter, or same length and lexicographically lower),
    so minimization terminates.

    Attributes:
        predicate: True when the recorded draw still reproduces the failure
        max_depth: Structural nesting limit candidates are replayed with
        rounds: Rounds started
        attempts: Candidates tested
        improvements: Candidates accepted
    """

    predicate: ShrinkPredicate
    max_depth: int = MAX_DEPTH
    rounds: int = field(default=0, init=False)
    attempts: int = field(default=0, init=False)
    improvements: int = field(default=0, init=False)

    def minimize(self, pool: InfoPool) -> InfoPool:
        """Return the smallest pool found that satisfies the predicate.

        Returns ``pool`` itself when no candidate is accepted.
        """
        best = pool
        seen: set[bytes] = {pool.data}
        logger.debug("Shrinking pool of %d bytes", len(pool))

        while True:
            self.rounds += 1
            improved = self._round(best, seen)
            if improved is None:
                logger.debug("Nothing smaller found than %d bytes", len(best))
                return best
            self.improvements += 1
            logger.debug("Re-shrinking from %r", improved)
            best = improved

    def _round(self, best: InfoPool, seen: set[bytes]) -> InfoPool | None:
        for candidate in _candidates(best):
            if candidate.data in seen:
                continue
            seen.add(candidate.data)
            self.attempts += 1
            recorder = InfoRecorder(candidate.replay(max_depth=self.max_depth))
            if self.predicate(recorder):
                # Bytes past the candidate are zero fill, not part of it.
                accepted = recorder.into_pool().truncated(len(candidate))
                seen.add(accepted.data)
                return accepted
        return None


def minimize(
    pool: InfoPool,
    predicate: ShrinkPredicate,
    *,
    max_depth: int = MAX_DEPTH,
) -> InfoPool:
    """Shrink ``pool`` to the smallest pool satisfying ``predicate``.

    Args:
        pool: A pool for which ``predicate`` holds
        predicate: Called with an InfoRecorder replaying each candidate
        max_depth: Nesting limit for the replay; use the limit the pool
            was generated under, so accepted pools decode the same way

    Returns:
        The minimal pool found (``pool`` if nothing smaller works)
    """
    shrinker = Shrinker(predicate, max_depth)
    result = shrinker.minimize(pool)
    logger.info(
        "Shrunk %d bytes to %d in %d rounds (%d attempts, %d improvements)",
        len(pool),
        len(result),
        shrinker.rounds,
        shrinker.attempts,
        shrinker.improvements,
    )
    return result
