"""Invariant checks shared by the shrinker fuzzer and the finding replayer.

Every check is a pure function of the input bytes: the bytes are decoded
with poolcheck's own generators (which generator, which threshold) and the
remainder becomes the pool under test. A finding therefore replays
without Atheris from its .bin file and pattern name alone.

Not a fuzz target itself -- no FUZZ_PLUGIN header.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from poolcheck import (
    CheckConfig,
    PropertyFailedError,
    SkipBudgetExhaustedError,
    property,  # noqa: A004
)
from poolcheck.data import InfoPool, InfoRecorder, InfoReplay, Shrinker, Span, minimize
from poolcheck.diagnostics import DataError
from poolcheck.generators import (
    Generator,
    booleans,
    choice,
    f64s,
    i32s,
    lazy,
    one_of,
    optional,
    result,
    tuples,
    u8s,
    u16s,
    u64s,
    vecs,
)

__all__ = ["PATTERNS", "InvariantViolation", "run_pattern"]


class InvariantViolation(Exception):  # noqa: N818 - matches fuzzer error naming
    """Raised when a poolcheck invariant is breached."""


def _tree() -> Generator[Any]:
    leaf = u8s()
    node = lazy(lambda: tuples(_tree(), _tree()))
    return one_of(leaf, leaf, node)


GENERATORS: dict[str, Generator[Any]] = {
    "booleans": booleans(),
    "u64s": u64s(),
    "i32s": i32s(),
    "f64s": f64s(),
    "optional_u16s": optional(u16s()),
    "result": result(u8s(), booleans()),
    "vecs_u8s": vecs(u8s()),
    "nested_vecs": vecs(vecs(booleans()).mean_length(3)).mean_length(3),
    "choice": choice(["a", "b", "c", "d"]),
    "tree": _tree(),
    "filtered": u8s().filter(lambda v: v % 3 == 0),
}

_GENERATOR_NAMES = sorted(GENERATORS)


def _header(data: bytes) -> tuple[str, Generator[Any], InfoReplay]:
    """Pick a generator from the first bytes; return the rest as a source."""
    source = InfoReplay(data)
    name = choice(_GENERATOR_NAMES).generate(source)
    return name, GENERATORS[name], source


def _decode(gen: Generator[Any], pool: InfoPool) -> tuple[bool, str]:
    try:
        return True, repr(gen.generate_from(pool))
    except DataError:
        return False, ""


def check_determinism(data: bytes) -> None:
    """The same bytes always decode to the same value."""
    name, gen, _ = _header(data)
    pool = InfoPool(data)
    first = _decode(gen, pool)
    second = _decode(gen, pool)
    if first != second:
        msg = f"{name}: non-deterministic decode {first!r} != {second!r}"
        raise InvariantViolation(msg)


def check_recorder_roundtrip(data: bytes) -> None:
    """A recorded pool replays to the recorded value, with well-formed spans."""
    name, gen, _ = _header(data)
    recorder = InfoRecorder(InfoReplay(data))
    try:
        value = repr(recorder.draw(gen))
    except DataError:
        return
    if recorder.depth != 0:
        msg = f"{name}: depth {recorder.depth} after draw"
        raise InvariantViolation(msg)

    pool = recorder.into_pool()
    replayed = _decode(gen, pool)
    if replayed != (True, value):
        msg = f"{name}: recorded {value} but replay gave {replayed!r}"
        raise InvariantViolation(msg)

    for span in pool.spans:
        if span.end > len(pool):
            msg = f"{name}: span {span} outside {len(pool)} bytes"
            raise InvariantViolation(msg)
    if pool.spans[-1] != Span(0, len(pool), 0):
        msg = f"{name}: outermost span not recorded last: {pool.spans}"
        raise InvariantViolation(msg)


def check_shrink_soundness(data: bytes) -> None:
    """minimize() keeps the predicate true and never grows the pool."""
    source = InfoReplay(data)
    threshold = u8s().generate(source)
    window = u8s().between(1, 32).generate(source)
    pool = InfoPool(data[source.position :])

    def predicate(t: InfoRecorder) -> bool:
        return any(t.draw_u8() >= threshold for _ in range(window))

    if not predicate(InfoRecorder(pool.replay())):
        return
    shrunk = minimize(pool, predicate)
    if not predicate(InfoRecorder(shrunk.replay())):
        msg = f"minimal pool {shrunk!r} no longer satisfies threshold {threshold}"
        raise InvariantViolation(msg)
    if (len(shrunk), shrunk.data) > (len(pool), pool.data):
        msg = f"minimal pool {shrunk!r} larger than input {pool!r}"
        raise InvariantViolation(msg)

    again = Shrinker(predicate)
    again.minimize(shrunk)
    if again.improvements:
        msg = f"minimal pool {shrunk!r} shrank further on a second pass"
        raise InvariantViolation(msg)


def check_runner(data: bytes) -> None:
    """Reported failures are real, minimal pools decode to the argument."""
    name, gen, source = _header(data)
    seed = u64s().generate(source)
    limit = u8s().between(1, 64).generate(source)

    def subject(value: Any) -> bool:
        return len(repr(value)) < limit

    try:
        property(gen, CheckConfig(num_tests=10, seed=seed)).check(subject)
    except PropertyFailedError as e:
        if subject(e.argument):
            msg = f"{name}: reported argument {e.argument!r} passes"
            raise InvariantViolation(msg) from e
        decoded = _decode(gen, e.pool)
        if decoded != (True, repr(e.argument)):
            msg = f"{name}: pool {e.pool!r} decodes to {decoded!r}, not {e.argument!r}"
            raise InvariantViolation(msg) from e
    except SkipBudgetExhaustedError as e:
        if name != "filtered":
            msg = f"{name}: skip budget exhausted without filtering: {e}"
            raise InvariantViolation(msg) from e


PATTERNS: dict[str, Callable[[bytes], None]] = {
    "determinism": check_determinism,
    "recorder_roundtrip": check_recorder_roundtrip,
    "shrink_soundness": check_shrink_soundness,
    "runner": check_runner,
}


def run_pattern(pattern: str, data: bytes) -> None:
    """Run one named check against ``data``."""
    PATTERNS[pattern](data)
