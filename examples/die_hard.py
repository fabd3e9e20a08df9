"""Solve the Die Hard water jug puzzle by asking poolcheck for a counterexample.

A 3 gallon and a 5 gallon jug, an unlimited tap: measure exactly 4
gallons. The property claims the big jug never holds 4 gallons; the
shrunk counterexample is a short sequence of moves that solves the puzzle.

Run with:
    python examples/die_hard.py

Expected output is of the form:
    Predicate failed for argument [<Op.FILL_BIG: ...>, <Op.BIG_TO_SMALL: ...>, ...]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from poolcheck import CheckConfig, Err, Ok, PropertyFailedError
from poolcheck.generators import consts, one_of, vecs

BIG = 5
SMALL = 3


class Op(Enum):
    FILL_SMALL = "fill small jug"
    FILL_BIG = "fill big jug"
    EMPTY_SMALL = "empty small jug"
    EMPTY_BIG = "empty big jug"
    SMALL_TO_BIG = "pour small into big"
    BIG_TO_SMALL = "pour big into small"


@dataclass
class State:
    big: int = 0
    small: int = 0

    def apply(self, op: Op) -> None:
        match op:
            case Op.FILL_SMALL:
                self.small = SMALL
            case Op.FILL_BIG:
                self.big = BIG
            case Op.EMPTY_SMALL:
                self.small = 0
            case Op.EMPTY_BIG:
                self.big = 0
            case Op.SMALL_TO_BIG:
                poured = min(self.small, BIG - self.big)
                self.big += poured
                self.small -= poured
            case Op.BIG_TO_SMALL:
                poured = min(self.big, SMALL - self.small)
                self.small += poured
                self.big -= poured

    def assert_invariants(self) -> None:
        assert 0 <= self.big <= BIG
        assert 0 <= self.small <= SMALL

    @property
    def finished(self) -> bool:
        return self.big == 4


ops = one_of(*(consts(op) for op in Op))


def never_measures_four(moves: list[Op]) -> Ok[State] | Err[State]:
    state = State()
    for op in moves:
        state.apply(op)
        state.assert_invariants()
        if state.finished:
            return Err(state)
    return Ok(state)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    config = CheckConfig(num_tests=10_000)
    try:
        config.property(vecs(ops)).check(never_measures_four)
    except PropertyFailedError as e:
        print(e)
        print()
        for step, op in enumerate(e.argument, 1):
            print(f"{step}. {op.value}")
    else:
        print("No solution found; try more tests")


if __name__ == "__main__":
    main()
