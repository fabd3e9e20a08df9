"""Recursive generators: arithmetic expression trees.

lazy() defers building a generator until it is drawn from, so a
generator can refer to itself. The tree's depth is bounded by
CheckConfig.max_depth; values nested deeper are skipped, not failed.

Run with:
    python examples/expression_tree.py
"""

from __future__ import annotations

from dataclasses import dataclass

from poolcheck import CheckConfig, PropertyFailedError, property
from poolcheck.generators import Generator, lazy, one_of, tuples, u8s


@dataclass(frozen=True)
class Lit:
    value: int


@dataclass(frozen=True)
class Add:
    left: Expr
    right: Expr


@dataclass(frozen=True)
class Mul:
    left: Expr
    right: Expr


type Expr = Lit | Add | Mul


def evaluate(expr: Expr) -> int:
    match expr:
        case Lit(value):
            return value
        case Add(left, right):
            return evaluate(left) + evaluate(right)
        case Mul(left, right):
            return evaluate(left) * evaluate(right)


def render(expr: Expr) -> str:
    match expr:
        case Lit(value):
            return str(value)
        case Add(left, right):
            return f"{render(left)} + {render(right)}"
        case Mul(left, right):
            return f"{render(left)} * {render(right)}"


def exprs() -> Generator[Expr]:
    lits = u8s().map(Lit)
    pair = lazy(lambda: tuples(exprs(), exprs()))
    return one_of(
        lits,
        lits,
        pair.map(lambda p: Add(*p)),
        pair.map(lambda p: Mul(*p)),
    )


def render_agrees_with_evaluate(expr: Expr) -> bool:
    """Wrong on purpose: render() never parenthesizes an Add under a Mul."""
    return eval(render(expr)) == evaluate(expr)  # noqa: S307 - digits and operators only


def main() -> None:
    property(exprs()).check(lambda e: evaluate(e) >= 0)
    print("evaluate(e) >= 0 held for every generated tree")

    try:
        CheckConfig(num_tests=1000, max_depth=32).property(exprs()).check(
            render_agrees_with_evaluate
        )
    except PropertyFailedError as e:
        print(f"Minimal counterexample: {render(e.argument)}")
        print(f"  evaluates to {evaluate(e.argument)}")
        print(f"  renders as   {eval(render(e.argument))}")  # noqa: S307


if __name__ == "__main__":
    main()
