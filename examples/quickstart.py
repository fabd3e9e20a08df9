"""Quickstart example for poolcheck.

Shows properties that pass, a property that fails and gets shrunk, and
the different ways a check can answer.

Note: failures are caught and printed here so every example runs. In a
test suite, let PropertyFailedError propagate to the test runner.
"""

from poolcheck import CheckConfig, Err, Ok, PropertyFailedError, property
from poolcheck.diagnostics import DiagnosticFormatter, OutputFormat
from poolcheck.generators import booleans, i32s, optional, tuples, u8s, vecs

# Example 1: A passing property
print("=" * 50)
print("Example 1: Passing Property")
print("=" * 50)

property(vecs(u8s())).check(lambda xs: list(reversed(list(reversed(xs)))) == xs)
print("reverse(reverse(xs)) == xs held for 100 generated lists")

# Example 2: A failing property, shrunk to a minimal counterexample
print("\n" + "=" * 50)
print("Example 2: Shrinking a Counterexample")
print("=" * 50)

try:
    property(vecs(u8s())).check(lambda xs: sum(xs) < 200)
except PropertyFailedError as e:
    print(f"Minimal argument: {e.argument!r}")
    print(f"Replay pool:      {e.pool.hex()}")
    # Output: a short list whose sum is exactly 200

# Example 3: Check results other than bool
print("\n" + "=" * 50)
print("Example 3: Ok / Err / None Results")
print("=" * 50)


def in_range(pair: tuple[int, int]) -> Ok[int] | Err[str]:
    a, b = pair
    total = a + b
    if total > 2**31 - 1:
        return Err(f"{a} + {b} overflows i32")
    return Ok(total)


try:
    property(tuples(i32s(), i32s())).check(in_range)
except PropertyFailedError as e:
    print(f"Minimal argument: {e.argument!r}")
    print(f"Check returned:   {e.outcome.result!r}")

# A check returning None passes unless it raises
property(optional(booleans())).check(lambda flag: None)
print("A check returning None passed")

# Example 4: Exceptions from the check
print("\n" + "=" * 50)
print("Example 4: Raising Checks")
print("=" * 50)


def parse_header(data: list[int]) -> bool:
    if len(data) >= 3 and data[0] == 0:
        msg = f"bad header {data[:3]}"
        raise ValueError(msg)
    return True


try:
    property(vecs(u8s())).check(parse_header)
except PropertyFailedError as e:
    print(f"Minimal argument: {e.argument!r}")
    print(f"Raised:           {e.__cause__!r}")

# Example 5: Reproducible runs and diagnostic formats
print("\n" + "=" * 50)
print("Example 5: Seeds and Diagnostic Formats")
print("=" * 50)

config = CheckConfig(num_tests=200, seed=1234)
try:
    config.property(u8s()).check(lambda n: n < 128)
except PropertyFailedError as e:
    if e.diagnostic is not None:
        print(DiagnosticFormatter().format(e.diagnostic))
        print()
        print(DiagnosticFormatter(output_format=OutputFormat.JSON).format(e.diagnostic))
    # Output: argument 128, the smallest failing value

print("\n" + "=" * 50)
print("[SUCCESS] All examples completed!")
print("=" * 50)
