"""Built-in example candidates: five ways to sum a list of integers.

Each candidate takes the list as its single argument, so one shared
input is reused across every call.  ``DEMO_CONFIG`` holds the settings
the ``tightloop demo`` command uses.
"""

from __future__ import annotations

import functools
import operator

from tightloop.bench.config import BenchConfig, QUICK_ITERATIONS
from tightloop.bench.timing import Candidate

DEFAULT_SIZE = 10_000

DEMO_CONFIG = BenchConfig(
    iterations=QUICK_ITERATIONS,
    warmup_iterations=100,
    samples=5,
    name="Array iteration",
)


def generate_test_array(size: int = DEFAULT_SIZE) -> list[int]:
    """``[0, 1, ..., size - 1]``."""
    return list(range(size))


def index_loop(values: list[int]) -> int:
    total = 0
    for i in range(len(values)):
        total += values[i]
    return total


def cached_length_loop(values: list[int]) -> int:
    total = 0
    n = len(values)
    i = 0
    while i < n:
        total += values[i]
        i += 1
    return total


def for_each_loop(values: list[int]) -> int:
    total = 0
    for value in values:
        total += value
    return total


def functional_reduce(values: list[int]) -> int:
    return functools.reduce(operator.add, values, 0)


def builtin_sum(values: list[int]) -> int:
    return sum(values)


def array_sum_candidates() -> dict[str, Candidate]:
    """The summation candidates in report order."""
    return {
        "Index loop": index_loop,
        "Cached length while loop": cached_length_loop,
        "for...in loop": for_each_loop,
        "functools.reduce": functional_reduce,
        "Builtin sum": builtin_sum,
    }
