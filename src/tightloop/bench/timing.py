"""Timing capture for benchmark samples.

Runs a candidate callable through a discarded warm-up phase, then
times ``samples`` tight loops of ``iterations`` calls each with a
monotonic high-resolution clock.  Durations are reported in
milliseconds.

Exceptions raised by the candidate are never caught here: a broken
candidate aborts the whole measurement.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from typing import Any

from tightloop.bench.config import BenchConfig

log = logging.getLogger("tightloop")

#: A candidate takes the caller's argument list and returns anything.
Candidate = Callable[..., Any]

#: A zero-argument clock returning seconds as a float.
Clock = Callable[[], float]


def warm_up(candidate: Candidate, args: Sequence[Any], count: int) -> None:
    """Invoke *candidate* *count* times, discarding results and timings."""
    for _ in range(count):
        candidate(*args)


def time_loop(
    candidate: Candidate,
    args: Sequence[Any],
    iterations: int,
    *,
    clock: Clock | None = None,
) -> float:
    """Time one sample: *iterations* back-to-back calls of *candidate*.

    Returns:
        Elapsed wall-clock time in milliseconds.
    """
    now = clock or time.perf_counter
    start = now()
    for _ in range(iterations):
        candidate(*args)
    end = now()
    return (end - start) * 1000.0


def execute(
    candidate: Candidate,
    args: Sequence[Any] = (),
    config: BenchConfig | None = None,
    *,
    clock: Clock | None = None,
) -> list[float]:
    """Measure *candidate* according to *config*.

    Args:
        candidate: Callable under test, invoked as ``candidate(*args)``.
        args: Argument list forwarded unchanged to every invocation.
        config: Iteration, warm-up and sample counts.  Validity is the
            caller's precondition; see ``check_config``.
        clock: Clock override (seconds).  Defaults to
            ``time.perf_counter``.

    Returns:
        One elapsed duration in milliseconds per sample, in run order.
    """
    cfg = config or BenchConfig()
    args = tuple(args)

    log.debug("%s: warming up (%d calls)", cfg.name, cfg.warmup_iterations)
    warm_up(candidate, args, cfg.warmup_iterations)

    durations: list[float] = []
    for index in range(cfg.samples):
        elapsed = time_loop(candidate, args, cfg.iterations, clock=clock)
        durations.append(elapsed)
        log.debug(
            "%s: sample %d/%d took %.3fms",
            cfg.name,
            index + 1,
            cfg.samples,
            elapsed,
        )
    return durations
