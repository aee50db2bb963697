"""Benchmark comparison across candidates.

Runs each candidate in turn (sequentially, in mapping order), reduces
its samples, picks the fastest by operations per second and computes
how much faster it is than every other candidate.

There are no retries: if any candidate raises, the exception propagates
and no report is produced.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from tightloop.bench.config import BenchConfig, merge_config
from tightloop.bench.stats import BenchmarkResult, reduce, relative_speed_pct
from tightloop.bench.timing import Candidate, Clock, execute
from tightloop.formatting import format_duration

log = logging.getLogger("tightloop")


# ---------------------------------------------------------------------------
# ComparisonReport
# ---------------------------------------------------------------------------


@dataclass
class ComparisonReport:
    """Results for every candidate of one compare invocation."""

    config: BenchConfig
    results: dict[str, BenchmarkResult] = field(default_factory=dict)
    fastest: str = ""

    @property
    def name(self) -> str:
        """Label of the comparison as a whole."""
        return self.config.name

    @property
    def fastest_result(self) -> BenchmarkResult:
        return self.results[self.fastest]

    @property
    def relative_speeds(self) -> dict[str, float]:
        """Percent by which the fastest exceeds each other candidate.

        Keys follow the candidates' run order; the fastest is omitted.
        """
        fastest_ops = self.fastest_result.ops_per_second
        return {
            name: relative_speed_pct(fastest_ops, result.ops_per_second)
            for name, result in self.results.items()
            if name != self.fastest
        }

    def ranking(self) -> list[tuple[str, BenchmarkResult]]:
        """Candidates ordered from highest to lowest ops/sec.

        Equal throughput keeps run order.
        """
        return sorted(
            self.results.items(),
            key=lambda item: item[1].ops_per_second,
            reverse=True,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict.

        An infinite relative speed (the slower side floored to zero ops/sec)
        is written as the string ``"inf"``.
        """
        return {
            "config": self.config.to_dict(),
            "fastest": self.fastest,
            "results": {name: r.to_dict() for name, r in self.results.items()},
            "relative_speeds": {
                name: round(pct, 1) if math.isfinite(pct) else "inf"
                for name, pct in self.relative_speeds.items()
            },
        }


def pick_fastest(results: Mapping[str, BenchmarkResult]) -> str:
    """Name of the candidate with the highest ops/sec.

    Only a strictly greater value displaces the current leader, so on a
    tie the candidate seen first wins.
    """
    fastest = ""
    best = -1
    for name, result in results.items():
        if result.ops_per_second > best:
            fastest, best = name, result.ops_per_second
    return fastest


# ---------------------------------------------------------------------------
# Running
# ---------------------------------------------------------------------------


def run(
    candidate: Candidate,
    args: Sequence[Any] = (),
    config: BenchConfig | None = None,
    *,
    clock: Clock | None = None,
    **overrides: Any,
) -> BenchmarkResult:
    """Benchmark a single candidate.

    Args:
        candidate: Callable under test, invoked as ``candidate(*args)``.
        args: Arguments forwarded to every invocation.
        config: Base configuration (default: the documented defaults).
        clock: Clock override passed to the sampler.
        **overrides: Per-call BenchConfig field overrides.

    Returns:
        The reduced BenchmarkResult.
    """
    cfg = merge_config(config, **overrides)
    durations = execute(candidate, args, cfg, clock=clock)
    return reduce(durations, cfg.iterations)


def compare_candidates(
    candidates: Mapping[str, Candidate],
    args: Sequence[Any] = (),
    config: BenchConfig | None = None,
    *,
    clock: Clock | None = None,
    **overrides: Any,
) -> ComparisonReport:
    """Benchmark every candidate and build a ComparisonReport.

    Each candidate runs with the base configuration relabelled to its
    own name.

    Raises:
        ValueError: If *candidates* is empty.
        Exception: Whatever a candidate raises, unchanged.
    """
    if not candidates:
        raise ValueError("Nothing to compare: no candidates given.")

    cfg = merge_config(config, **overrides)
    report = ComparisonReport(config=cfg)
    started = time.monotonic()

    for name, candidate in candidates.items():
        log.info("Running benchmark for: %s", name)
        report.results[name] = run(candidate, args, cfg.with_name(name), clock=clock)
        log.debug(
            "%s: %d ops/sec (average %.3fms)",
            name,
            report.results[name].ops_per_second,
            report.results[name].average,
        )

    report.fastest = pick_fastest(report.results)
    log.info(
        "Compared %d candidates in %s; fastest: %s",
        len(report.results),
        format_duration(time.monotonic() - started),
        report.fastest,
    )
    return report


def compare(
    candidates: Mapping[str, Candidate],
    args: Sequence[Any] = (),
    config: BenchConfig | None = None,
    *,
    clock: Clock | None = None,
    **overrides: Any,
) -> ComparisonReport:
    """Benchmark every candidate and print the text report.

    The report is only emitted once every candidate has completed.
    """
    import click

    from tightloop.bench.display import format_report

    report = compare_candidates(candidates, args, config, clock=clock, **overrides)
    click.echo(format_report(report))
    return report
