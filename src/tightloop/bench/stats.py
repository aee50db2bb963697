"""Statistical reduction of benchmark samples.

Turns the raw per-sample durations produced by the sampler into a
``BenchmarkResult``: mean, median, extremes, population standard
deviation and derived throughput.

The standard deviation divides by N, not N-1: the samples are treated
as the complete population of trials actually run rather than an
estimate of some larger population.

Descriptive statistics only; no hypothesis testing and no outlier
rejection.
"""

from __future__ import annotations

import math
import statistics
from dataclasses import dataclass
from typing import Any, Sequence

#: Fractional digits used when rendering millisecond statistics.
MS_PRECISION = 3
#: Fractional digits used when rendering relative-speed percentages.
PCT_PRECISION = 1


class DegenerateTimingError(ValueError):
    """Raised when a sample set cannot yield a finite throughput.

    Happens when the average sample duration is zero (or not finite),
    typically because ``iterations`` is too small for the clock to
    resolve.
    """


# ---------------------------------------------------------------------------
# BenchmarkResult
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BenchmarkResult:
    """Summary statistics for one candidate.

    Durations are in milliseconds at full precision; ``to_dict`` and the
    display layer render them to ``MS_PRECISION`` digits.
    """

    average: float
    min: float
    max: float
    median: float
    standard_deviation: float
    ops_per_second: int
    samples: tuple[float, ...]
    iterations: int

    def to_dict(self) -> dict[str, Any]:
        """Serialize with statistics rendered as fixed-precision strings."""
        return {
            "average": f"{self.average:.{MS_PRECISION}f}",
            "min": f"{self.min:.{MS_PRECISION}f}",
            "max": f"{self.max:.{MS_PRECISION}f}",
            "median": f"{self.median:.{MS_PRECISION}f}",
            "standard_deviation": f"{self.standard_deviation:.{MS_PRECISION}f}",
            "ops_per_second": self.ops_per_second,
            "iterations": self.iterations,
            "samples": list(self.samples),
        }


# ---------------------------------------------------------------------------
# Individual statistics
# ---------------------------------------------------------------------------


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean.

    ``statistics.mean`` sums exactly, so the result never falls outside
    ``[min(values), max(values)]`` through rounding.
    """
    return statistics.mean(values)


def median(values: Sequence[float]) -> float:
    """Middle element of the sorted values.

    For an even count, the mean of the two middle elements.
    """
    return statistics.median(values)


def population_stdev(values: Sequence[float], mu: float | None = None) -> float:
    """Square root of the mean squared deviation (divisor N)."""
    return statistics.pstdev(values, mu)


def ops_per_second(iterations: int, average_ms: float) -> int:
    """Estimated candidate calls per second.

    ``floor(iterations / (average_ms / 1000))``.

    Raises:
        DegenerateTimingError: If *average_ms* is not a positive,
            finite number.
    """
    if not math.isfinite(average_ms) or average_ms <= 0:
        raise DegenerateTimingError(
            f"Average sample duration is {average_ms!r}ms; cannot derive "
            f"operations per second. Increase iterations (currently "
            f"{iterations}) so each sample takes a measurable time."
        )
    return math.floor(iterations * 1000.0 / average_ms)


def relative_speed_pct(fastest_ops: int, ops: int) -> float:
    """Percentage by which *fastest_ops* exceeds *ops*.

    ``(fastest_ops / ops - 1) * 100``.  Returns ``math.inf`` when *ops*
    floored to zero while *fastest_ops* did not.
    """
    if ops == 0:
        return math.inf if fastest_ops > 0 else 0.0
    return (fastest_ops / ops - 1) * 100


# ---------------------------------------------------------------------------
# Reduction
# ---------------------------------------------------------------------------


def reduce(samples: Sequence[float], iterations: int) -> BenchmarkResult:
    """Reduce raw sample durations into a BenchmarkResult.

    Args:
        samples: Elapsed milliseconds, one per timed sample.
        iterations: Calls per sample, used for throughput.

    Raises:
        ValueError: If *samples* is empty.
        DegenerateTimingError: If the average duration is zero.
    """
    if not samples:
        raise ValueError("Cannot reduce an empty sample set; need at least 1 sample.")

    values = tuple(float(v) for v in samples)
    average = mean(values)

    return BenchmarkResult(
        average=average,
        min=min(values),
        max=max(values),
        median=median(values),
        standard_deviation=population_stdev(values, average),
        ops_per_second=ops_per_second(iterations, average),
        samples=values,
        iterations=iterations,
    )
