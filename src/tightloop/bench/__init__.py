"""Benchmarking subsystem for tightloop.

Provides the sampler (warm-up plus timed loops), the statistical
reducer, and the comparator that ranks candidates by throughput.
"""

from tightloop.bench.compare import ComparisonReport, compare, compare_candidates, run
from tightloop.bench.config import BenchConfig, merge_config
from tightloop.bench.stats import BenchmarkResult, DegenerateTimingError, reduce
from tightloop.bench.timing import execute

__all__ = [
    "BenchConfig",
    "BenchmarkResult",
    "ComparisonReport",
    "DegenerateTimingError",
    "compare",
    "compare_candidates",
    "execute",
    "merge_config",
    "reduce",
    "run",
]
