"""Terminal display formatting for benchmark results.

Every function here receives already-computed statistics and returns
a string; nothing is measured or printed.
"""

from __future__ import annotations

from tightloop.bench.compare import ComparisonReport
from tightloop.bench.stats import MS_PRECISION, PCT_PRECISION, BenchmarkResult
from tightloop.formatting import (
    format_ms,
    format_ops,
    format_relative,
    format_section_header,
)

FASTEST_MARKER = " (Fastest)"


def format_result(name: str, result: BenchmarkResult, *, fastest: bool = False) -> str:
    """Format one candidate's statistics as an indented block."""
    lines = [
        f"{name}{FASTEST_MARKER if fastest else ''}:",
        f"  Average: {format_ms(result.average, MS_PRECISION)}ms",
        f"  Median: {format_ms(result.median, MS_PRECISION)}ms",
        f"  Min: {format_ms(result.min, MS_PRECISION)}ms",
        f"  Max: {format_ms(result.max, MS_PRECISION)}ms",
        f"  Standard Deviation: {format_ms(result.standard_deviation, MS_PRECISION)}ms",
        f"  Ops/sec: {format_ops(result.ops_per_second)}",
    ]
    return "\n".join(lines)


def format_relative_line(fastest: str, name: str, pct: float) -> str:
    """``'<fastest> is <pct>% faster than <name>'``."""
    return f"{fastest} is {format_relative(pct, PCT_PRECISION)}% faster than {name}"


def format_report(report: ComparisonReport) -> str:
    """Format a complete comparison for terminal output.

    Shows the configuration, one block per candidate in run order
    (fastest flagged), then one relative-speed line per other candidate.
    """
    cfg = report.config
    lines: list[str] = [
        format_section_header(f"Benchmark Results: {report.name}"),
        (
            f"{cfg.samples} samples x {cfg.iterations:,} iterations "
            f"({cfg.warmup_iterations:,} warm-up)"
        ),
        "",
    ]

    for name, result in report.results.items():
        lines.append(format_result(name, result, fastest=name == report.fastest))
        lines.append("")

    for name, pct in report.relative_speeds.items():
        lines.append(format_relative_line(report.fastest, name, pct))

    return "\n".join(lines).rstrip("\n")
