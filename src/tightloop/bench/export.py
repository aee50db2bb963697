"""Export comparison results to JSON, CSV and Markdown.

CSV format: one row per candidate per sample (long format for
pandas/R).  This is the raw data, every single measurement.

Markdown format: a summary table, fastest first, suitable for
reports, README files and GitHub issues.
"""

from __future__ import annotations

import csv
import io
import json

from tightloop.bench.compare import ComparisonReport
from tightloop.bench.display import format_relative_line
from tightloop.formatting import format_ms, format_ops


def export_json(report: ComparisonReport) -> str:
    """Export the full report, raw samples included, as indented JSON."""
    return json.dumps(report.to_dict(), indent=2, allow_nan=False) + "\n"


def export_csv(report: ComparisonReport) -> str:
    """Export raw samples as CSV (long format).

    Columns:
        candidate, sample, iterations, elapsed_ms, ms_per_call
    """
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["candidate", "sample", "iterations", "elapsed_ms", "ms_per_call"])

    for name, result in report.results.items():
        for index, elapsed in enumerate(result.samples, start=1):
            writer.writerow(
                [
                    name,
                    index,
                    result.iterations,
                    f"{elapsed:.6f}",
                    f"{elapsed / result.iterations:.9f}",
                ]
            )

    return output.getvalue()


def export_markdown(report: ComparisonReport) -> str:
    """Export a summary table plus relative-speed lines as Markdown."""
    cfg = report.config
    lines = [
        f"## {report.name}",
        "",
        f"{cfg.samples} samples \u00d7 {cfg.iterations:,} iterations "
        f"({cfg.warmup_iterations:,} warm-up, {cfg.total_calls:,} calls per candidate)",
        "",
        "| Candidate | Average (ms) | Median (ms) | Min (ms) | Max (ms) "
        "| Std dev (ms) | Ops/sec |",
        "|---|---:|---:|---:|---:|---:|---:|",
    ]

    for name, result in report.ranking():
        label = f"**{name}** (fastest)" if name == report.fastest else name
        lines.append(
            f"| {label} "
            f"| {format_ms(result.average)} "
            f"| {format_ms(result.median)} "
            f"| {format_ms(result.min)} "
            f"| {format_ms(result.max)} "
            f"| {format_ms(result.standard_deviation)} "
            f"| {format_ops(result.ops_per_second)} |"
        )

    relative = report.relative_speeds
    if relative:
        lines.append("")
        for name, pct in relative.items():
            lines.append(f"- {format_relative_line(report.fastest, name, pct)}")

    return "\n".join(lines) + "\n"
