"""Shared text formatting helpers for tightloop.

Provides functions for formatting durations, throughput figures,
percentages and section headers used by the report renderers.
"""

from __future__ import annotations

import math


def format_duration(seconds: float) -> str:
    """Format seconds as human-readable duration.

    Examples: ``'8s'``, ``'1m 23s'``, ``'1h 12m 34s'``. Always whole seconds
    (truncated, not rounded).
    """
    total = int(seconds)
    if total >= 3600:
        h = total // 3600
        m = (total % 3600) // 60
        s = total % 60
        return f"{h}h {m:2d}m {s:2d}s"
    if total >= 60:
        m = total // 60
        s = total % 60
        return f"{m}m {s:2d}s"
    return f"{total}s"


def format_ms(value: float, precision: int = 3) -> str:
    """Format a millisecond value with fixed precision: ``'1.234'``."""
    if math.isnan(value):
        return "N/A"
    return f"{value:.{precision}f}"


def format_ops(ops: int) -> str:
    """Format an operations-per-second count with thousands grouping.

    ``1000000`` becomes ``'1,000,000'``.
    """
    return f"{ops:,}"


def format_relative(pct: float, precision: int = 1) -> str:
    """Format a relative-speed percentage: ``'100.0'``.

    Infinite values (the slower side floored to zero ops/sec) render as
    ``'inf'``.
    """
    if math.isinf(pct):
        return "inf"
    return f"{pct:.{precision}f}"


def format_section_header(title: str, width: int = 60) -> str:
    """Format a section header: ``'\u2500\u2500\u2500 Title \u2500\u2500...'``."""
    prefix = "\u2500\u2500\u2500 "
    suffix_len = width - len(prefix) - len(title) - 1
    suffix = " " + "\u2500" * max(0, suffix_len)
    return prefix + title + suffix
