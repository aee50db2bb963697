"""Command-line interface for tightloop.

Subcommands:
    tightloop run    Benchmark candidates named by module:attr references
    tightloop demo   Benchmark the built-in list-summation candidates
"""

from __future__ import annotations

import ast
import logging
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

import click

from tightloop import __version__
from tightloop.bench.config import BenchConfig, check_config, merge_config
from tightloop.bench.timing import Candidate
from tightloop.logging import setup_logging

log = logging.getLogger("tightloop")

_FORMATS = ("text", "json", "csv", "markdown")


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """tightloop: microbenchmark and rank Python callables."""


# ---------------------------------------------------------------------------
# Shared options
# ---------------------------------------------------------------------------


def bench_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by every benchmarking command."""
    options = [
        click.option(
            "--iterations",
            type=int,
            default=None,
            help="Calls per timed sample.",
        ),
        click.option(
            "--warmup",
            "warmup_iterations",
            type=int,
            default=None,
            help="Discarded warm-up calls before sampling.",
        ),
        click.option(
            "--samples",
            type=int,
            default=None,
            help="Number of timed samples.",
        ),
        click.option("--name", type=str, default=None, help="Report label."),
        click.option(
            "--format",
            "fmt",
            type=click.Choice(_FORMATS),
            default="text",
            show_default=True,
            help="Report format.",
        ),
        click.option(
            "--output",
            "-o",
            type=click.Path(path_type=Path),
            default=None,
            help="Write the report to a file instead of stdout.",
        ),
        click.option("-v", "--verbose", is_flag=True, help="Show per-sample timings."),
        click.option("-q", "--quiet", is_flag=True, help="Only show warnings and errors."),
        click.option(
            "--log-file",
            type=click.Path(path_type=Path),
            default=None,
            help="Also write a DEBUG log to this file.",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def parse_arg(text: str) -> Any:
    """Parse a ``--arg`` value as a Python literal, else keep the string."""
    try:
        return ast.literal_eval(text)
    except (ValueError, SyntaxError):
        return text


def render_report(report: Any, fmt: str) -> str:
    """Render a ComparisonReport in the requested format."""
    from tightloop.bench.display import format_report
    from tightloop.bench.export import export_csv, export_json, export_markdown

    if fmt == "json":
        return export_json(report)
    if fmt == "csv":
        return export_csv(report)
    if fmt == "markdown":
        return export_markdown(report)
    return format_report(report) + "\n"


def _execute(
    candidates: Mapping[str, Candidate],
    args: Sequence[Any],
    config: BenchConfig,
    fmt: str,
    output: Path | None,
) -> None:
    """Run the comparison and emit the report; exit non-zero on failure."""
    from tightloop.bench.compare import compare_candidates

    try:
        report = compare_candidates(candidates, args, config)
    except KeyboardInterrupt:
        click.echo("\nBenchmark interrupted.", err=True)
        raise SystemExit(130)  # noqa: B904
    except Exception as exc:  # noqa: BLE001
        log.debug("Benchmark aborted", exc_info=True)
        click.echo(f"Error: benchmark aborted: {type(exc).__name__}: {exc}", err=True)
        raise SystemExit(1) from exc

    text = render_report(report, fmt)
    if output:
        output.write_text(text)
        click.echo(f"Report written to {output}")
    else:
        click.echo(text, nl=False)


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------


@main.command("run")
@click.argument("candidate_refs", nargs=-1)
@click.option(
    "--profile",
    "profile_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="YAML profile with options, args and candidates.",
)
@click.option(
    "--arg",
    "arg_values",
    type=str,
    multiple=True,
    help="Argument passed to every candidate call (repeatable, Python literal).",
)
@bench_options
def run(  # noqa: PLR0913
    candidate_refs: tuple[str, ...],
    profile_path: Path | None,
    arg_values: tuple[str, ...],
    iterations: int | None,
    warmup_iterations: int | None,
    samples: int | None,
    name: str | None,
    fmt: str,
    output: Path | None,
    verbose: bool,
    quiet: bool,
    log_file: Path | None,
) -> None:
    """Benchmark and rank candidate callables.

    Each CANDIDATE_REF is '[label=]module:attr' or '[label=]file.py:attr'.
    Candidates run one after another, in the order given.

    \b
    Examples:
        tightloop run tightloop.demo:builtin_sum tightloop.demo:for_each_loop \\
            --arg "[1, 2, 3, 4]" --iterations 1000

        tightloop run --profile bench.yaml --samples 20
    """
    from tightloop.bench.candidates import load_candidates
    from tightloop.bench.config import load_profile, profile_from_dict

    setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)

    overrides = {
        "iterations": iterations,
        "warmup_iterations": warmup_iterations,
        "samples": samples,
        "name": name,
    }

    try:
        if profile_path:
            profile = profile_from_dict(load_profile(profile_path), cli_overrides=overrides)
            config = profile.config
            candidates = load_candidates(profile.candidates)
            args: list[Any] = list(profile.args)
        else:
            config = merge_config(**overrides)
            candidates = {}
            args = []

        for label, candidate in load_candidates(list(candidate_refs)).items():
            if label in candidates:
                raise ValueError(
                    f"Duplicate candidate label: '{label}' is defined by the profile "
                    "and on the command line"
                )
            candidates[label] = candidate
        if arg_values:
            args = [parse_arg(a) for a in arg_values]
        check_config(config)
    except (ValueError, TypeError) as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc

    if not candidates:
        raise click.UsageError(
            "At least one CANDIDATE_REF or a --profile with candidates is required."
        )

    _execute(candidates, args, config, fmt, output)


# ---------------------------------------------------------------------------
# demo
# ---------------------------------------------------------------------------


@main.command("demo")
@click.option(
    "--size",
    type=int,
    default=None,
    help="Length of the list being summed (default: 10000).",
)
@bench_options
def demo(  # noqa: PLR0913
    size: int | None,
    iterations: int | None,
    warmup_iterations: int | None,
    samples: int | None,
    name: str | None,
    fmt: str,
    output: Path | None,
    verbose: bool,
    quiet: bool,
    log_file: Path | None,
) -> None:
    """Compare five ways of summing a list of integers."""
    from tightloop.demo import (
        DEFAULT_SIZE,
        DEMO_CONFIG,
        array_sum_candidates,
        generate_test_array,
    )

    setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)

    if size is not None and size < 0:
        raise click.UsageError("--size cannot be negative")

    try:
        config = check_config(
            merge_config(
                DEMO_CONFIG,
                iterations=iterations,
                warmup_iterations=warmup_iterations,
                samples=samples,
                name=name,
            )
        )
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc

    values = generate_test_array(DEFAULT_SIZE if size is None else size)
    _execute(array_sum_candidates(), [values], config, fmt, output)
