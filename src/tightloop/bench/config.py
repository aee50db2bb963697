"""Benchmark configuration and profile loading.

Handles:
- The documented default configuration constants.
- Merging caller-supplied overrides onto a base configuration.
- Validating the configuration invariants before execution.
- Loading benchmark profiles from YAML files.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

log = logging.getLogger("tightloop")


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

#: Inner-loop repeat count per sample.
DEFAULT_ITERATIONS = 1_000_000
#: Discarded pre-runs before the first sample.
DEFAULT_WARMUP_ITERATIONS = 1_000
#: Number of timed samples.
DEFAULT_SAMPLES = 10
#: Report label used when no name is given.
DEFAULT_NAME = "Unnamed Benchmark"

#: Lower inner-loop count for candidates that do real work per call
#: (e.g. summing a 10,000-element list).
QUICK_ITERATIONS = 1_000


# ---------------------------------------------------------------------------
# BenchConfig
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BenchConfig:
    """Resolved configuration for a single run or compare invocation."""

    iterations: int = DEFAULT_ITERATIONS  # Inner-loop repeat count per sample
    warmup_iterations: int = DEFAULT_WARMUP_ITERATIONS  # Discarded pre-runs
    samples: int = DEFAULT_SAMPLES  # Number of timed trials
    name: str = DEFAULT_NAME

    @property
    def total_calls(self) -> int:
        """Total candidate invocations (warm-up + timed)."""
        return self.warmup_iterations + self.iterations * self.samples

    def with_name(self, name: str) -> BenchConfig:
        """Return a copy of this configuration relabelled as *name*."""
        return dataclasses.replace(self, name=name)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "iterations": self.iterations,
            "warmup_iterations": self.warmup_iterations,
            "samples": self.samples,
            "name": self.name,
        }


_FIELD_NAMES = frozenset(f.name for f in dataclasses.fields(BenchConfig))


def merge_config(base: BenchConfig | None = None, **overrides: Any) -> BenchConfig:
    """Apply *overrides* field by field onto *base*.

    An override of ``None`` means "not supplied" and keeps the base
    value.  Unknown field names raise ``TypeError``.

    Args:
        base: Configuration to start from (default: the documented defaults).
        **overrides: Field values to replace.

    Returns:
        A new BenchConfig; *base* is never modified.
    """
    unknown = sorted(set(overrides) - _FIELD_NAMES)
    if unknown:
        raise TypeError(
            f"Unknown benchmark option(s): {', '.join(unknown)}. "
            f"Valid options: {', '.join(sorted(_FIELD_NAMES))}"
        )
    supplied = {k: v for k, v in overrides.items() if v is not None}
    return dataclasses.replace(base or BenchConfig(), **supplied)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@dataclass
class ValidationError:
    """A single configuration validation error."""

    field: str
    message: str
    severity: str = "error"  # "error" or "warning"


def validate_config(config: BenchConfig) -> list[ValidationError]:
    """Validate a benchmark configuration.

    Returns a list of validation errors.  Empty list means valid.
    """
    errors: list[ValidationError] = []

    for field_name in ("iterations", "warmup_iterations", "samples"):
        value = getattr(config, field_name)
        if isinstance(value, bool) or not isinstance(value, int):
            errors.append(
                ValidationError(
                    field=field_name,
                    message=f"Must be an integer (got {value!r}).",
                )
            )

    if not errors:
        if config.iterations < 1:
            errors.append(
                ValidationError(
                    field="iterations",
                    message=f"Need at least 1 iteration per sample (got {config.iterations}).",
                )
            )
        if config.samples < 1:
            errors.append(
                ValidationError(
                    field="samples",
                    message=f"Need at least 1 timed sample (got {config.samples}).",
                )
            )
        if config.warmup_iterations < 0:
            errors.append(
                ValidationError(
                    field="warmup_iterations",
                    message=(
                        f"Warm-up iterations cannot be negative (got {config.warmup_iterations})."
                    ),
                )
            )
        elif config.samples == 1:
            errors.append(
                ValidationError(
                    field="samples",
                    message="A single sample always reports a standard deviation of 0.",
                    severity="warning",
                )
            )

    if not str(config.name).strip():
        errors.append(
            ValidationError(
                field="name",
                message="Benchmark name must be non-empty.",
            )
        )

    return errors


def check_config(config: BenchConfig) -> BenchConfig:
    """Validate *config*, logging warnings and raising on errors.

    Raises:
        ValueError: Listing every fatal validation error.
    """
    errors = validate_config(config)
    fatal = [e for e in errors if e.severity == "error"]
    for w in errors:
        if w.severity == "warning":
            log.warning("Config warning: %s: %s", w.field, w.message)
    if fatal:
        messages = [f"  {e.field}: {e.message}" for e in fatal]
        raise ValueError("Invalid benchmark configuration:\n" + "\n".join(messages))
    return config


# ---------------------------------------------------------------------------
# YAML profile loading
# ---------------------------------------------------------------------------


@dataclass
class BenchProfile:
    """A benchmark profile: configuration plus candidate references."""

    config: BenchConfig
    candidates: dict[str, str] = dataclasses.field(default_factory=dict)
    args: list[Any] = dataclasses.field(default_factory=list)


def load_profile(profile_path: Path) -> dict[str, Any]:
    """Load a benchmark profile from a YAML file.

    Profile format::

        name: "Array iteration"
        iterations: 1000
        warmup_iterations: 100
        samples: 5
        args:
          - [1, 2, 3]
        candidates:
          builtin sum: "tightloop.demo:builtin_sum"
          for loop: "./my_candidates.py:for_loop"

    Returns:
        The parsed YAML as a dict.
    """
    import yaml

    if not profile_path.exists():
        raise FileNotFoundError(f"Profile not found: {profile_path}")

    try:
        data = yaml.safe_load(profile_path.read_text())
    except yaml.YAMLError as exc:
        raise ValueError(f"Profile is not valid YAML: {profile_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Profile must be a YAML mapping, got {type(data).__name__}")

    return data


def profile_from_dict(
    profile_data: dict[str, Any],
    *,
    cli_overrides: dict[str, Any] | None = None,
) -> BenchProfile:
    """Build a BenchProfile from a parsed YAML profile.

    CLI overrides take precedence over profile values; a value of
    ``None`` in *cli_overrides* means the option was not given.

    Args:
        profile_data: Parsed YAML profile dict.
        cli_overrides: Dict of CLI option values keyed by BenchConfig
            field name.
    """
    cli = cli_overrides or {}

    warmup = profile_data.get("warmup_iterations", profile_data.get("warmup"))
    config = merge_config(
        iterations=profile_data.get("iterations"),
        warmup_iterations=warmup,
        samples=profile_data.get("samples"),
        name=profile_data.get("name"),
    )
    config = merge_config(config, **cli)

    candidates_data = profile_data.get("candidates", {}) or {}
    if not isinstance(candidates_data, dict):
        raise ValueError("Profile 'candidates' must be a mapping of name -> 'module:attr'")
    candidates: dict[str, str] = {}
    for name, ref in candidates_data.items():
        if not isinstance(ref, str) or not ref.strip():
            raise ValueError(f"Candidate '{name}' must be a 'module:attr' reference string")
        candidates[str(name)] = ref.strip()

    args = profile_data.get("args", []) or []
    if not isinstance(args, list):
        raise ValueError(f"Profile 'args' must be a list, got {type(args).__name__}")

    return BenchProfile(config=config, candidates=candidates, args=args)
