"""Tests for tightloop.bench.config — defaults, merging, validation, profiles."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from tightloop.bench.config import (
    DEFAULT_ITERATIONS,
    DEFAULT_NAME,
    DEFAULT_SAMPLES,
    DEFAULT_WARMUP_ITERATIONS,
    QUICK_ITERATIONS,
    BenchConfig,
    check_config,
    load_profile,
    merge_config,
    profile_from_dict,
    validate_config,
)


# ---------------------------------------------------------------------------
# BenchConfig
# ---------------------------------------------------------------------------


class TestBenchConfig(unittest.TestCase):
    """Tests for the BenchConfig dataclass."""

    def test_documented_defaults(self) -> None:
        config = BenchConfig()
        self.assertEqual(config.iterations, 1_000_000)
        self.assertEqual(config.warmup_iterations, 1_000)
        self.assertEqual(config.samples, 10)
        self.assertEqual(config.name, "Unnamed Benchmark")

    def test_default_constants(self) -> None:
        self.assertEqual(DEFAULT_ITERATIONS, 1_000_000)
        self.assertEqual(DEFAULT_WARMUP_ITERATIONS, 1_000)
        self.assertEqual(DEFAULT_SAMPLES, 10)
        self.assertEqual(DEFAULT_NAME, "Unnamed Benchmark")
        self.assertEqual(QUICK_ITERATIONS, 1_000)

    def test_immutable(self) -> None:
        config = BenchConfig()
        with self.assertRaises(AttributeError):
            config.iterations = 5  # type: ignore[misc]

    def test_with_name(self) -> None:
        base = BenchConfig(iterations=7, warmup_iterations=2, samples=3, name="base")
        renamed = base.with_name("candidate")
        self.assertEqual(renamed.name, "candidate")
        self.assertEqual(renamed.iterations, 7)
        self.assertEqual(renamed.warmup_iterations, 2)
        self.assertEqual(renamed.samples, 3)
        self.assertEqual(base.name, "base")

    def test_total_calls(self) -> None:
        config = BenchConfig(iterations=100, warmup_iterations=10, samples=3)
        self.assertEqual(config.total_calls, 310)

    def test_to_dict(self) -> None:
        d = BenchConfig(iterations=1, warmup_iterations=0, samples=2, name="x").to_dict()
        self.assertEqual(d, {"iterations": 1, "warmup_iterations": 0, "samples": 2, "name": "x"})


# ---------------------------------------------------------------------------
# merge_config
# ---------------------------------------------------------------------------


class TestMergeConfig(unittest.TestCase):
    """Tests for merge_config()."""

    def test_no_overrides_gives_defaults(self) -> None:
        self.assertEqual(merge_config(), BenchConfig())

    def test_field_by_field_override(self) -> None:
        config = merge_config(iterations=100, samples=3)
        self.assertEqual(config.iterations, 100)
        self.assertEqual(config.samples, 3)
        self.assertEqual(config.warmup_iterations, DEFAULT_WARMUP_ITERATIONS)
        self.assertEqual(config.name, DEFAULT_NAME)

    def test_none_means_not_supplied(self) -> None:
        base = BenchConfig(iterations=5, warmup_iterations=1, samples=2, name="b")
        config = merge_config(base, iterations=None, name=None, samples=9)
        self.assertEqual(config.iterations, 5)
        self.assertEqual(config.name, "b")
        self.assertEqual(config.samples, 9)

    def test_zero_is_a_real_override(self) -> None:
        config = merge_config(warmup_iterations=0)
        self.assertEqual(config.warmup_iterations, 0)

    def test_base_not_modified(self) -> None:
        base = BenchConfig(name="base")
        merge_config(base, name="other")
        self.assertEqual(base.name, "base")

    def test_unknown_option_raises(self) -> None:
        with self.assertRaises(TypeError) as ctx:
            merge_config(iteration=5)
        self.assertIn("iteration", str(ctx.exception))


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidateConfig(unittest.TestCase):
    """Tests for validate_config() and check_config()."""

    def test_valid_config(self) -> None:
        self.assertEqual(validate_config(BenchConfig()), [])

    def test_zero_iterations(self) -> None:
        errors = validate_config(BenchConfig(iterations=0))
        self.assertEqual([e.field for e in errors], ["iterations"])

    def test_zero_samples(self) -> None:
        errors = validate_config(BenchConfig(samples=0))
        self.assertIn("samples", [e.field for e in errors])

    def test_negative_warmup(self) -> None:
        errors = validate_config(BenchConfig(warmup_iterations=-1))
        self.assertEqual([e.field for e in errors], ["warmup_iterations"])

    def test_zero_warmup_is_valid(self) -> None:
        self.assertEqual(validate_config(BenchConfig(warmup_iterations=0)), [])

    def test_single_sample_is_warning(self) -> None:
        errors = validate_config(BenchConfig(samples=1))
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].severity, "warning")

    def test_blank_name(self) -> None:
        errors = validate_config(BenchConfig(name="  "))
        self.assertEqual([e.field for e in errors], ["name"])

    def test_non_integer_counts(self) -> None:
        errors = validate_config(BenchConfig(iterations=1.5, samples=True))  # type: ignore[arg-type]
        fields = [e.field for e in errors]
        self.assertIn("iterations", fields)
        self.assertIn("samples", fields)

    def test_check_config_raises_with_all_errors(self) -> None:
        with self.assertRaises(ValueError) as ctx:
            check_config(BenchConfig(iterations=0, samples=0))
        message = str(ctx.exception)
        self.assertIn("iterations", message)
        self.assertIn("samples", message)

    def test_check_config_returns_valid_config(self) -> None:
        config = BenchConfig(samples=1)
        with self.assertLogs("tightloop", level="WARNING"):
            self.assertIs(check_config(config), config)


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------


class TestProfiles(unittest.TestCase):
    """Tests for load_profile() and profile_from_dict()."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, text: str) -> Path:
        path = self.tmp / "profile.yaml"
        path.write_text(text)
        return path

    def test_load_profile(self) -> None:
        path = self._write(
            "name: Array iteration\n"
            "iterations: 1000\n"
            "warmup_iterations: 100\n"
            "samples: 5\n"
            "args:\n"
            "  - [1, 2, 3]\n"
            "candidates:\n"
            "  builtin: tightloop.demo:builtin_sum\n"
            "  loop: tightloop.demo:for_each_loop\n"
        )
        profile = profile_from_dict(load_profile(path))
        self.assertEqual(
            profile.config,
            BenchConfig(iterations=1000, warmup_iterations=100, samples=5, name="Array iteration"),
        )
        self.assertEqual(profile.args, [[1, 2, 3]])
        self.assertEqual(list(profile.candidates), ["builtin", "loop"])
        self.assertEqual(profile.candidates["loop"], "tightloop.demo:for_each_loop")

    def test_warmup_alias(self) -> None:
        profile = profile_from_dict({"warmup": 7})
        self.assertEqual(profile.config.warmup_iterations, 7)

    def test_missing_keys_use_defaults(self) -> None:
        profile = profile_from_dict({})
        self.assertEqual(profile.config, BenchConfig())
        self.assertEqual(profile.candidates, {})
        self.assertEqual(profile.args, [])

    def test_cli_overrides_win(self) -> None:
        profile = profile_from_dict(
            {"iterations": 1000, "samples": 5, "name": "p"},
            cli_overrides={"iterations": 10, "samples": None, "name": None},
        )
        self.assertEqual(profile.config.iterations, 10)
        self.assertEqual(profile.config.samples, 5)
        self.assertEqual(profile.config.name, "p")

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_profile(self.tmp / "nope.yaml")

    def test_not_a_mapping(self) -> None:
        with self.assertRaises(ValueError):
            load_profile(self._write("- 1\n- 2\n"))

    def test_invalid_yaml(self) -> None:
        with self.assertRaises(ValueError):
            load_profile(self._write("name: [unclosed\n"))

    def test_bad_candidates(self) -> None:
        with self.assertRaises(ValueError):
            profile_from_dict({"candidates": ["a:b"]})
        with self.assertRaises(ValueError):
            profile_from_dict({"candidates": {"a": 3}})

    def test_bad_args(self) -> None:
        with self.assertRaises(ValueError):
            profile_from_dict({"args": "not a list"})


if __name__ == "__main__":
    unittest.main()
