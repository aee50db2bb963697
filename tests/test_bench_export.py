"""Tests for tightloop.bench.export — JSON, CSV and Markdown export."""

from __future__ import annotations

import csv
import io
import json
import unittest

from bench_test_helpers import make_result

from tightloop.bench.compare import ComparisonReport
from tightloop.bench.config import BenchConfig
from tightloop.bench.export import export_csv, export_json, export_markdown
from tightloop.bench.stats import reduce


def _report() -> ComparisonReport:
    report = ComparisonReport(
        config=BenchConfig(iterations=100, warmup_iterations=0, samples=2, name="Export")
    )
    report.results = {
        "slow": reduce([4.0, 4.0], 100),
        "fast": reduce([1.0, 3.0], 100),
    }
    report.fastest = "fast"
    return report


class TestExportJson(unittest.TestCase):
    """Tests for export_json()."""

    def test_round_trips_through_json(self) -> None:
        data = json.loads(export_json(_report()))
        self.assertEqual(data["fastest"], "fast")
        self.assertEqual(data["config"]["iterations"], 100)
        self.assertEqual(data["results"]["fast"]["average"], "2.000")
        self.assertEqual(data["results"]["fast"]["samples"], [1.0, 3.0])
        self.assertEqual(data["results"]["slow"]["ops_per_second"], 25_000)
        self.assertEqual(data["relative_speeds"], {"slow": 100.0})

    def test_infinite_relative_speed_is_valid_json(self) -> None:
        report = _report()
        report.results = {"fast": make_result(10), "slow": make_result(0)}
        report.fastest = "fast"

        def reject(token: str) -> None:
            raise ValueError(token)

        data = json.loads(export_json(report), parse_constant=reject)
        self.assertEqual(data["relative_speeds"], {"slow": "inf"})


class TestExportCsv(unittest.TestCase):
    """Tests for export_csv()."""

    def test_one_row_per_sample(self) -> None:
        rows = list(csv.reader(io.StringIO(export_csv(_report()))))
        self.assertEqual(
            rows[0], ["candidate", "sample", "iterations", "elapsed_ms", "ms_per_call"]
        )
        self.assertEqual(len(rows), 1 + 4)
        self.assertEqual(rows[1], ["slow", "1", "100", "4.000000", "0.040000000"])
        self.assertEqual(rows[3][:2], ["fast", "1"])
        self.assertEqual(rows[4][3], "3.000000")


class TestExportMarkdown(unittest.TestCase):
    """Tests for export_markdown()."""

    def test_table_and_relative_lines(self) -> None:
        text = export_markdown(_report())
        self.assertTrue(text.startswith("## Export\n"))
        self.assertIn("| Candidate | Average (ms) |", text)
        self.assertIn("| slow | 4.000 | 4.000 | 4.000 | 4.000 | 0.000 | 25,000 |", text)
        self.assertIn("| **fast** (fastest) | 2.000 |", text)
        self.assertIn("- fast is 100.0% faster than slow", text)

    def test_rows_fastest_first(self) -> None:
        lines = export_markdown(_report()).splitlines()
        rows = [line for line in lines if line.startswith("| ") and "Candidate" not in line]
        self.assertTrue(rows[0].startswith("| **fast** (fastest)"))
        self.assertTrue(rows[1].startswith("| slow "))

    def test_config_line_counts_calls(self) -> None:
        text = export_markdown(_report())
        self.assertIn("(0 warm-up, 200 calls per candidate)", text)

    def test_single_candidate(self) -> None:
        report = _report()
        report.results = {"fast": report.results["fast"]}
        self.assertNotIn("faster than", export_markdown(report))


if __name__ == "__main__":
    unittest.main()
