"""
Tests for CLI entry points.

These tests focus on:
- Basic CLI argument validation (search requires text, filters must parse)
- Exit codes for the search/filter/distance commands on a temporary data file
"""

import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from sectionsearch.cli import main

SECTIONS = [
    {
        "identifier": {"department": "CSCI", "courseNumber": 5, "suffix": "", "affiliation": "HM", "sectionNumber": 1},
        "course": {"title": "Intro to CS", "description": "", "primaryAssociation": "HM", "courseAreas": []},
        "instructors": [{"name": "Stone, Christopher"}],
    },
    {
        "identifier": {"department": "MATH", "courseNumber": 55, "suffix": "", "affiliation": "HM", "sectionNumber": 1},
        "course": {"title": "Discrete Math", "description": "", "primaryAssociation": "HM", "courseAreas": []},
        "instructors": [{"name": "Benjamin, Arthur"}],
    },
]


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.data = Path(self._tmp.name) / "sections.json"
        self.data.write_text(json.dumps(SECTIONS), encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def run_cli(self, argv: list) -> tuple:
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit) as ctx:
            main(argv)
        return ctx.exception.code, out.getvalue()

    def test_cli_search_requires_text(self) -> None:
        # search without text should exit with nonzero
        with self.assertRaises(SystemExit) as ctx:
            main(["search", ""])
        self.assertNotEqual(ctx.exception.code, 0)

    def test_cli_search(self) -> None:
        code, out = self.run_cli(["search", "csci", "--data", str(self.data)])
        self.assertEqual(code, 0)
        self.assertIn("CSCI 005 HM-01", out)
        self.assertNotIn("MATH 055", out)

    def test_cli_search_ranks_best_match_first(self) -> None:
        # "math 55" is an exact code prefix for MATH 055, only a fuzzy number hit for CSCI 005
        code, out = self.run_cli(["search", "math 55", "--data", str(self.data)])
        self.assertEqual(code, 0)
        self.assertIn("MATH 055 HM-01", out)
        self.assertNotIn("CSCI 005", out)

    def test_cli_search_hints_trailing_filter_keyword(self) -> None:
        code, out = self.run_cli(["search", "intro dept", "--data", str(self.data)])
        self.assertEqual(code, 0)
        self.assertIn("--filter dept=VALUE", out)

    def test_cli_search_no_results(self) -> None:
        code, out = self.run_cli(["search", "biology", "--data", str(self.data)])
        self.assertEqual(code, 0)
        self.assertIn("No results.", out)

    def test_cli_search_with_filter(self) -> None:
        code, out = self.run_cli(["search", "intro", "--data", str(self.data), "--filter", "dept=math"])
        self.assertEqual(code, 0)
        self.assertIn("No results.", out)

    def test_cli_invalid_filter(self) -> None:
        code, out = self.run_cli(["search", "csci", "--data", str(self.data), "--filter", "foo=bar"])
        self.assertEqual(code, 1)
        self.assertIn("Invalid filter", out)

    def test_cli_filter_requires_filters(self) -> None:
        code, _ = self.run_cli(["filter", "--data", str(self.data)])
        self.assertEqual(code, 1)

    def test_cli_filter(self) -> None:
        code, out = self.run_cli(["filter", "--data", str(self.data), "--filter", "code=math55"])
        self.assertEqual(code, 0)
        self.assertIn("MATH 055 HM-01", out)
        self.assertNotIn("CSCI 005", out)

    def test_cli_limit_must_be_positive(self) -> None:
        # a non-positive limit would drop rows and over-count the remainder
        for limit in ("0", "-1"):
            code, out = self.run_cli(["filter", "--data", str(self.data), "--filter", "dept=", "--limit", limit])
            self.assertEqual(code, 1)
            self.assertIn("--limit must be >= 1", out)
            code, out = self.run_cli(["search", "csci", "--data", str(self.data), "--limit", limit])
            self.assertEqual(code, 1)

    def test_cli_limit_footer(self) -> None:
        code, out = self.run_cli(["filter", "--data", str(self.data), "--filter", "code=", "--filter", "title=", "--limit", "1"])
        self.assertEqual(code, 0)
        self.assertIn("... and 1 more results", out)

    def test_cli_distance(self) -> None:
        code, out = self.run_cli(["distance", "kitten", "sitting"])
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "3")

    def test_cli_distance_negative_cost(self) -> None:
        code, _ = self.run_cli(["distance", "a", "b", "--replace", "-1"])
        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
