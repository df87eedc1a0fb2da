# tests/gates/test_gate_reports.py
"""Testes de leitura dos relatórios JUnit/Cobertura e dos nomes de arquivo."""

import re
from datetime import datetime

import pytest

from atlas_buildflow.core.exceptions import LoadError
from atlas_buildflow.gates.results import (
    COVERAGE,
    LINT,
    compute_coverage_percent,
    parse_coverage_xml,
    parse_junit,
    parse_lint_junit,
    report_filename,
    reports_directory,
)

JUNIT = """<?xml version="1.0" encoding="utf-8"?>
<testsuites><testsuite name="pytest" tests="4">
  <testcase classname="tests.test_a" name="test_ok" />
  <testcase classname="tests.test_a" name="test_fail"><failure message="assert 1 == 2" /></testcase>
  <testcase classname="tests.test_b" name="test_err"><error message="fixture" /></testcase>
  <testcase classname="tests.test_b" name="test_skip"><skipped message="later" /></testcase>
</testsuite></testsuites>
"""

RUFF_JUNIT = """<?xml version="1.0" encoding="UTF-8"?>
<testsuites name="ruff" tests="2" failures="2" errors="0">
  <testsuite name="src/__init__.py" tests="2" disabled="0" errors="0" failures="2" package="org.ruff">
    <testcase name="org.ruff.F401" classname="src/__init__.py" line="1" column="8">
      <failure message="`os` imported but unused">line 1, col 8, `os` imported but unused</failure>
    </testcase>
    <testcase name="org.ruff.E711" classname="src/__init__.py" line="9" column="5">
      <failure message="Comparison to `None` should be `cond is None`">line 9</failure>
    </testcase>
  </testsuite>
</testsuites>
"""

COVERAGE_XML = """<?xml version="1.0" ?>
<coverage version="7.4" lines-valid="40" lines-covered="30" line-rate="0.75">
  <packages><package name="src"><classes>
    <class name="__init__.py" filename="src/__init__.py" line-rate="1" />
    <class name="impl.py" filename="src/impl.py" line-rate="0.5" />
  </classes></package></packages>
</coverage>
"""


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "executed, found, expected",
    [(0, 0, 0.0), (80, 100, 80.0), (1, 3, 33.33), (5, 5, 100.0)],
)
def test_compute_coverage_percent(executed, found, expected):
    assert compute_coverage_percent(executed, found) == expected


def test_parse_junit(tmp_path):
    report = parse_junit(_write(tmp_path, "t.xml", JUNIT))

    assert (report.total, report.failures, report.errors, report.skipped) == (4, 1, 1, 1)
    assert report.failed_count == 2
    assert report.failed == ["tests.test_a::test_fail", "tests.test_b::test_err"]


def test_parse_lint_junit(tmp_path):
    report = parse_lint_junit(_write(tmp_path, "l.xml", RUFF_JUNIT))

    assert report.violations == 2
    assert report.offending[0] == "src/__init__.py:1:8 F401 `os` imported but unused"
    assert report.offending[1].startswith("src/__init__.py:9:5 E711")


def test_parse_coverage_xml(tmp_path):
    report = parse_coverage_xml(_write(tmp_path, "c.xml", COVERAGE_XML))

    assert (report.lines_found, report.lines_executed, report.percent) == (40, 30, 75.0)
    assert report.uncovered_files == ["src/impl.py (50.0%)"]


def test_missing_and_malformed_reports(tmp_path):
    with pytest.raises(LoadError):
        parse_junit(tmp_path / "absent.xml")
    with pytest.raises(LoadError):
        parse_coverage_xml(_write(tmp_path, "bad.xml", "<coverage"))


def test_report_filename_pattern():
    name = report_filename(LINT, now=datetime(2026, 1, 16, 9, 5, 7), python_major=3)
    assert name == "LintResults_3_20260116-090507.xml"
    assert re.fullmatch(r"CoverageResults_\d+_\d{8}-\d{6}\.xml", report_filename(COVERAGE))


def test_reports_directory_ci_and_local(tmp_path):
    out = tmp_path / "build"
    with reports_directory(ci=True, output_root=out) as directory:
        assert directory == out
    assert out.is_dir()

    with reports_directory(ci=False, output_root=out) as directory:
        local = directory
        assert local != out
        assert local.is_dir()
    assert not local.exists()
