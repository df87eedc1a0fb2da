# src/atlas_buildflow/gates/__init__.py
"""
Quality gates do Atlas BuildFlow.

Cada gate invoca uma ferramenta externa, lê o relatório produzido e aplica
um limiar configurável. Ferramenta ausente ou saída inesperada levanta
`ToolInvocationError`; limiar não atingido levanta `QualityGateFailure`.
"""

from .coverage import run_coverage_gate
from .lint import run_lint_gate
from .results import (
    COVERAGE,
    LINT,
    TEST,
    CoverageReport,
    LintReport,
    TestReport,
    compute_coverage_percent,
    parse_coverage_xml,
    parse_junit,
    parse_lint_junit,
    report_filename,
    reports_directory,
)
from .test import run_test_gate
from .tooling import ToolRun, run_tool

__all__ = [
    "COVERAGE",
    "CoverageReport",
    "LINT",
    "LintReport",
    "TEST",
    "TestReport",
    "ToolRun",
    "compute_coverage_percent",
    "parse_coverage_xml",
    "parse_junit",
    "parse_lint_junit",
    "report_filename",
    "reports_directory",
    "run_coverage_gate",
    "run_lint_gate",
    "run_test_gate",
    "run_tool",
]
