# src/atlas_buildflow/gates/lint.py
"""
Lint gate (ruff).

Executa `ruff check` com `--exit-zero`: o código de saída não indica
violações, apenas falhas da ferramenta. As violações são contadas no
relatório JUnit.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from atlas_buildflow.gates.results import LintReport, parse_lint_junit
from atlas_buildflow.gates.tooling import ToolRunner, gate_failure, run_tool, tool_error

TOOL = "ruff"


def run_lint_gate(
    *,
    source_root: Path,
    report_path: Path,
    max_violations: int = 0,
    cwd: Optional[Path] = None,
    runner: ToolRunner = run_tool,
) -> LintReport:
    """
    Analisa `source_root` e aplica o limiar de violações.

    Raises:
        ToolInvocationError: ruff ausente, saída inesperada ou relatório não gerado.
        QualityGateFailure: violações acima de `max_violations`.
    """
    run = runner(
        TOOL,
        [
            "check",
            str(source_root),
            "--exit-zero",
            "--output-format",
            "junit",
            "-o",
            str(report_path),
        ],
        cwd=cwd,
    )
    if run.returncode != 0 or not report_path.exists():
        raise tool_error(TOOL, returncode=run.returncode, stderr=run.stderr or run.stdout)

    report = parse_lint_junit(report_path)
    if report.violations > max_violations:
        raise gate_failure(
            "lint",
            threshold=max_violations,
            actual=report.violations,
            offending=report.offending,
            report=report_path,
        )
    return report
