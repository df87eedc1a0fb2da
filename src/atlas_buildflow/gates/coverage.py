# src/atlas_buildflow/gates/coverage.py
"""
Coverage gate.

Converte os dados coletados pelo test gate em Cobertura XML e compara o
percentual de linhas executadas com o mínimo configurado.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from atlas_buildflow.gates.results import CoverageReport, compute_coverage_percent, parse_coverage_xml
from atlas_buildflow.gates.tooling import ToolRunner, gate_failure, run_tool, tool_error

TOOL = "coverage"

_NO_DATA = "No data to report"


def run_coverage_gate(
    *,
    data_file: Path,
    report_path: Path,
    min_percent: float = 80.0,
    cwd: Optional[Path] = None,
    runner: ToolRunner = run_tool,
) -> CoverageReport:
    """
    Gera o relatório de cobertura e aplica o percentual mínimo.

    Sem dados coletados, a cobertura é 0.0%.

    Raises:
        ToolInvocationError: coverage ausente ou falha ao gerar o relatório.
        QualityGateFailure: percentual abaixo de `min_percent`.
    """
    run = runner(TOOL, ["xml", f"--data-file={data_file}", "-o", str(report_path)], cwd=cwd)

    if run.returncode != 0 and _NO_DATA in (run.stdout + run.stderr):
        report = CoverageReport(lines_found=0, lines_executed=0, percent=compute_coverage_percent(0, 0))
    elif run.returncode != 0 or not report_path.exists():
        raise tool_error(TOOL, returncode=run.returncode, stderr=run.stderr or run.stdout)
    else:
        report = parse_coverage_xml(report_path)

    if report.percent < float(min_percent):
        raise gate_failure(
            "coverage",
            threshold=float(min_percent),
            actual=report.percent,
            offending=report.uncovered_files,
            report=report_path if report_path.exists() else None,
        )
    return report
