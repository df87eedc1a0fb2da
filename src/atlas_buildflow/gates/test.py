# src/atlas_buildflow/gates/test.py
"""
Test gate (pytest sob coverage).

Os testes rodam sob `coverage run` para que o gate de cobertura reutilize
os dados coletados. Códigos de saída do pytest:

    0 → todos passaram
    1 → há falhas (o relatório é lido normalmente)
    5 → nenhum teste coletado
    demais → falha de invocação (`ToolInvocationError`)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from atlas_buildflow.gates.results import TestReport, parse_junit
from atlas_buildflow.gates.tooling import ToolRunner, gate_failure, run_tool, tool_error

TOOL = "coverage"
REPORT_EXIT_CODES = (0, 1, 5)


def run_test_gate(
    *,
    source_root: Path,
    tests_path: Path,
    report_path: Path,
    data_file: Path,
    max_failures: int = 0,
    cwd: Optional[Path] = None,
    runner: ToolRunner = run_tool,
) -> TestReport:
    """
    Executa a suíte de testes e aplica o limiar de falhas (falhas + erros).

    Raises:
        ToolInvocationError: Ferramenta ausente, código de saída inesperado
            ou relatório JUnit não gerado.
        QualityGateFailure: falhas acima de `max_failures`.
    """
    data_file.parent.mkdir(parents=True, exist_ok=True)
    run = runner(
        TOOL,
        [
            "run",
            f"--data-file={data_file}",
            f"--source={source_root}",
            "-m",
            "pytest",
            str(tests_path),
            f"--junitxml={report_path}",
            "-q",
        ],
        cwd=cwd,
    )
    if run.returncode not in REPORT_EXIT_CODES or not report_path.exists():
        raise tool_error("pytest", returncode=run.returncode, stderr=run.stderr or run.stdout)

    report = parse_junit(report_path)
    if report.failed_count > max_failures:
        raise gate_failure(
            "test",
            threshold=max_failures,
            actual=report.failed_count,
            offending=report.failed,
            report=report_path,
        )
    return report
