# src/atlas_buildflow/tasks/quality.py
"""Tasks canônicas dos quality gates: analyze, test, code-coverage.

Os relatórios vão para a raiz de saída em CI e para um diretório
temporário descartável em execução local. Os dados de cobertura coletados
pelo `test` ficam em `<output_root>/.coverage` para o `code-coverage`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from atlas_buildflow.core.pipeline.context import BuildContext
from atlas_buildflow.core.pipeline.types import TaskKind, TaskResult, TaskStatus
from atlas_buildflow.environment.probe import is_ci
from atlas_buildflow.gates.coverage import run_coverage_gate
from atlas_buildflow.gates.lint import run_lint_gate
from atlas_buildflow.gates.results import COVERAGE, LINT, TEST, report_filename, reports_directory
from atlas_buildflow.gates.test import run_test_gate
from atlas_buildflow.gates.tooling import ToolRunner, run_tool

COVERAGE_DATA_ARTIFACT = "coverage.data_file"


def _ci_run(ctx: BuildContext) -> bool:
    if ctx.has("environment"):
        return ctx.environment.is_ci
    variable = str((ctx.config.get("environment") or {}).get("ci_variable") or "CI")
    return is_ci(variable=variable)


def _gate_cfg(ctx: BuildContext, gate: str) -> Dict[str, Any]:
    return ((ctx.config.get("gates") or {}).get(gate) or {})


def _coverage_data_file(ctx: BuildContext) -> Path:
    if ctx.has_artifact(COVERAGE_DATA_ARTIFACT):
        return Path(ctx.get_artifact(COVERAGE_DATA_ARTIFACT))
    return ctx.output_root / ".coverage"


def _artifacts(ci: bool, report: Path) -> Dict[str, str]:
    return {"report": str(report)} if ci else {}


@dataclass
class AnalyzeTask:
    """Lint gate sobre o código-fonte do módulo."""

    name: str = "analyze"
    kind: TaskKind = TaskKind.QUALITY
    depends_on: List[str] = field(default_factory=list)
    runner: ToolRunner = run_tool

    def run(self, ctx: BuildContext) -> TaskResult:
        ci = _ci_run(ctx)
        max_violations = int(_gate_cfg(ctx, "lint").get("max_violations", 0))

        with reports_directory(ci=ci, output_root=ctx.output_root) as reports:
            report_path = reports / report_filename(LINT)
            report = run_lint_gate(
                source_root=ctx.source_root,
                report_path=report_path,
                max_violations=max_violations,
                cwd=ctx.project_root,
                runner=self.runner,
            )

        ctx.log(task_name=self.name, level="info", message="lint gate passed", violations=report.violations)
        return TaskResult(
            task_name=self.name,
            kind=self.kind,
            status=TaskStatus.SUCCESS,
            summary=f"{report.violations} violation(s)",
            metrics={"violations": report.violations},
            artifacts=_artifacts(ci, report_path),
            payload={"offending": report.offending},
        )


@dataclass
class TestTask:
    """Test gate: executa a suíte sob coverage e aplica o limiar de falhas."""

    __test__ = False  # não é uma classe de teste do pytest

    name: str = "test"
    kind: TaskKind = TaskKind.QUALITY
    depends_on: List[str] = field(default_factory=list)
    runner: ToolRunner = run_tool

    def run(self, ctx: BuildContext) -> TaskResult:
        ci = _ci_run(ctx)
        max_failures = int(_gate_cfg(ctx, "test").get("max_failures", 0))
        data_file = ctx.output_root / ".coverage"
        ctx.set_artifact(COVERAGE_DATA_ARTIFACT, str(data_file))

        with reports_directory(ci=ci, output_root=ctx.output_root) as reports:
            report_path = reports / report_filename(TEST)
            report = run_test_gate(
                source_root=ctx.source_root,
                tests_path=ctx.path("tests"),
                report_path=report_path,
                data_file=data_file,
                max_failures=max_failures,
                cwd=ctx.project_root,
                runner=self.runner,
            )

        if report.total == 0:
            ctx.add_warning(task_name=self.name, message="Nenhum teste coletado")

        ctx.log(task_name=self.name, level="info", message="test gate passed", tests=report.total)
        return TaskResult(
            task_name=self.name,
            kind=self.kind,
            status=TaskStatus.SUCCESS,
            summary=f"{report.total} test(s), {report.failed_count} failed, {report.skipped} skipped",
            metrics={
                "tests": report.total,
                "failures": report.failures,
                "errors": report.errors,
                "skipped": report.skipped,
            },
            artifacts=_artifacts(ci, report_path),
        )


@dataclass
class CodeCoverageTask:
    """Coverage gate sobre os dados coletados pelo `test`."""

    name: str = "code-coverage"
    kind: TaskKind = TaskKind.QUALITY
    depends_on: List[str] = field(default_factory=lambda: ["test"])
    runner: ToolRunner = run_tool

    def run(self, ctx: BuildContext) -> TaskResult:
        ci = _ci_run(ctx)
        min_percent = float(_gate_cfg(ctx, "coverage").get("min_percent", 80.0))

        with reports_directory(ci=ci, output_root=ctx.output_root) as reports:
            report_path = reports / report_filename(COVERAGE)
            report = run_coverage_gate(
                data_file=_coverage_data_file(ctx),
                report_path=report_path,
                min_percent=min_percent,
                cwd=ctx.project_root,
                runner=self.runner,
            )

        ctx.log(task_name=self.name, level="info", message="coverage gate passed", percent=report.percent)
        return TaskResult(
            task_name=self.name,
            kind=self.kind,
            status=TaskStatus.SUCCESS,
            summary=f"{report.percent:.2f}% line coverage (minimum {min_percent:.2f}%)",
            metrics={
                "coverage_percent": report.percent,
                "lines_found": report.lines_found,
                "lines_executed": report.lines_executed,
            },
            artifacts=_artifacts(ci, report_path),
        )
