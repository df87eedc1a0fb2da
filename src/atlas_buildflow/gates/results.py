# src/atlas_buildflow/gates/results.py
"""
Leitura de relatórios dos quality gates e nomes de arquivos de resultado.

Formatos suportados:
    - JUnit XML (pytest `--junitxml` e ruff `--output-format junit`)
    - Cobertura XML (`coverage xml`)

Relatórios de CI seguem o padrão
`<Kind>Results_<pyMajor>_<YYYYMMDD-HHMMSS>.xml` (Lint, Test, Coverage).
"""

from __future__ import annotations

import sys
import tempfile
import xml.etree.ElementTree as ET
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional

from atlas_buildflow.core.exceptions import LoadError

LINT = "Lint"
TEST = "Test"
COVERAGE = "Coverage"


@dataclass(frozen=True)
class TestReport:
    total: int
    failures: int
    errors: int
    skipped: int
    failed: List[str] = field(default_factory=list)

    __test__ = False  # não é uma classe de teste do pytest

    @property
    def failed_count(self) -> int:
        return self.failures + self.errors


@dataclass(frozen=True)
class LintReport:
    violations: int
    offending: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CoverageReport:
    lines_found: int
    lines_executed: int
    percent: float
    uncovered_files: List[str] = field(default_factory=list)


def compute_coverage_percent(executed: int, found: int) -> float:
    """Percentual de linhas executadas; 0.0 quando não há linhas analisáveis."""
    if found <= 0:
        return 0.0
    return round(executed / found * 100.0, 2)


def report_filename(kind: str, *, now: Optional[datetime] = None, python_major: Optional[int] = None) -> str:
    now = now or datetime.now()
    major = sys.version_info.major if python_major is None else python_major
    return f"{kind}Results_{major}_{now.strftime('%Y%m%d-%H%M%S')}.xml"


@contextmanager
def reports_directory(*, ci: bool, output_root: Path) -> Iterator[Path]:
    """
    Diretório onde os relatórios de um gate são gravados.

    CI: `output_root` (os relatórios permanecem para o agente de CI).
    Local: diretório temporário, descartado ao sair do contexto.
    """
    if ci:
        output_root.mkdir(parents=True, exist_ok=True)
        yield output_root
        return
    with tempfile.TemporaryDirectory(prefix="buildflow-reports-") as tmp:
        yield Path(tmp)


def _parse_xml(path: Path) -> ET.Element:
    if not path.exists():
        raise LoadError("Relatório não encontrado", details={"path": str(path)})
    try:
        return ET.parse(str(path)).getroot()
    except ET.ParseError as e:
        raise LoadError("Relatório XML inválido", details={"path": str(path), "error": str(e)}) from e


def parse_junit(path: Path) -> TestReport:
    """Conta casos, falhas, erros e ignorados a partir dos `<testcase>` do relatório."""
    root = _parse_xml(path)
    total = failures = errors = skipped = 0
    failed: List[str] = []
    for case in root.iter("testcase"):
        total += 1
        name = case.get("name", "")
        classname = case.get("classname", "")
        label = f"{classname}::{name}" if classname else name
        if case.find("failure") is not None:
            failures += 1
            failed.append(label)
        elif case.find("error") is not None:
            errors += 1
            failed.append(label)
        elif case.find("skipped") is not None:
            skipped += 1
    return TestReport(total=total, failures=failures, errors=errors, skipped=skipped, failed=failed)


def parse_lint_junit(path: Path) -> LintReport:
    """Cada `<failure>` do relatório JUnit do ruff é uma violação."""
    root = _parse_xml(path)
    offending: List[str] = []
    for case in root.iter("testcase"):
        for failure in case.findall("failure"):
            code = case.get("name", "").replace("org.ruff.", "")
            where = case.get("classname", "")
            line = case.get("line")
            column = case.get("column")
            if line:
                where = f"{where}:{line}:{column or 0}"
            offending.append(f"{where} {code} {failure.get('message', '')}".strip())
    return LintReport(violations=len(offending), offending=offending)


def parse_coverage_xml(path: Path) -> CoverageReport:
    root = _parse_xml(path)
    try:
        found = int(root.get("lines-valid", "0"))
        executed = int(root.get("lines-covered", "0"))
    except ValueError as e:
        raise LoadError("Relatório de cobertura com contadores inválidos", details={"path": str(path)}) from e

    uncovered: List[str] = []
    for cls in root.iter("class"):
        try:
            rate = float(cls.get("line-rate", "1"))
        except ValueError:
            continue
        if rate < 1.0:
            uncovered.append(f"{cls.get('filename', cls.get('name', '?'))} ({rate * 100:.1f}%)")

    return CoverageReport(
        lines_found=found,
        lines_executed=executed,
        percent=compute_coverage_percent(executed, found),
        uncovered_files=sorted(uncovered),
    )
