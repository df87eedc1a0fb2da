# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas BuildFlow.

Este módulo define fixtures reutilizáveis que fornecem:
- configuração efetiva determinística (defaults embutidos)
- fábrica de BuildContext isolado por teste (tmp_path)
- Tasks dummy para testes estruturais do planner e do engine
- um projeto de módulo mínimo em disco (artefato, manifest, package spec)
- runners falsos para os quality gates (sem ruff, pytest ou coverage reais)

Decisões arquiteturais:
    - Tasks dummy utilizam duck typing em vez de herança
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas
    - Todo I/O acontece dentro de `tmp_path`

Invariantes:
    - Nenhuma fixture executa o build real
    - Nenhuma fixture depende de rede ou de variáveis de ambiente
    - Nenhuma fixture contém lógica de domínio

Limites explícitos:
    - Não substituir testes de integração do CLI
    - Não invocar ferramentas externas (ruff, pytest, coverage)
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import List

import pytest

MODULE_INIT = '''\
"""Módulo de exemplo usado nos testes do build."""

__all__ = ["Foo", "Bar"]


def Foo():
    return "foo"


def Bar():
    return "bar"


def _helper():
    return None
'''

MODULE_MANIFEST = """\
name: sample
version: 0.0.0
author: X
description: Sample module
exported_operations: []
requires:
  - requests
"""

PACKAGE_SPEC = """\
<?xml version="1.0" encoding="utf-8"?>
<package xmlns="http://schemas.example.org/packaging/2024">
  <metadata>
    <id>sample</id>
    <version>0.0.1</version>
    <authors>X</authors>
  </metadata>
  <files>
    <file src="**" />
  </files>
</package>
"""


@pytest.fixture
def base_config() -> dict:
    """Configuração efetiva mínima: defaults embutidos, sem arquivo de projeto."""
    from atlas_buildflow.core.config.defaults import DEFAULT_CONFIG
    from atlas_buildflow.core.config.merge import deep_merge

    return deep_merge(DEFAULT_CONFIG, {"module": {"name": "sample"}})


@pytest.fixture
def make_ctx(tmp_path, base_config):
    """
    Fixture factory de BuildContext.

    Retorna uma função que cria um contexto novo com `run_id` e `created_at`
    fixos, raiz do projeto em `tmp_path` e configuração opcionalmente
    sobrescrita via deep-merge.
    """
    from atlas_buildflow.core.config.merge import deep_merge
    from atlas_buildflow.core.pipeline.context import create_build_context

    def _make(overrides: dict = None, project_root: Path = None):
        config = deep_merge(base_config, overrides or {})
        return create_build_context(
            config=config,
            project_root=project_root or tmp_path,
            run_id="run-test-001",
            created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        )

    return _make


@pytest.fixture
def build_ctx(make_ctx):
    """BuildContext padrão para testes que não precisam de overrides."""
    return make_ctx()


@pytest.fixture
def DummyTask():
    """
    Fixture factory que fornece uma implementação mínima e duck-typed de Task.

    A classe retornada:
    - expõe `name`, `kind` e `depends_on`
    - registra a própria execução em `calls` (lista compartilhada opcional)
    - falha levantando `RuntimeError` quando `fail=True`
    """
    from atlas_buildflow.core.pipeline.types import TaskKind, TaskResult, TaskStatus

    class _DummyTask:
        def __init__(self, name: str, depends_on: List[str] = None, *, calls: list = None, fail: bool = False):
            self.name = name
            self.kind = TaskKind.SETUP
            self.depends_on = list(depends_on or [])
            self.calls = calls if calls is not None else []
            self.fail = fail

        def run(self, ctx):
            self.calls.append(self.name)
            if self.fail:
                raise RuntimeError(f"{self.name} boom")
            ctx.set_artifact(f"{self.name}.ok", True)
            return TaskResult(
                task_name=self.name,
                kind=self.kind,
                status=TaskStatus.SUCCESS,
                summary="dummy ok",
            )

    return _DummyTask


@pytest.fixture
def module_project(tmp_path) -> Path:
    """
    Projeto de módulo mínimo em disco:

        <tmp>/src/__init__.py      (exporta Foo, Bar)
        <tmp>/src/module.yaml      (manifest primário, author X)
        <tmp>/src/package.xml      (package spec com namespace padrão)
        <tmp>/src/test_sample.py   (arquivo excluído do stage)
        <tmp>/tests/test_sample.py
    """
    src = tmp_path / "src"
    src.mkdir()
    (src / "__init__.py").write_text(MODULE_INIT, encoding="utf-8")
    (src / "module.yaml").write_text(MODULE_MANIFEST, encoding="utf-8")
    (src / "package.xml").write_text(PACKAGE_SPEC, encoding="utf-8")
    (src / "test_sample.py").write_text("def test_x():\n    assert True\n", encoding="utf-8")

    tests = tmp_path / "tests"
    tests.mkdir()
    (tests / "test_sample.py").write_text("def test_ok():\n    assert True\n", encoding="utf-8")
    return tmp_path


JUNIT_PASSING = (
    '<?xml version="1.0" encoding="utf-8"?>'
    '<testsuites><testsuite name="pytest" tests="1">'
    '<testcase classname="tests.test_sample" name="test_ok" />'
    "</testsuite></testsuites>"
)

RUFF_CLEAN = '<?xml version="1.0" encoding="UTF-8"?><testsuites name="ruff" tests="0" failures="0" errors="0" />'

RUFF_ONE_VIOLATION = (
    '<?xml version="1.0" encoding="UTF-8"?><testsuites><testsuite name="src/__init__.py">'
    '<testcase name="org.ruff.F401" classname="src/__init__.py" line="1" column="8">'
    '<failure message="`os` imported but unused" /></testcase></testsuite></testsuites>'
)


def coverage_xml(valid: int, covered: int) -> str:
    return (
        f'<?xml version="1.0" ?><coverage lines-valid="{valid}" lines-covered="{covered}">'
        "<packages /></coverage>"
    )


@pytest.fixture
def tool_stub():
    """
    Fixture factory de runner de ferramentas (substitui `run_tool`).

    O stub grava o relatório que a ferramenta real produziria (caminho
    extraído de `-o` ou `--junitxml=`) e devolve `returncode`. Chamadas
    ficam registradas em `calls`.
    """
    from atlas_buildflow.gates.tooling import ToolRun

    def _report_target(args):
        for i, arg in enumerate(args):
            if arg == "-o":
                return Path(args[i + 1])
            if arg.startswith("--junitxml="):
                return Path(arg.split("=", 1)[1])
        return None

    class _ToolStub:
        def __init__(self, report: str = None, *, returncode: int = 0, stdout: str = "", stderr: str = ""):
            self.report = report
            self.returncode = returncode
            self.stdout = stdout
            self.stderr = stderr
            self.calls = []

        def __call__(self, tool, args, *, cwd=None):
            args = [str(a) for a in args]
            self.calls.append((tool, args))
            target = _report_target(args)
            if self.report is not None and target is not None:
                target.write_text(self.report, encoding="utf-8")
            return ToolRun(tool=tool, args=args, returncode=self.returncode, stdout=self.stdout, stderr=self.stderr)

    return _ToolStub


@pytest.fixture
def stubbed_registry(tool_stub):
    """
    Fixture factory: registry padrão com os gates ligados a stubs.

    Por padrão todos os gates passam (lint limpo, 1 teste, 90% de cobertura).
    """
    from atlas_buildflow.tasks.graph import build_task_registry

    def _make(*, lint: str = RUFF_CLEAN, tests: str = JUNIT_PASSING, coverage: str = None, client_factory=None):
        registry = build_task_registry()
        registry.get("analyze").runner = tool_stub(lint)
        registry.get("test").runner = tool_stub(tests)
        registry.get("code-coverage").runner = tool_stub(coverage or coverage_xml(100, 90))
        if client_factory is not None:
            registry.get("detect-environment").client_factory = client_factory
        return registry

    return _make
