# tests/core/engine/test_planner_graph_errors.py
"""
Testes de validação de grafos inválidos no planner.

Decisões arquiteturais:
    - O build deve formar um DAG válido
    - Erros estruturais são subclasses de `ConfigurationError`
    - A validação ocorre antes de qualquer corpo de Task ser executado

Invariantes:
    - O planner nunca retorna um plano parcial em caso de erro
    - Ciclos fora do caminho da raiz também invalidam o grafo
"""

import pytest

from atlas_buildflow.core.engine.engine import Engine
from atlas_buildflow.core.engine.planner import plan_execution
from atlas_buildflow.core.exceptions import (
    ConfigurationError,
    CycleDetectedError,
    DuplicateTaskNameError,
    UnknownDependencyError,
    UnknownTaskError,
)


def test_unknown_dependency(DummyTask):
    tasks = [DummyTask("a", ["missing"])]
    with pytest.raises(UnknownDependencyError) as exc:
        plan_execution(tasks, "a")
    assert exc.value.details == {"task": "a", "dependency": "missing"}
    assert isinstance(exc.value, ConfigurationError)


def test_cycle_detected(DummyTask):
    tasks = [DummyTask("a", ["b"]), DummyTask("b", ["a"])]
    with pytest.raises(CycleDetectedError) as exc:
        plan_execution(tasks, "a")
    assert exc.value.details["tasks"] == ["a", "b"]


def test_cycle_outside_root_path_is_rejected(DummyTask):
    tasks = [DummyTask("root"), DummyTask("x", ["y"]), DummyTask("y", ["x"])]
    with pytest.raises(CycleDetectedError):
        plan_execution(tasks, "root")


def test_self_dependency_is_a_cycle(DummyTask):
    with pytest.raises(CycleDetectedError):
        plan_execution([DummyTask("a", ["a"])], "a")


def test_unknown_root(DummyTask):
    with pytest.raises(UnknownTaskError) as exc:
        plan_execution([DummyTask("a")], "nope")
    assert exc.value.details["available"] == ["a"]


def test_duplicate_names(DummyTask):
    with pytest.raises(DuplicateTaskNameError):
        plan_execution([DummyTask("a"), DummyTask("a")], "a")


def test_invalid_graph_runs_no_task_body(DummyTask, build_ctx):
    """Um grafo com ciclo não executa nenhuma Task, nem as válidas."""
    calls = []
    tasks = [
        DummyTask("ok", calls=calls),
        DummyTask("a", ["b"], calls=calls),
        DummyTask("b", ["a"], calls=calls),
    ]
    with pytest.raises(CycleDetectedError):
        Engine(tasks=tasks, ctx=build_ctx).run("ok")
    assert calls == []
