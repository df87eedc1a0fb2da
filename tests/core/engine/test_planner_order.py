# tests/core/engine/test_planner_order.py
"""
Testes de ordenação do planner (pós-ordem em profundidade a partir da raiz).

Os testes asseguram que:
- pré-requisitos sempre aparecem antes de seus dependentes
- a ordem declarada dos pré-requisitos é respeitada
- Tasks alcançáveis por vários caminhos aparecem uma única vez
- Tasks não alcançáveis a partir da raiz não aparecem
"""

import pytest

try:
    from atlas_buildflow.core.engine.planner import plan_execution
except Exception as e:  # noqa: BLE001
    plan_execution = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"Missing planner. Import error: {_IMPORT_ERR}")


def _names(plan):
    return [t.name for t in plan]


def test_linear_chain(DummyTask):
    _require_imports()
    tasks = [DummyTask("c", ["b"]), DummyTask("b", ["a"]), DummyTask("a")]
    assert _names(plan_execution(tasks, "c")) == ["a", "b", "c"]


def test_diamond_runs_shared_prerequisite_once(DummyTask):
    """
    Grafo em diamante:

        D → [B, C], B → A, C → A

    A deve aparecer uma única vez, antes de B e C; B antes de C
    (ordem declarada em D).
    """
    _require_imports()
    tasks = [
        DummyTask("A"),
        DummyTask("B", ["A"]),
        DummyTask("C", ["A"]),
        DummyTask("D", ["B", "C"]),
    ]
    assert _names(plan_execution(tasks, "D")) == ["A", "B", "C", "D"]


def test_declared_order_of_prerequisites_is_followed(DummyTask):
    _require_imports()
    tasks = [DummyTask("x"), DummyTask("y"), DummyTask("root", ["y", "x"])]
    assert _names(plan_execution(tasks, "root")) == ["y", "x", "root"]


def test_unreachable_tasks_are_excluded(DummyTask):
    _require_imports()
    tasks = [DummyTask("a"), DummyTask("b", ["a"]), DummyTask("unrelated")]
    assert _names(plan_execution(tasks, "b")) == ["a", "b"]


def test_clean_build_composite_order(DummyTask):
    _require_imports()
    tasks = [
        DummyTask("clean"),
        DummyTask("compile"),
        DummyTask("build", ["compile"]),
        DummyTask("clean-build", ["clean", "build"]),
    ]
    assert _names(plan_execution(tasks, "clean-build")) == ["clean", "compile", "build", "clean-build"]


def test_same_graph_same_plan(DummyTask):
    _require_imports()
    tasks = [DummyTask("A"), DummyTask("B", ["A"]), DummyTask("C", ["A", "B"])]
    assert _names(plan_execution(tasks, "C")) == _names(plan_execution(list(tasks), "C"))
