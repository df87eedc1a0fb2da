# src/atlas_buildflow/core/engine/planner.py
"""
Planejador de execução do build (DAG).

Este módulo é responsável por validar a estrutura do grafo de Tasks e
produzir a sequência linear de Tasks necessária para executar uma Task
raiz solicitada pelo invocador.

O planner opera exclusivamente em nível estrutural, analisando:
    - nomes de Tasks
    - pré-requisitos declarados
    - formação de ciclos (no grafo inteiro, não só no alcançável)
    - existência da Task raiz

Decisões arquiteturais:
    - Toda a validação ocorre antes de qualquer corpo de Task ser executado
    - Ciclos são detectados com o algoritmo de Kahn sobre o grafo completo
    - A ordem de execução é uma pós-ordem em profundidade a partir da raiz,
      seguindo a ordem declarada dos pré-requisitos de cada Task
    - Tasks alcançáveis por múltiplos caminhos aparecem uma única vez
      (memoização por nome)

Invariantes:
    - Nenhuma Task aparece antes de seus pré-requisitos
    - Toda Task alcançável a partir da raiz aparece exatamente uma vez
    - Tasks não alcançáveis a partir da raiz não aparecem
    - A mesma definição de grafo e raiz produz sempre a mesma ordem

Limites explícitos:
    - Não executa Tasks
    - Não interage com BuildContext
    - Não decide políticas de execução
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Set

from atlas_buildflow.core.exceptions import (
    ConfigurationError,
    CycleDetectedError,
    DuplicateTaskNameError,
    UnknownDependencyError,
    UnknownTaskError,
)
from atlas_buildflow.core.pipeline.task import Task


def _index(tasks: Iterable[Task]) -> Dict[str, Task]:
    by_name: Dict[str, Task] = {}
    for t in tasks:
        name = getattr(t, "name", None)
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError("task.name must be a non-empty string")
        if name in by_name:
            raise DuplicateTaskNameError(f"Duplicate task name: {name}", details={"task": name})
        by_name[name] = t
    return by_name


def validate_graph(tasks: Iterable[Task]) -> Dict[str, List[str]]:
    """
    Valida o grafo completo de Tasks e retorna o mapa nome → pré-requisitos.

    Raises:
        ConfigurationError: Se algum nome for inválido.
        DuplicateTaskNameError: Se houver nomes duplicados.
        UnknownDependencyError: Se um pré-requisito não corresponder a nenhuma Task.
        CycleDetectedError: Se houver ciclo no grafo.
    """
    by_name = _index(tasks)

    deps: Dict[str, List[str]] = {}
    for name, t in by_name.items():
        d = list(getattr(t, "depends_on", []) or [])
        for dep in d:
            if dep not in by_name:
                raise UnknownDependencyError(
                    f"Task '{name}' depends on unknown task '{dep}'",
                    details={"task": name, "dependency": dep},
                )
        deps[name] = d

    # Kahn: tudo que não for removido participa de (ou depende de) um ciclo
    incoming_count: Dict[str, int] = {name: len(set(d)) for name, d in deps.items()}
    outgoing: Dict[str, Set[str]] = {name: set() for name in by_name}
    for name, dlist in deps.items():
        for dep in set(dlist):
            outgoing[dep].add(name)

    ready: List[str] = sorted(name for name, c in incoming_count.items() if c == 0)
    visited = 0
    while ready:
        name = ready.pop(0)
        visited += 1
        for child in sorted(outgoing[name]):
            incoming_count[child] -= 1
            if incoming_count[child] == 0:
                ready.append(child)
                ready.sort()

    if visited != len(by_name):
        stuck = sorted(name for name, c in incoming_count.items() if c > 0)
        raise CycleDetectedError(
            "Cycle detected in task dependency graph",
            details={"tasks": stuck},
        )

    return deps


def plan_execution(tasks: Iterable[Task], root: str) -> List[Task]:
    """
    Valida o grafo e produz a ordem de execução para a Task raiz.

    Args:
        tasks (Iterable[Task]): Todas as Tasks declaradas no build.
        root (str): Nome da Task solicitada pelo invocador.

    Returns:
        List[Task]: Tasks alcançáveis a partir de `root`, pré-requisitos
        primeiro, cada uma exatamente uma vez.

    Raises:
        UnknownTaskError: Se `root` não for uma Task declarada.
        UnknownDependencyError, CycleDetectedError, DuplicateTaskNameError:
            Conforme `validate_graph`.
    """
    task_list = list(tasks)
    deps = validate_graph(task_list)
    by_name = {t.name: t for t in task_list}

    if root not in by_name:
        raise UnknownTaskError(
            f"Unknown task: {root}",
            details={"task": root, "available": sorted(by_name)},
        )

    order: List[str] = []
    done: Set[str] = set()

    def visit(name: str) -> None:
        if name in done:
            return
        for dep in deps[name]:
            visit(dep)
        done.add(name)
        order.append(name)

    # o grafo já é acíclico; a recursão termina
    visit(root)

    return [by_name[name] for name in order]
