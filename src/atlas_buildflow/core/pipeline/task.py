# src/atlas_buildflow/core/pipeline/task.py
"""
Contrato canônico de Task do Atlas BuildFlow.

Uma Task é a menor unidade executável do build: um nome único, um corpo
(ação com efeitos colaterais, que pode falhar) e uma lista ordenada de
nomes de Tasks pré-requisito.

Princípios fundamentais:
    - Tasks não conhecem o Engine nem o planner
    - Tasks não controlam ordem de execução
    - Estado compartilhado é lido/escrito apenas via BuildContext
    - Conformidade é garantida por duck typing (@runtime_checkable)

Invariantes:
    - Cada Task possui um `name` único no grafo
    - Tasks são declaradas uma vez e imutáveis depois disso
    - O método `run` é chamado no máximo uma vez por invocação do build

Limites explícitos:
    - Não define retry (todo erro é fatal)
    - Não registra eventos no Build Record diretamente
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Protocol, runtime_checkable

from .context import BuildContext
from .types import TaskKind, TaskResult, TaskStatus


@runtime_checkable
class Task(Protocol):
    """
    Contrato canônico de uma Task.

    Atributos obrigatórios:
        - name: identificador único e estável da Task
        - kind: classificação semântica da Task (`TaskKind`)
        - depends_on: nomes das Tasks pré-requisito, em ordem de execução

    Uma Task sinaliza falha levantando uma exceção (preferencialmente uma
    subclasse de `BuildflowError`) ou retornando um `TaskResult` FAILED.
    """

    name: str
    kind: TaskKind
    depends_on: List[str]

    def run(self, ctx: BuildContext) -> TaskResult:
        """Executa o corpo da Task uma única vez usando exclusivamente o BuildContext."""
        ...


@dataclass(frozen=True)
class AggregateTask:
    """Task composta: existe apenas para agrupar pré-requisitos (ex.: `build`, `default`)."""

    name: str
    depends_on: List[str] = field(default_factory=list)
    kind: TaskKind = TaskKind.AGGREGATE

    def run(self, ctx: BuildContext) -> TaskResult:
        return TaskResult(
            task_name=self.name,
            kind=self.kind,
            status=TaskStatus.SUCCESS,
            summary=f"{len(self.depends_on)} prerequisite(s) completed",
        )
