# src/atlas_buildflow/core/pipeline/registry.py
"""
Registro estrutural de Tasks do build.

Este módulo define o `TaskRegistry`, responsável por registrar Tasks e
validar a unicidade de seus nomes antes de qualquer planejamento ou
execução. É o mapeamento nome → Task do grafo de build.

Decisões arquiteturais:
    - A validação ocorre no momento do registro, antes do Engine
    - A ordem de registro é preservada (listagens e `--list` do CLI)
    - O registry não resolve dependências nem executa Tasks

Invariantes:
    - Cada Task registrada possui um `name` único e não vazio
    - Nenhuma Task inválida é aceita
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from atlas_buildflow.core.exceptions import ConfigurationError, DuplicateTaskNameError

from .task import Task


@dataclass
class TaskRegistry:
    """Registro canônico de Tasks para validação estrutural pré-execução."""

    _tasks: Dict[str, Task] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def of(cls, tasks: Iterable[Task]) -> "TaskRegistry":
        registry = cls()
        for task in tasks:
            registry.add(task)
        return registry

    def add(self, task: Task) -> None:
        name = getattr(task, "name", None)
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError("task.name must be a non-empty string")

        if name in self._tasks:
            raise DuplicateTaskNameError(f"Duplicate task name: {name}", details={"task": name})

        self._tasks[name] = task
        self._order.append(name)

    def get(self, name: str) -> Task:
        return self._tasks[name]

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def names(self) -> List[str]:
        return list(self._order)

    def list(self) -> List[Task]:
        return [self._tasks[name] for name in self._order]
