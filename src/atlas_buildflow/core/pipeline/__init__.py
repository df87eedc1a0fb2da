# src/atlas_buildflow/core/pipeline/__init__.py
"""
# Pipeline Core — Atlas BuildFlow

Este pacote define os **contratos canônicos** e as **estruturas fundamentais**
de um build no Atlas BuildFlow.

Um build é modelado como um **DAG explícito de Tasks**, onde:
- cada Task declara nome, tipo semântico e pré-requisitos
- a execução é coordenada exclusivamente pelo Engine
- o estado compartilhado é mediado pelo `BuildContext`

## Componentes

- **types**: `TaskStatus`, `TaskKind`, `TaskResult`
- **task**: `Task` (Protocol) e `AggregateTask`
- **context**: `BuildContext` (slots write-once, artefatos, eventos, warnings)
- **registry**: `TaskRegistry` (unicidade de `task.name`)
"""

from .context import BuildContext, create_build_context
from .registry import TaskRegistry
from .task import AggregateTask, Task
from .types import TaskKind, TaskResult, TaskStatus

__all__ = [
    "AggregateTask",
    "BuildContext",
    "Task",
    "TaskKind",
    "TaskRegistry",
    "TaskResult",
    "TaskStatus",
    "create_build_context",
]
