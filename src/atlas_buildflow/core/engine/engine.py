# src/atlas_buildflow/core/engine/engine.py
"""
Engine de execução do build do Atlas BuildFlow.

O Engine combina o planner (ordem das Tasks) com o executor sequencial.

Regras de execução:
- O grafo inteiro é validado antes de qualquer corpo de Task rodar.
- Tasks rodam na ordem planejada, uma de cada vez, cada uma no máximo uma vez.
- Fail-fast estrito: a primeira falha interrompe o build; Tasks posteriores
  não são invocadas e não aparecem no resultado.
- Não existe retry nem recuperação implícita.

Guardrails:
- Exceções levantadas pelas Tasks são convertidas em `BuildErrorPayload`
  (serializável e acionável) e persistidas em `TaskResult.payload["error"]`.
- Exceções de `BuildflowError` preservam `details` e `hint`; as demais viram
  ENGINE_EXECUTION_ERROR sem stack trace para o operador.
- `TaskResult` é frozen: enriquecimento (warnings do contexto) é feito via
  `dataclasses.replace`, nunca por mutação.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from atlas_buildflow.core.errors import (
    BuildErrorPayload,
    engine_configuration_error,
    engine_execution_error,
)
from atlas_buildflow.core.exceptions import BuildflowError
from atlas_buildflow.core.pipeline.context import BuildContext
from atlas_buildflow.core.pipeline.task import Task
from atlas_buildflow.core.pipeline.types import TaskKind, TaskResult, TaskStatus
from atlas_buildflow.core.traceability.record import (
    BuildRecord,
    task_failed,
    task_finished,
    task_started,
)

from .planner import plan_execution


@dataclass(frozen=True)
class RunResult:
    """
    Resultado agregado de uma execução do build.

    - tasks: resultados na ordem de execução (apenas Tasks efetivamente invocadas)
    - failed_task: nome da Task que abortou o build (None em sucesso)
    - error: payload do erro que abortou o build (None em sucesso)
    """

    root: str
    tasks: Dict[str, TaskResult] = field(default_factory=dict)
    failed_task: Optional[str] = None
    error: Optional[BuildErrorPayload] = None

    @property
    def ok(self) -> bool:
        return self.failed_task is None

    @property
    def executed(self) -> List[str]:
        return list(self.tasks)


class _InvalidTaskResult(Exception):
    def __init__(self, received: str):
        super().__init__(received)
        self.received = received


class Engine:
    """Engine canônico do Atlas BuildFlow (planner + executor fail-fast)."""

    def __init__(
        self,
        *,
        tasks: Sequence[Task],
        ctx: BuildContext,
        record: Optional[BuildRecord] = None,
    ):
        self.tasks: List[Task] = list(tasks)
        self.ctx: BuildContext = ctx
        self.record: Optional[BuildRecord] = record

    # ------------------------------------------------------------------
    # Guardrails: exceção -> BuildErrorPayload
    # ------------------------------------------------------------------
    def _exception_to_error(self, task_name: str, exc: Exception) -> BuildErrorPayload:
        if isinstance(exc, _InvalidTaskResult):
            return engine_configuration_error(
                message="Task retornou tipo inválido",
                details={
                    "task": task_name,
                    "expected": "TaskResult",
                    "received": exc.received,
                },
                hint="Ajuste a Task para retornar TaskResult",
            )

        if isinstance(exc, BuildflowError):
            details = dict(exc.details or {})
            details.setdefault("task", task_name)
            return BuildErrorPayload(
                type=exc.__class__.__name__,
                message=str(exc) or "Erro de execução",
                details=details,
                hint=exc.hint,
            )

        return engine_execution_error(
            task=task_name,
            exc_type=exc.__class__.__name__,
            exc_message=str(exc) or None,
        )

    def _ctx_warnings_for(self, task_name: str) -> List[str]:
        return list(self.ctx.warnings.get(task_name, []) or [])

    def _enrich(self, task: Task, result: TaskResult) -> TaskResult:
        merged: List[str] = []
        for msg in list(result.warnings or []) + self._ctx_warnings_for(task.name):
            if msg not in merged:
                merged.append(msg)
        return replace(result, task_name=task.name, warnings=merged)

    def _failed_result(self, task: Task, error: BuildErrorPayload) -> TaskResult:
        kind = getattr(task, "kind", TaskKind.AGGREGATE) or TaskKind.AGGREGATE
        return TaskResult(
            task_name=task.name,
            kind=kind,
            status=TaskStatus.FAILED,
            summary=error.message,
            warnings=self._ctx_warnings_for(task.name),
            payload={"error": error.to_dict()},
        )

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    # ------------------------------------------------------------------
    # Execução
    # ------------------------------------------------------------------
    def run(self, root: str) -> RunResult:
        """
        Planeja e executa o build a partir da Task raiz.

        Erros estruturais do grafo (dependência desconhecida, ciclo, Task
        raiz inexistente) são levantados antes de qualquer execução e não
        são convertidos em RunResult.
        """
        ordered = plan_execution(self.tasks, root)
        self.ctx.log(
            task_name=root,
            level="info",
            message=f"plan: {' -> '.join(t.name for t in ordered)}",
        )

        results: Dict[str, TaskResult] = {}
        for task in ordered:
            name = task.name
            kind = getattr(task, "kind", TaskKind.AGGREGATE) or TaskKind.AGGREGATE
            self.ctx.log(task_name=name, level="info", message="started")
            if self.record is not None:
                task_started(self.record, task_name=name, kind=str(kind.value), ts=self._now())

            try:
                result = task.run(self.ctx)
                if not isinstance(result, TaskResult):
                    raise _InvalidTaskResult(type(result).__name__)
                result = self._enrich(task, result)
            except Exception as e:
                error = self._exception_to_error(name, e)
                result = self._failed_result(task, error)

            results[name] = result

            if result.ok:
                self.ctx.log(task_name=name, level="info", message=f"finished: {result.summary}")
                if self.record is not None:
                    task_finished(
                        self.record,
                        task_name=name,
                        ts=self._now(),
                        summary=result.summary,
                        metrics=result.metrics,
                        warnings=result.warnings,
                        artifacts=result.artifacts,
                    )
                continue

            error_dict = dict(result.payload.get("error") or {})
            if not error_dict:
                error_dict = engine_execution_error(task=name, exc_message=result.summary).to_dict()
            self.ctx.log(task_name=name, level="error", message=f"failed: {error_dict.get('message')}")
            if self.record is not None:
                task_failed(self.record, task_name=name, ts=self._now(), error=error_dict)

            return RunResult(
                root=root,
                tasks=results,
                failed_task=name,
                error=BuildErrorPayload(
                    type=str(error_dict.get("type")),
                    message=str(error_dict.get("message")),
                    details=dict(error_dict.get("details") or {}),
                    hint=error_dict.get("hint"),
                ),
            )

        return RunResult(root=root, tasks=results)
