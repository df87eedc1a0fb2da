# src/atlas_buildflow/tasks/output.py
"""Tasks canônicas de saída: stage e clean."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from atlas_buildflow.core.pipeline.context import BuildContext
from atlas_buildflow.core.pipeline.types import TaskKind, TaskResult, TaskStatus
from atlas_buildflow.staging.files import clean_output, stage_module_files


@dataclass
class StageTask:
    """
    Copia o código-fonte do módulo para `<output>/<module>/<version>/`.

    Roda somente depois que todos os gates passaram e os metadados foram
    sincronizados, de modo que a cópia já contém a versão final.
    """

    name: str = "stage"
    kind: TaskKind = TaskKind.STAGE
    depends_on: List[str] = field(
        default_factory=lambda: ["analyze", "code-coverage", "update-manifest", "update-package-spec"]
    )

    def run(self, ctx: BuildContext) -> TaskResult:
        exclude = list((ctx.config.get("staging") or {}).get("exclude") or [])
        destination = ctx.staging_dir

        staged = stage_module_files(ctx.source_root, destination, exclude=exclude)

        ctx.log(task_name=self.name, level="info", message="module staged", destination=str(destination))
        return TaskResult(
            task_name=self.name,
            kind=self.kind,
            status=TaskStatus.SUCCESS,
            summary=f"{len(staged)} file(s) staged to {destination}",
            metrics={"files": len(staged)},
            artifacts={"staging_dir": str(destination)},
            payload={"files": [p.as_posix() for p in staged]},
        )


@dataclass
class CleanTask:
    """Remove a raiz de saída do build."""

    name: str = "clean"
    kind: TaskKind = TaskKind.STAGE
    depends_on: List[str] = field(default_factory=list)

    def run(self, ctx: BuildContext) -> TaskResult:
        removed = clean_output(ctx.output_root, project_root=ctx.project_root)
        summary = f"removed {ctx.output_root}" if removed else "nothing to clean"

        ctx.log(task_name=self.name, level="info", message=summary)
        return TaskResult(
            task_name=self.name,
            kind=self.kind,
            status=TaskStatus.SUCCESS,
            summary=summary,
            payload={"removed": removed},
        )
