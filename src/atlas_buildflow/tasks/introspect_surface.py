# src/atlas_buildflow/tasks/introspect_surface.py
"""Task canônica: introspect-surface.

Deriva a superfície pública do artefato de implementação
(`paths.source` / `paths.artifact`) e grava no slot `ctx.surface`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from atlas_buildflow.core.pipeline.context import BuildContext
from atlas_buildflow.core.pipeline.types import TaskKind, TaskResult, TaskStatus
from atlas_buildflow.surface.introspector import introspect_surface


@dataclass
class IntrospectSurfaceTask:
    name: str = "introspect-surface"
    kind: TaskKind = TaskKind.SETUP
    depends_on: List[str] = field(default_factory=list)

    def run(self, ctx: BuildContext) -> TaskResult:
        artifact = ctx.source_path("artifact")
        mode = str((ctx.config.get("surface") or {}).get("mode") or "isolated")

        surface = introspect_surface(artifact, mode=mode)
        ctx.set_surface(surface)

        ctx.log(
            task_name=self.name,
            level="info",
            message="public surface introspected",
            mode=mode,
            operations=len(surface),
        )

        return TaskResult(
            task_name=self.name,
            kind=self.kind,
            status=TaskStatus.SUCCESS,
            summary=f"{len(surface)} exported operation(s)",
            metrics={"operations": len(surface)},
            artifacts={"artifact": str(artifact)},
            payload={"operations": surface.sorted(), "mode": mode},
        )
