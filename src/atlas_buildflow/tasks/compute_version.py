# src/atlas_buildflow/tasks/compute_version.py
"""Task canônica: compute-version.

Combina o ambiente detectado, a release anterior e a superfície atual para
produzir a versão do build, gravada no slot write-once `ctx.version`.

Regras (ver `atlas_buildflow.versioning.calculator`):
- local → 0.0.1
- CI, superfície inalterada → patch + 1
- CI, superfície alterada → minor + 1, patch = 0
- major nunca é incrementado automaticamente

Superfície de referência:
- a publicada pela origem de pacotes, quando conhecida
- caso contrário, as operações exportadas registradas no manifest primário
  pelo build anterior (lido antes de `update-manifest` reescrevê-lo)
- sem manifest, superfície vazia
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from atlas_buildflow.core.pipeline.context import BuildContext
from atlas_buildflow.core.pipeline.types import TaskKind, TaskResult, TaskStatus
from atlas_buildflow.environment.types import PublishedModule
from atlas_buildflow.surface.types import EMPTY_SURFACE, PublicSurface
from atlas_buildflow.sync.module_manifest import EXPORTS_FIELD, VERSION_FIELD, read_module_manifest
from atlas_buildflow.versioning.calculator import SET_DIFF, compute_next_version

PACKAGE_SOURCE = "package-source"
MANIFEST = "manifest"
NO_REFERENCE = "none"


def _reference_surface(ctx: BuildContext, previous: PublishedModule) -> Tuple[PublicSurface, str]:
    if previous.surface is not None:
        return previous.surface, PACKAGE_SOURCE

    path = ctx.source_path("manifest")
    if not path.exists():
        return EMPTY_SURFACE, NO_REFERENCE

    cfg = ctx.config.get("manifest") or {}
    record = read_module_manifest(
        path,
        version_field=str(cfg.get("version_field") or VERSION_FIELD),
        exports_field=str(cfg.get("exports_field") or EXPORTS_FIELD),
    )
    return PublicSurface.of(record.exported_operations), MANIFEST


@dataclass
class ComputeVersionTask:
    name: str = "compute-version"
    kind: TaskKind = TaskKind.VERSIONING
    depends_on: List[str] = field(default_factory=lambda: ["detect-environment", "introspect-surface"])

    def run(self, ctx: BuildContext) -> TaskResult:
        environment = ctx.environment
        previous = environment.previous
        current = ctx.surface
        diff_mode = str((ctx.config.get("versioning") or {}).get("surface_diff") or SET_DIFF)

        if environment.is_ci:
            reference, reference_source = _reference_surface(ctx, previous)
        else:
            reference, reference_source = previous.known_surface, NO_REFERENCE

        version = compute_next_version(
            environment=environment.kind,
            previous_version=previous.version,
            previous_surface=reference,
            current_surface=current,
            diff_mode=diff_mode,
        )
        ctx.set_version(version)

        added, removed = current.diff(reference)
        ctx.log(
            task_name=self.name,
            level="info",
            message=f"version computed: {version}",
            previous_version=str(previous.version),
            diff_mode=diff_mode,
            reference_surface=reference_source,
        )

        return TaskResult(
            task_name=self.name,
            kind=self.kind,
            status=TaskStatus.SUCCESS,
            summary=f"{previous.version} -> {version}",
            metrics={"added": len(added), "removed": len(removed)},
            payload={
                "version": str(version),
                "previous_version": str(previous.version),
                "environment": environment.kind.value,
                "diff_mode": diff_mode,
                "reference_surface": reference_source,
                "added": added,
                "removed": removed,
            },
        )
