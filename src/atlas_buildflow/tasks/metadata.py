# src/atlas_buildflow/tasks/metadata.py
"""Tasks canônicas de sincronização: update-manifest e update-package-spec.

As duas Tasks são independentes: cada uma depende apenas de
`compute-version` e não há rollback entre arquivos.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from atlas_buildflow.core.pipeline.context import BuildContext
from atlas_buildflow.core.pipeline.types import TaskKind, TaskResult, TaskStatus
from atlas_buildflow.sync.module_manifest import EXPORTS_FIELD, VERSION_FIELD, update_module_manifest
from atlas_buildflow.sync.package_spec import update_package_spec


@dataclass
class UpdateManifestTask:
    """Grava versão e operações exportadas no manifest primário."""

    name: str = "update-manifest"
    kind: TaskKind = TaskKind.SYNC
    depends_on: List[str] = field(default_factory=lambda: ["compute-version"])

    def run(self, ctx: BuildContext) -> TaskResult:
        cfg = ctx.config.get("manifest") or {}
        path = ctx.source_path("manifest")

        record = update_module_manifest(
            path,
            version=ctx.version,
            surface=ctx.surface,
            version_field=str(cfg.get("version_field") or VERSION_FIELD),
            exports_field=str(cfg.get("exports_field") or EXPORTS_FIELD),
        )

        ctx.log(task_name=self.name, level="info", message="manifest updated", path=str(path))
        return TaskResult(
            task_name=self.name,
            kind=self.kind,
            status=TaskStatus.SUCCESS,
            summary=f"manifest set to {record.version} with {len(record.exported_operations)} operation(s)",
            artifacts={"manifest": str(path)},
            payload={
                "version": str(record.version),
                "exported_operations": record.exported_operations,
            },
        )


@dataclass
class UpdatePackageSpecTask:
    """Grava a versão na package spec secundária."""

    name: str = "update-package-spec"
    kind: TaskKind = TaskKind.SYNC
    depends_on: List[str] = field(default_factory=lambda: ["compute-version"])

    def run(self, ctx: BuildContext) -> TaskResult:
        path = ctx.source_path("package_spec")
        written = update_package_spec(path, version=ctx.version)

        ctx.log(task_name=self.name, level="info", message="package spec updated", path=str(path))
        return TaskResult(
            task_name=self.name,
            kind=self.kind,
            status=TaskStatus.SUCCESS,
            summary=f"package spec set to {written}",
            artifacts={"package_spec": str(path)},
            payload={"version": str(written)},
        )
