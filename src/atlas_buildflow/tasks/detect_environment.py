# src/atlas_buildflow/tasks/detect_environment.py
"""Task canônica: detect-environment.

Responsabilidades:
- classificar a execução como CI ou local (variável `environment.ci_variable`)
- em CI, obter a release anterior na origem de pacotes
- em execução local, registrar o warning de artefato não publicável
- gravar o `EnvironmentReport` no slot write-once `ctx.environment`

Limites explícitos:
- NÃO calcula versão
- NÃO faz retry de consultas à origem de pacotes
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from atlas_buildflow.core.pipeline.context import BuildContext
from atlas_buildflow.core.pipeline.types import TaskKind, TaskResult, TaskStatus
from atlas_buildflow.environment.package_source import PackageSourceClient
from atlas_buildflow.environment.probe import LOCAL_BUILD_WARNING, probe_environment

ClientFactory = Callable[[BuildContext], PackageSourceClient]


def default_client_factory(ctx: BuildContext) -> PackageSourceClient:
    registry = ctx.config.get("registry") or {}
    token_variable = registry.get("token_variable")
    token = os.environ.get(token_variable) if token_variable else None
    return PackageSourceClient(
        index_url=str(registry["index_url"]),
        token=token,
        timeout=float(registry.get("timeout_seconds", 30.0)),
    )


@dataclass
class DetectEnvironmentTask:
    """Detecta CI vs local e resolve a release anterior de referência."""

    name: str = "detect-environment"
    kind: TaskKind = TaskKind.SETUP
    depends_on: List[str] = field(default_factory=list)
    client_factory: Optional[ClientFactory] = None

    def run(self, ctx: BuildContext) -> TaskResult:
        variable = str((ctx.config.get("environment") or {}).get("ci_variable") or "CI")
        factory = self.client_factory or default_client_factory

        report = probe_environment(
            module_name=ctx.module_name,
            client_factory=lambda: factory(ctx),
            variable=variable,
        )
        ctx.set_environment(report)

        if not report.is_ci:
            ctx.add_warning(task_name=self.name, message=LOCAL_BUILD_WARNING)

        previous = report.previous
        ctx.log(
            task_name=self.name,
            level="info",
            message="environment detected",
            environment=report.kind.value,
            previous_version=str(previous.version),
        )

        return TaskResult(
            task_name=self.name,
            kind=self.kind,
            status=TaskStatus.SUCCESS,
            summary=f"{report.kind.value} build, previous release {previous.version}",
            metrics={
                "previous_surface_size": len(previous.known_surface),
            },
            payload={
                "environment": report.kind.value,
                "previous_version": str(previous.version),
                "previous_surface_known": previous.surface is not None,
            },
        )
