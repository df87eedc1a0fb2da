# src/atlas_buildflow/tasks/graph.py
"""
Grafo padrão de Tasks do Atlas BuildFlow.

    default      → build
    clean-build  → clean, build
    build        → stage
    stage        → analyze, code-coverage, update-manifest, update-package-spec
    code-coverage → test
    update-*     → compute-version → detect-environment, introspect-surface

Tasks raiz reconhecidas pelo CLI: ver `ROOT_TASKS`.
"""

from __future__ import annotations

from atlas_buildflow.core.pipeline.registry import TaskRegistry
from atlas_buildflow.core.pipeline.task import AggregateTask

from .compute_version import ComputeVersionTask
from .detect_environment import DetectEnvironmentTask
from .introspect_surface import IntrospectSurfaceTask
from .metadata import UpdateManifestTask, UpdatePackageSpecTask
from .output import CleanTask, StageTask
from .quality import AnalyzeTask, CodeCoverageTask, TestTask

DEFAULT_ROOT = "default"

ROOT_TASKS = ("default", "build", "clean-build", "analyze", "test", "code-coverage", "clean")


def build_task_registry() -> TaskRegistry:
    """Registra todas as Tasks do build padrão, na ordem de declaração."""
    return TaskRegistry.of(
        [
            CleanTask(),
            DetectEnvironmentTask(),
            IntrospectSurfaceTask(),
            ComputeVersionTask(),
            AnalyzeTask(),
            TestTask(),
            CodeCoverageTask(),
            UpdateManifestTask(),
            UpdatePackageSpecTask(),
            StageTask(),
            AggregateTask(name="build", depends_on=["stage"]),
            AggregateTask(name="default", depends_on=["build"]),
            AggregateTask(name="clean-build", depends_on=["clean", "build"]),
        ]
    )
