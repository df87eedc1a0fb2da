# src/atlas_buildflow/tasks/__init__.py
"""Tasks canônicas do build padrão e o grafo que as conecta."""

from .compute_version import ComputeVersionTask
from .detect_environment import DetectEnvironmentTask
from .graph import DEFAULT_ROOT, ROOT_TASKS, build_task_registry
from .introspect_surface import IntrospectSurfaceTask
from .metadata import UpdateManifestTask, UpdatePackageSpecTask
from .output import CleanTask, StageTask
from .quality import AnalyzeTask, CodeCoverageTask, TestTask

__all__ = [
    "AnalyzeTask",
    "CleanTask",
    "CodeCoverageTask",
    "ComputeVersionTask",
    "DEFAULT_ROOT",
    "DetectEnvironmentTask",
    "IntrospectSurfaceTask",
    "ROOT_TASKS",
    "StageTask",
    "TestTask",
    "UpdateManifestTask",
    "UpdatePackageSpecTask",
    "build_task_registry",
]
