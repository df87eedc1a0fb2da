# src/atlas_buildflow/environment/__init__.py
"""
Environment Probe do Atlas BuildFlow.

- types: EnvironmentKind, EnvironmentReport, PublishedModule
- package_source: PackageSourceClient (índice HTTP JSON via requests)
- probe: is_ci, probe_environment
"""

from .package_source import PackageSourceClient
from .probe import LOCAL_BUILD_WARNING, is_ci, probe_environment
from .types import EnvironmentKind, EnvironmentReport, PublishedModule, unpublished

__all__ = [
    "EnvironmentKind",
    "EnvironmentReport",
    "LOCAL_BUILD_WARNING",
    "PackageSourceClient",
    "PublishedModule",
    "is_ci",
    "probe_environment",
    "unpublished",
]
