# src/atlas_buildflow/versioning/__init__.py
"""Version e cálculo da próxima versão de release."""

from .calculator import COUNT_DIFF, SET_DIFF, compute_next_version, surface_changed
from .version import LOCAL_VERSION, ZERO_VERSION, Version

__all__ = [
    "COUNT_DIFF",
    "LOCAL_VERSION",
    "SET_DIFF",
    "Version",
    "ZERO_VERSION",
    "compute_next_version",
    "surface_changed",
]
