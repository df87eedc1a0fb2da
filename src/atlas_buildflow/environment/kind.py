# src/atlas_buildflow/environment/kind.py
from __future__ import annotations

from enum import Enum


class EnvironmentKind(str, Enum):
    """Tipo de execução: pipeline automatizado (CI) ou verificação local."""

    CI = "ci"
    LOCAL = "local"
