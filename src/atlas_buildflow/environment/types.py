# src/atlas_buildflow/environment/types.py
"""Tipos do Environment Probe."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from atlas_buildflow.surface.types import EMPTY_SURFACE, PublicSurface
from atlas_buildflow.versioning.version import ZERO_VERSION, Version

from .kind import EnvironmentKind


@dataclass(frozen=True)
class PublishedModule:
    """
    Release anteriormente publicada de um módulo.

    `surface` é None quando a origem de pacotes não publica a lista de
    operações exportadas; nesse caso o cálculo de versão usa uma superfície
    vazia como referência.
    """

    name: str
    version: Version
    surface: Optional[PublicSurface] = None

    @property
    def known_surface(self) -> PublicSurface:
        return self.surface if self.surface is not None else EMPTY_SURFACE


@dataclass(frozen=True)
class EnvironmentReport:
    """Resultado do probe: tipo de ambiente e release anterior de referência."""

    kind: EnvironmentKind
    previous: PublishedModule

    @property
    def is_ci(self) -> bool:
        return self.kind is EnvironmentKind.CI


def unpublished(name: str) -> PublishedModule:
    """Referência usada quando não há publicação anterior (ou em execução local)."""
    return PublishedModule(name=name, version=ZERO_VERSION, surface=EMPTY_SURFACE)
