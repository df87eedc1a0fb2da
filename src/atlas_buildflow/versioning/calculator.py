# src/atlas_buildflow/versioning/calculator.py
"""
Cálculo da próxima versão de release.

Este módulo implementa a função pura que mapeia (tipo de ambiente, versão
anterior, superfície anterior, superfície atual) para a próxima versão.

Algoritmo (v1):
    - Execução local  → 0.0.1, incondicionalmente
    - CI, superfície inalterada → (major, minor, patch + 1)
    - CI, superfície alterada (em qualquer direção) → (major, minor + 1, 0)

Detecção de mudança de superfície:
    - "set"   (default): compara os conjuntos de operações; uma troca de
      mesma cardinalidade (uma removida, outra adicionada) É mudança
    - "count" (legado): compara apenas as cardinalidades; uma troca de mesma
      cardinalidade é tratada como "inalterada" e gera apenas um patch

Decisões arquiteturais:
    - Major nunca é incrementado automaticamente (bump manual, fora de escopo)
    - Qualquer mudança de superfície é um evento de nível minor e zera o patch
    - A função não lê ambiente, disco ou rede

Invariantes:
    - Em CI, a versão retornada é sempre estritamente maior que a anterior
    - Em execução local, a versão retornada é sempre 0.0.1
"""

from __future__ import annotations

from atlas_buildflow.environment.kind import EnvironmentKind
from atlas_buildflow.surface.types import PublicSurface

from .version import LOCAL_VERSION, Version

SET_DIFF = "set"
COUNT_DIFF = "count"


def surface_changed(previous: PublicSurface, current: PublicSurface, *, mode: str = SET_DIFF) -> bool:
    """
    Indica se a superfície pública mudou entre a release anterior e o build atual.

    Raises:
        ValueError: Se `mode` não for "set" nem "count".
    """
    if mode == SET_DIFF:
        return previous.operations != current.operations
    if mode == COUNT_DIFF:
        return abs(len(current) - len(previous)) > 0
    raise ValueError(f"Unknown surface diff mode: {mode!r}")


def compute_next_version(
    *,
    environment: EnvironmentKind,
    previous_version: Version,
    previous_surface: PublicSurface,
    current_surface: PublicSurface,
    diff_mode: str = SET_DIFF,
) -> Version:
    """
    Calcula a próxima versão a partir dos sinais de ambiente e do diff de superfície.

    Args:
        environment (EnvironmentKind): CI ou LOCAL.
        previous_version (Version): Última versão publicada (0.0.0 se nenhuma).
        previous_surface (PublicSurface): Superfície da última publicação.
        current_surface (PublicSurface): Superfície introspectada neste build.
        diff_mode (str): "set" (default) ou "count" (compatível com legado).

    Returns:
        Version: Próxima versão.
    """
    if environment is EnvironmentKind.LOCAL:
        return LOCAL_VERSION

    if surface_changed(previous_surface, current_surface, mode=diff_mode):
        return previous_version.bump_minor()

    return previous_version.bump_patch()
