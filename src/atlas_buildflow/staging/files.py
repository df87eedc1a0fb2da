# src/atlas_buildflow/staging/files.py
"""
Preparação e limpeza da saída do build.

Layout da saída:
    <output_root>/<module_name>/<version>/  ← cópia do código-fonte do módulo,
                                              sem os arquivos excluídos

Decisões arquiteturais:
    - Exclusões usam padrões glob aplicados ao nome de cada arquivo ou
      diretório (`shutil.ignore_patterns`)
    - Um diretório de versão existente é removido antes da cópia (rebuild
      local 0.0.1), de modo que o stage reflete exatamente o código-fonte atual
    - A limpeza recusa apagar a raiz do projeto ou qualquer ancestral dela
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Iterable, List

from atlas_buildflow.core.exceptions import ConfigurationError, LoadError


def stage_module_files(source_root: Path, destination: Path, *, exclude: Iterable[str] = ()) -> List[Path]:
    """
    Copia `source_root` para `destination`, ignorando os padrões de `exclude`.

    Returns:
        Arquivos copiados, relativos a `destination`, em ordem.
    """
    if not source_root.is_dir():
        raise LoadError(
            "Diretório de código-fonte do módulo não encontrado",
            details={"path": str(source_root)},
            hint="Verifique paths.source na configuração do build.",
        )

    if source_root.resolve() in destination.resolve().parents:
        raise ConfigurationError(
            "Diretório de saída está dentro do código-fonte do módulo",
            details={"source": str(source_root), "destination": str(destination)},
            hint="Mantenha paths.output fora de paths.source.",
        )

    if destination.exists():
        shutil.rmtree(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copytree(
        str(source_root),
        str(destination),
        ignore=shutil.ignore_patterns(*list(exclude)),
    )
    return sorted(p.relative_to(destination) for p in destination.rglob("*") if p.is_file())


def clean_output(output_root: Path, *, project_root: Path) -> bool:
    """
    Remove a raiz de saída do build.

    Returns:
        True se algo foi removido; False se a saída não existia.
    """
    output_root = output_root.resolve()
    project_root = project_root.resolve()
    if output_root == project_root or output_root in project_root.parents:
        raise ConfigurationError(
            "paths.output aponta para a raiz do projeto ou um ancestral",
            details={"output": str(output_root), "project_root": str(project_root)},
            hint="Use um diretório de saída dedicado, por exemplo 'build'.",
        )

    if not output_root.exists():
        return False
    shutil.rmtree(output_root)
    return True
