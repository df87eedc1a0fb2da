# src/atlas_buildflow/sync/module_manifest.py
"""
Manifest primário do módulo (YAML ou JSON).

O manifest primário é um documento de metadados cuja raiz é um mapeamento.
O Atlas BuildFlow edita apenas dois campos:

    - versão (`manifest.version_field`, padrão `version`) → "X.Y.Z"
    - operações exportadas (`manifest.exports_field`, padrão
      `exported_operations`) → lista ordenada da superfície pública

Decisões arquiteturais:
    - Todos os demais campos são preservados, na ordem original
    - O formato é decidido pelo sufixo do arquivo (.yaml/.yml/.json)
    - Campos ausentes são criados no fim do documento

Limites explícitos:
    - Não interpreta nenhum outro campo do manifest
    - Comentários YAML não são preservados na reescrita
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from atlas_buildflow.core.exceptions import ManifestError
from atlas_buildflow.surface.types import PublicSurface
from atlas_buildflow.versioning.version import Version

VERSION_FIELD = "version"
EXPORTS_FIELD = "exported_operations"

_YAML_SUFFIXES = (".yaml", ".yml")
_JSON_SUFFIXES = (".json",)


@dataclass(frozen=True)
class ManifestRecord:
    """Leitura do manifest primário: versão, operações exportadas e campos completos."""

    version: Version
    exported_operations: List[str]
    fields: Dict[str, Any] = field(default_factory=dict)


def _load(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ManifestError(
            "Manifest do módulo não encontrado",
            details={"path": str(path)},
            hint="Verifique paths.manifest na configuração do build.",
        )

    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    try:
        if suffix in _YAML_SUFFIXES:
            data = yaml.safe_load(text)
        elif suffix in _JSON_SUFFIXES:
            data = json.loads(text)
        else:
            raise ManifestError(
                f"Formato de manifest não suportado: {suffix}",
                details={"path": str(path), "suffix": suffix},
            )
    except (yaml.YAMLError, ValueError) as e:
        raise ManifestError(
            "Manifest do módulo não pôde ser interpretado",
            details={"path": str(path), "error": str(e)},
        ) from e

    if not isinstance(data, dict):
        raise ManifestError(
            "Raiz do manifest deve ser um mapeamento",
            details={"path": str(path), "received": type(data).__name__},
        )
    return data


def _dump(path: Path, data: Dict[str, Any]) -> None:
    if path.suffix.lower() in _YAML_SUFFIXES:
        text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)
    else:
        text = json.dumps(data, ensure_ascii=False, indent=2) + "\n"
    path.write_text(text, encoding="utf-8")


def update_module_manifest(
    path: Path,
    *,
    version: Version,
    surface: PublicSurface,
    version_field: str = VERSION_FIELD,
    exports_field: str = EXPORTS_FIELD,
) -> ManifestRecord:
    """
    Grava versão e operações exportadas no manifest primário.

    Raises:
        ManifestError: Arquivo ausente, formato não suportado, conteúdo
            inválido ou raiz que não seja um mapeamento.
    """
    path = Path(path)
    data = _load(path)

    data[version_field] = str(version)
    data[exports_field] = surface.sorted()

    _dump(path, data)
    return read_module_manifest(path, version_field=version_field, exports_field=exports_field)


def read_module_manifest(
    path: Path,
    *,
    version_field: str = VERSION_FIELD,
    exports_field: str = EXPORTS_FIELD,
) -> ManifestRecord:
    path = Path(path)
    data = _load(path)

    raw_version = data.get(version_field)
    try:
        version = Version.parse(str(raw_version))
    except ValueError as e:
        raise ManifestError(
            "Versão do manifest inválida",
            details={"path": str(path), "field": version_field, "value": raw_version},
        ) from e

    exported = data.get(exports_field) or []
    if not isinstance(exported, list) or not all(isinstance(op, str) for op in exported):
        raise ManifestError(
            "Operações exportadas do manifest devem ser uma lista de strings",
            details={"path": str(path), "field": exports_field},
        )

    return ManifestRecord(version=version, exported_operations=list(exported), fields=dict(data))
