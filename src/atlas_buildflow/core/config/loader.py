# src/atlas_buildflow/core/config/loader.py
"""
Loader canônico de configuração do Atlas BuildFlow.

Este módulo é responsável por carregar, validar estruturalmente e resolver
a configuração efetiva de um build.

A configuração é resolvida a partir de:
    - os defaults embutidos (`DEFAULT_CONFIG`, obrigatórios)
    - um arquivo de projeto opcional (`buildflow.yaml` na raiz do projeto)
      ou um arquivo explícito (`--config`)

Princípios fundamentais:
    - Configuração é declarativa e explícita
    - Erros estruturais são tratados como falhas fatais
    - A mesma entrada sempre produz a mesma configuração final

Invariantes:
    - O resultado é sempre um dicionário puro (`dict`)
    - Overrides nunca mutam os defaults
    - Valores enumerados conhecidos são validados após o merge

Limites explícitos:
    - Não valida existência de caminhos (responsabilidade das Tasks)
    - Não persiste configuração ou hash
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union
import json

import yaml  # PyYAML

from .defaults import DEFAULT_CONFIG, PROJECT_CONFIG_FILENAMES, SURFACE_DIFF_MODES, SURFACE_MODES
from .merge import deep_merge
from .errors import (
    ConfigFileNotFoundError,
    InvalidConfigRootTypeError,
    InvalidConfigSyntaxError,
    InvalidConfigValueError,
    UnsupportedConfigFormatError,
)


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de configuração e valida sua estrutura básica.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)

    Arquivos vazios são interpretados como dicionários vazios.

    Raises:
        ConfigFileNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
        InvalidConfigSyntaxError: Se o YAML/JSON for sintaticamente inválido.
    """
    if not path.exists():
        raise ConfigFileNotFoundError(
            f"Arquivo de configuração não encontrado: {path}",
            details={"path": str(path)},
        )

    suffix = path.suffix.lower()
    if suffix not in {".yaml", ".yml", ".json"}:
        raise UnsupportedConfigFormatError(
            f"Formato não suportado: {path.suffix}",
            details={"path": str(path)},
        )

    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f) if suffix == ".json" else yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise InvalidConfigSyntaxError(
            f"Arquivo de configuração inválido: {path.name}",
            details={"path": str(path), "error": str(e)},
            hint="Corrija a sintaxe YAML/JSON do arquivo de configuração.",
        ) from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}",
            details={"path": str(path)},
        )

    return data


def _validate(config: Dict[str, Any]) -> None:
    diff_mode = config["versioning"]["surface_diff"]
    if diff_mode not in SURFACE_DIFF_MODES:
        raise InvalidConfigValueError(
            f"versioning.surface_diff inválido: {diff_mode!r}",
            details={"key": "versioning.surface_diff", "allowed": list(SURFACE_DIFF_MODES)},
        )

    surface_mode = config["surface"]["mode"]
    if surface_mode not in SURFACE_MODES:
        raise InvalidConfigValueError(
            f"surface.mode inválido: {surface_mode!r}",
            details={"key": "surface.mode", "allowed": list(SURFACE_MODES)},
        )


def find_project_config(project_root: Union[str, Path]) -> Optional[Path]:
    """Retorna o primeiro arquivo de projeto existente na raiz, ou None."""
    root = Path(project_root)
    for name in PROJECT_CONFIG_FILENAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def load_config(
    *,
    project_root: Union[str, Path],
    config_path: Optional[Union[str, Path]] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva do build.

    Política de resolução:
        - Os defaults embutidos são sempre a base
        - Se `config_path` for informado, ele é obrigatório e aplicado
        - Caso contrário, o primeiro `buildflow.{yaml,yml,json}` encontrado
          na raiz do projeto é aplicado, se existir

    Args:
        project_root (str | Path): Raiz do projeto sendo construído.
        config_path (Optional[str | Path]): Arquivo de configuração explícito.

    Returns:
        Dict[str, Any]: Configuração final resolvida.

    Raises:
        ConfigFileNotFoundError: Se `config_path` foi informado e não existe.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
        InvalidConfigValueError: Se um valor enumerado estiver fora do domínio.
    """
    if config_path is not None:
        source: Optional[Path] = Path(config_path)
    else:
        source = find_project_config(project_root)

    effective = deep_merge(DEFAULT_CONFIG, {})
    if source is not None:
        effective = deep_merge(DEFAULT_CONFIG, _load_file(source))

    _validate(effective)
    return effective
