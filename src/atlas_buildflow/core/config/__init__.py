# src/atlas_buildflow/core/config/__init__.py
"""
Camada de configuração do Atlas BuildFlow.

A configuração no Atlas BuildFlow é:
    - declarativa
    - determinística
    - explicitamente versionável (hash registrado no Build Record)

Responsabilidades do pacote:
    - Defaults embutidos (`DEFAULT_CONFIG`)
    - Carregamento do arquivo de projeto (YAML/JSON)
    - Resolução de configuração final via deep-merge determinístico
    - Geração de hash canônico para rastreabilidade
"""

from .defaults import DEFAULT_CONFIG
from .hashing import compute_config_hash
from .loader import find_project_config, load_config
from .merge import deep_merge

__all__ = [
    "DEFAULT_CONFIG",
    "compute_config_hash",
    "deep_merge",
    "find_project_config",
    "load_config",
]
