# src/atlas_buildflow/core/config/merge.py
"""
Utilitário canônico de deep-merge de configuração.

Este módulo implementa a política oficial de deep-merge utilizada pelo
Atlas BuildFlow para resolver a configuração efetiva do build a partir dos
defaults embutidos e do arquivo de projeto (`buildflow.yaml`).

Política de merge (v1):
    - dict → merge recursivo por chave
    - list → sobrescrita total (sem merge elemento a elemento)
    - escalar → sobrescrita direta
    - None na base → aceita qualquer override (slot "não definido")
    - None sobre dict → conflito de tipos (seção vazia não apaga a seção)
    - int sobre float → aceito e convertido para float
    - conflito de tipos → erro estrutural explícito

Invariantes:
    - Nenhum input é mutado durante o processo
    - A mesma entrada sempre produz a mesma saída
    - Chaves não sobrescritas são preservadas
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def _merge_value(key: str, base_value: Any, override_value: Any) -> Any:
    if isinstance(base_value, dict) and isinstance(override_value, dict):
        return deep_merge(base_value, override_value)

    # seção vazia no YAML (`versioning:`) chega como None e apagaria o dict inteiro
    if isinstance(base_value, dict) and override_value is None:
        raise ConfigTypeConflictError(
            f"Seção '{key}' vazia na configuração: esperado dict, recebido None",
            details={"key": key, "base_type": "dict", "override_type": "NoneType"},
        )

    if base_value is None or override_value is None:
        return deepcopy(override_value)

    # list -> sobrescrita total
    if isinstance(base_value, list) and isinstance(override_value, list):
        return deepcopy(override_value)

    # limiares numéricos declarados como float aceitam inteiros no override
    if isinstance(base_value, float) and isinstance(override_value, int) and not isinstance(override_value, bool):
        return float(override_value)

    if type(base_value) is not type(override_value):
        raise ConfigTypeConflictError(
            f"Conflito de tipo na chave '{key}': "
            f"{type(base_value).__name__} vs {type(override_value).__name__}",
            details={
                "key": key,
                "base_type": type(base_value).__name__,
                "override_type": type(override_value).__name__,
            },
        )

    return deepcopy(override_value)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre dois dicionários de configuração.

    Esta função combina a configuração base com overrides explícitos,
    produzindo uma nova estrutura sem mutar nenhum dos inputs.

    Args:
        base (Dict[str, Any]): Configuração base (ex.: DEFAULT_CONFIG).
        override (Dict[str, Any]): Overrides do projeto.

    Returns:
        Dict[str, Any]: Nova configuração resultante do deep-merge.

    Raises:
        ConfigTypeConflictError: Se ocorrer conflito de tipo entre base e override.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        if key not in result:
            result[key] = deepcopy(override_value)
            continue
        result[key] = _merge_value(key, result[key], override_value)

    return result
