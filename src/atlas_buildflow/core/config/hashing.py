# src/atlas_buildflow/core/config/hashing.py
"""
Hashing canônico de configuração do Atlas BuildFlow.

O hash gerado representa a identidade estrutural da configuração efetiva
de um build e é registrado no Build Record, permitindo responder "com qual
configuração esta versão foi produzida?".

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - SHA-256, saída hexadecimal de 64 caracteres

Limites explícitos:
    - Não inclui informações de ambiente ou runtime (ex.: variável CI)
    - Não persiste o hash
"""

import hashlib
import json
from typing import Any, Dict


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico da configuração efetiva do build.

    Args:
        config (Dict[str, Any]): Configuração efetiva.

    Returns:
        str: Hash SHA-256 hexadecimal da configuração.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
