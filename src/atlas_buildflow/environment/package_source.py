# src/atlas_buildflow/environment/package_source.py
"""
Cliente da origem de pacotes (índice HTTP JSON).

Consulta a última release publicada de um módulo para servir de referência
ao cálculo de versão. O índice segue o formato do PyPI JSON API:

    GET {index_url}/{name}/json
    {"info": {"version": "1.4.2", "exported_operations": ["Foo", "Bar"]}}

Campos `version`/`exported_operations` no nível raiz também são aceitos.

Decisões arquiteturais:
    - 404 significa "nunca publicado" e não é erro (retorna None)
    - Qualquer outra falha (transporte, timeout, 401/403, 5xx, corpo inválido)
      levanta `PackageSourceError`; não há retry
    - `exported_operations` ausente é "superfície desconhecida" (None),
      nunca uma superfície vazia inventada

Limites explícitos:
    - Somente leitura: publicar pacotes não faz parte do orquestrador
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from atlas_buildflow.core.exceptions import PackageSourceError
from atlas_buildflow.environment.types import PublishedModule
from atlas_buildflow.surface.types import PublicSurface
from atlas_buildflow.versioning.version import Version


class PackageSourceClient:
    """Cliente mínimo do índice de pacotes, baseado em `requests.Session`."""

    def __init__(
        self,
        *,
        index_url: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.index_url = index_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})

    def _url(self, name: str) -> str:
        return f"{self.index_url}/{name}/json"

    def find_module(self, name: str) -> Optional[PublishedModule]:
        """
        Busca a última release publicada de `name`.

        Returns:
            PublishedModule, ou None quando o módulo nunca foi publicado (404).

        Raises:
            PackageSourceError: Falha de transporte, autenticação, servidor
                ou resposta fora do formato esperado.
        """
        url = self._url(name)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise PackageSourceError(
                "Timeout ao consultar a origem de pacotes",
                details={"url": url, "timeout": self.timeout},
                hint="Verifique a conectividade ou aumente registry.timeout_seconds.",
            ) from e
        except requests.exceptions.RequestException as e:
            raise PackageSourceError(
                "Falha de conexão com a origem de pacotes",
                details={"url": url, "error": str(e)},
                hint="Verifique registry.index_url e a conectividade do agente de CI.",
            ) from e

        if response.status_code == 404:
            return None

        if response.status_code in (401, 403):
            raise PackageSourceError(
                "Acesso negado pela origem de pacotes",
                details={"url": url, "status_code": response.status_code},
                hint="Verifique o token indicado por registry.token_variable.",
            )

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise PackageSourceError(
                f"Origem de pacotes respondeu HTTP {response.status_code}",
                details={"url": url, "status_code": response.status_code},
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            raise PackageSourceError(
                "Resposta da origem de pacotes não é JSON válido",
                details={"url": url},
            ) from e

        return _parse_module(name, data, url=url)


def _parse_module(name: str, data: Any, *, url: str) -> PublishedModule:
    if not isinstance(data, dict):
        raise PackageSourceError(
            "Resposta da origem de pacotes fora do formato esperado",
            details={"url": url, "received": type(data).__name__},
        )

    info: Dict[str, Any] = data.get("info") if isinstance(data.get("info"), dict) else data

    raw_version = info.get("version")
    try:
        version = Version.parse(str(raw_version))
    except ValueError as e:
        raise PackageSourceError(
            "Versão publicada inválida",
            details={"url": url, "version": raw_version},
        ) from e

    raw_ops = info.get("exported_operations")
    surface: Optional[PublicSurface] = None
    if raw_ops is not None:
        if not isinstance(raw_ops, list) or not all(isinstance(op, str) for op in raw_ops):
            raise PackageSourceError(
                "exported_operations publicado deve ser uma lista de strings",
                details={"url": url},
            )
        surface = PublicSurface.of(raw_ops)

    return PublishedModule(name=name, version=version, surface=surface)
