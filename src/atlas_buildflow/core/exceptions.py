"""
Atlas BuildFlow — Canonical Exceptions (v1)

Este módulo define a taxonomia de exceções tipadas do Atlas BuildFlow.

Objetivo:
- Permitir que Tasks/Engine levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para BuildErrorPayload
- Evitar ValueError/RuntimeError genéricos em pontos críticos do build

Regras:
- Toda exceção é fatal para o build corrente (sem retry, sem recovery)
- Exceções carregam apenas dados estruturados (serializáveis) em `details`
- Mensagem deve ser curta e humana
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class BuildflowError(Exception):
    """Base class para exceções internas do Atlas BuildFlow.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - `hint` indica ao operador onde corrigir
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})
        self.hint = hint

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Grafo de Tasks / Configuração
# ---------------------------------------------------------------------------

class ConfigurationError(BuildflowError):
    """Grafo de Tasks ou configuração inválidos; detectado antes de qualquer efeito colateral."""


class UnknownDependencyError(ConfigurationError):
    """Uma Task declara pré-requisito que não corresponde a nenhuma Task registrada."""


class CycleDetectedError(ConfigurationError):
    """O grafo de pré-requisitos contém um ciclo."""


class UnknownTaskError(ConfigurationError):
    """A Task raiz solicitada não existe no grafo."""


class DuplicateTaskNameError(ConfigurationError):
    """Duas Tasks foram registradas com o mesmo nome."""


class ContextStateError(BuildflowError):
    """Slot write-once do BuildContext escrito duas vezes ou lido antes de ser escrito."""


# ---------------------------------------------------------------------------
# Ferramentas externas / Quality gates
# ---------------------------------------------------------------------------

class ToolInvocationError(BuildflowError):
    """A ferramenta externa (lint/test/coverage) falhou por si só, não por reportar falhas."""


class QualityGateFailure(BuildflowError):
    """Resultado de uma verificação externa abaixo do limiar configurado."""


# ---------------------------------------------------------------------------
# Artefatos e metadados
# ---------------------------------------------------------------------------

class LoadError(BuildflowError):
    """O artefato de implementação (ou documento) não pôde ser carregado/parseado."""


class SpecNotFoundError(BuildflowError):
    """O nó de metadados esperado está ausente na package spec."""


class ManifestError(BuildflowError):
    """Manifest primário ausente, em formato não suportado ou com raiz inválida."""


# ---------------------------------------------------------------------------
# Ambiente
# ---------------------------------------------------------------------------

class PackageSourceError(BuildflowError):
    """Falha de transporte/autenticação ao consultar a origem de pacotes publicados."""
