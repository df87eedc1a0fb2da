"""
Atlas BuildFlow — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do Atlas BuildFlow.
Erros são considerados artefatos do build e fazem parte do contrato
operacional do sistema, devendo ser:

- explícitos
- serializáveis
- rastreáveis
- acionáveis

Nenhuma recuperação implícita é permitida: todo erro aborta o build.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BuildErrorPayload:
    """
    Payload canônico de erro do Atlas BuildFlow.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        # o chamador deve garantir que details seja serializável
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Quality gates
QUALITY_GATE_FAILURE = "QUALITY_GATE_FAILURE"
TOOL_INVOCATION_ERROR = "TOOL_INVOCATION_ERROR"

# Engine / Execução
ENGINE_EXECUTION_ERROR = "ENGINE_EXECUTION_ERROR"
ENGINE_CONFIGURATION_ERROR = "ENGINE_CONFIGURATION_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def quality_gate_failure(
    *,
    gate: str,
    threshold: Any,
    actual: Any,
    offending: Optional[List[Any]] = None,
    hint: str = "Corrija os itens reportados ou ajuste o limiar do gate na configuração do build.",
) -> BuildErrorPayload:
    return BuildErrorPayload(
        type=QUALITY_GATE_FAILURE,
        message=f"Quality gate '{gate}' não atingiu o limiar",
        details={
            "gate": gate,
            "threshold": threshold,
            "actual": actual,
            "offending": list(offending or []),
        },
        hint=hint,
    )


def tool_invocation_error(
    *,
    tool: str,
    returncode: Optional[int] = None,
    stderr: Optional[str] = None,
    hint: str = "Verifique se a ferramenta está instalada no ambiente do build e se seus argumentos são válidos.",
) -> BuildErrorPayload:
    return BuildErrorPayload(
        type=TOOL_INVOCATION_ERROR,
        message=f"Falha ao invocar a ferramenta externa '{tool}'",
        details={
            "tool": tool,
            "returncode": returncode,
            "stderr": stderr,
        },
        hint=hint,
    )


def engine_execution_error(
    *,
    task: Optional[str] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Verifique o log do build para diagnosticar a falha. Nenhum fallback é aplicado automaticamente.",
) -> BuildErrorPayload:
    return BuildErrorPayload(
        type=ENGINE_EXECUTION_ERROR,
        message=exc_message or "Falha inesperada durante a execução do build",
        details={
            "task": task,
            "exc_type": exc_type,
        },
        hint=hint,
    )


def engine_configuration_error(
    *,
    message: str = "Configuração inválida para execução do build",
    details: Optional[Dict[str, Any]] = None,
    hint: str = "Revise o grafo de Tasks e declare explicitamente os pré-requisitos antes de reexecutar.",
) -> BuildErrorPayload:
    return BuildErrorPayload(
        type=ENGINE_CONFIGURATION_ERROR,
        message=message,
        details=details or {},
        hint=hint,
    )
