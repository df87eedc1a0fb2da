# src/atlas_buildflow/core/pipeline/types.py
"""
Tipos canônicos do pipeline de build do Atlas BuildFlow.

Este módulo define as estruturas e enums fundamentais que padronizam
a comunicação entre Tasks, Engine e a camada de rastreabilidade.

Componentes principais:
    - TaskStatus → enum de estados finais (SUCCESS, FAILED)
    - TaskKind   → enum de classificação semântica de Tasks
    - TaskResult → estrutura imutável de resultado de execução

Princípios fundamentais:
    - Tipos são estáveis e serializáveis
    - Valores são projetados para persistência no Build Record
    - Nenhuma lógica de execução vive neste módulo

Invariantes:
    - Enums possuem valores textuais canônicos
    - TaskResult é imutável e seguro contra mutação acidental

Limites explícitos:
    - Não executa Tasks
    - Não planeja o grafo
    - Não decide políticas de execução
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class TaskKind(str, Enum):
    """
    Tipos semânticos de Tasks no build.

    Tipos definidos:
        - SETUP: detecção de ambiente e introspecção (sem efeitos no disco)
        - VERSIONING: cálculo da versão de release
        - QUALITY: quality gates sobre ferramentas externas
        - SYNC: escrita de metadados (manifest, package spec)
        - STAGE: preparação/remoção de arquivos de saída
        - AGGREGATE: Tasks compostas sem corpo próprio (ex.: build, default)

    Decisões arquiteturais:
        - O tipo é puramente informativo e semântico
        - O Engine não utiliza `TaskKind` para decidir execução
    """

    SETUP = "setup"
    VERSIONING = "versioning"
    QUALITY = "quality"
    SYNC = "sync"
    STAGE = "stage"
    AGGREGATE = "aggregate"


class TaskStatus(str, Enum):
    """
    Estados finais possíveis da execução de uma Task.

    Estados definidos:
        - SUCCESS: execução concluída com sucesso
        - FAILED: execução interrompida por erro (aborta o build)

    Não existe SKIPPED: em fail-fast, Tasks posteriores à falha simplesmente
    não são invocadas e não aparecem no resultado.
    """

    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class TaskResult:
    """
    Resultado imutável da execução de uma Task.

    Campos:
        - task_name: nome único da Task
        - kind: tipo semântico da Task
        - status: estado final da execução
        - summary: resumo textual da execução
        - metrics: métricas numéricas produzidas (ex.: coverage_percent)
        - warnings: avisos não fatais gerados durante a execução
        - artifacts: referências a arquivos produzidos (ex.: relatórios)
        - payload: dados adicionais (ex.: `error` quando FAILED)

    Invariantes:
        - Uma instância de TaskResult nunca é alterada após criada
        - `task_name`, `kind` e `status` estão sempre presentes
    """

    task_name: str
    kind: TaskKind
    status: TaskStatus
    summary: str
    metrics: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    artifacts: Dict[str, str] = field(default_factory=dict)
    payload: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == TaskStatus.SUCCESS
