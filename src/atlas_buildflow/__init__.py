# src/atlas_buildflow/__init__.py
"""
Atlas BuildFlow — orquestrador de build para módulos Python empacotados.

Este pacote raiz define o namespace público do Atlas BuildFlow, um
orquestrador que sequencia quality gates (lint, testes, cobertura), calcula
a versão de release, sincroniza essa versão e a superfície pública do módulo
entre dois artefatos de metadados e prepara (stage) os arquivos em um
diretório de saída versionado.

Princípios centrais:
    - O build é um DAG explícito de Tasks nomeadas
    - A execução é sequencial, determinística e fail-fast
    - Estado do build é um BuildContext explícito (sem globais)
    - A versão é derivada de sinais de ambiente e da superfície pública

Arquitetura em alto nível:
    - core.config       → carregamento, merge e hashing de configuração
    - core.pipeline     → protocolo de Task, BuildContext e registro de Tasks
    - core.engine       → planejamento (DAG) e execução fail-fast
    - core.traceability → Build Record para auditoria da execução
    - environment       → detecção CI/local e release publicada anterior
    - versioning        → Version e cálculo da próxima versão
    - surface           → introspecção isolada da superfície pública
    - sync              → sincronização do manifest e da package spec
    - gates             → quality gates sobre ferramentas externas
    - staging           → cópia dos arquivos para o diretório versionado
    - tasks             → grafo padrão de Tasks do build

Limites explícitos:
    - Não é um sistema de build de propósito geral (sem incremental/cache)
    - Não publica pacotes em registries
    - Não interpreta manifests além dos campos que edita
"""

__version__ = "0.4.0"

__all__ = ["__version__"]
