# src/atlas_buildflow/core/__init__.py
"""
Core do Atlas BuildFlow.

Este pacote contém a implementação canônica do orquestrador, reunindo
as responsabilidades essenciais para planejamento, execução e
rastreabilidade de builds.

O core é projetado para ser:
    - determinístico
    - sequencial (uma Task por vez)
    - fail-fast (a primeira falha aborta o build)
    - independente das ferramentas externas invocadas pelas Tasks

Subpacotes:
    - config       → defaults, carregamento, deep-merge e hashing
    - pipeline     → Task, TaskResult, BuildContext e TaskRegistry
    - engine       → planner (DAG) e Engine
    - traceability → Build Record

Módulos:
    - exceptions → taxonomia de exceções tipadas
    - errors     → payload canônico de erro e catálogo de códigos
"""
