# src/atlas_buildflow/core/traceability/__init__.py
"""
Pacote de rastreabilidade do Atlas BuildFlow — Build Record v1.

API pública exposta:
    - BuildRecord         → estrutura canônica do registro
    - create_build_record → criação explícita
    - set_input           → registro de entradas decididas durante o build
    - add_event           → registro explícito no Event Log
    - task_started        → marca início de execução de uma Task
    - task_finished       → registra conclusão bem-sucedida
    - task_failed         → registra falha (com payload de erro)
    - save_build_record   → persistência em JSON
    - load_build_record   → restauração determinística
"""

from .record import (
    BuildRecord,
    add_event,
    create_build_record,
    load_build_record,
    save_build_record,
    set_input,
    task_failed,
    task_finished,
    task_started,
)

__all__ = [
    "BuildRecord",
    "add_event",
    "create_build_record",
    "load_build_record",
    "save_build_record",
    "set_input",
    "task_failed",
    "task_finished",
    "task_started",
]
