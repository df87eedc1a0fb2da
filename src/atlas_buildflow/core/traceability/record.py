# src/atlas_buildflow/core/traceability/record.py
"""
Build Record v1 — rastreabilidade de execuções do Atlas BuildFlow.

Este módulo define a estrutura e as operações canônicas do Build Record,
o artefato que registra, de forma auditável, como uma versão foi produzida.

O Build Record consolida:
    - metadados da execução (run_id, started_at, versão do orquestrador, Task raiz)
    - entradas do build (hash da configuração, ambiente, versão calculada)
    - estado incremental das Tasks executadas
    - Event Log ordenado de eventos explícitos

Princípios fundamentais:
    - Nenhum evento é emitido implicitamente
    - Toda mutação ocorre por chamadas explícitas da API
    - A ordem do Event Log reflete a ordem real de execução
    - O Build Record é serializável e reconstruível (round-trip)

Decisões arquiteturais:
    - UTC é o timezone canônico para todos os timestamps
    - O formato de persistência é JSON determinístico (chaves ordenadas)

Limites explícitos:
    - Não executa Tasks
    - Não decide políticas de execução
    - Não realiza migração de versões de schema
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


def _ensure_tzaware_utc(dt: datetime) -> datetime:
    """Normaliza um timestamp para timezone-aware em UTC (naive é assumido UTC)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _iso(dt: datetime) -> str:
    return _ensure_tzaware_utc(dt).isoformat()


def _ms_between(start: datetime, end: datetime) -> int:
    """Duração não negativa em milissegundos entre dois timestamps."""
    s = _ensure_tzaware_utc(start)
    e = _ensure_tzaware_utc(end)
    return max(0, int((e - s).total_seconds() * 1000))


@dataclass
class BuildRecord:
    """
    Build Record v1 — registro de uma execução do orquestrador.

    Campos principais:
        - run: metadados da execução
        - inputs: hash de configuração, ambiente e versão calculada
        - tasks: estado incremental de cada Task (indexado por nome)
        - events: Event Log ordenado

    Invariantes:
        - `tasks` é sempre um dicionário indexado por nome de Task
        - `events` é sempre uma lista ordenada
        - A estrutura completa é serializável
    """

    run: Dict[str, Any]
    inputs: Dict[str, Any]
    tasks: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Cópia serializável e independente do estado interno."""
        return {
            "run": dict(self.run),
            "inputs": dict(self.inputs),
            "tasks": {k: dict(v) for k, v in self.tasks.items()},
            "events": [dict(e) for e in self.events],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BuildRecord":
        """Reconstrução estrutural e permissiva (campos ausentes viram vazios)."""
        return cls(
            run=dict(data.get("run", {})),
            inputs=dict(data.get("inputs", {})),
            tasks={k: dict(v) for k, v in (data.get("tasks", {}) or {}).items()},
            events=[dict(e) for e in (data.get("events", []) or [])],
        )


def create_build_record(
    *,
    run_id: str,
    started_at: datetime,
    buildflow_version: str,
    root_task: str,
    config_hash: str,
) -> BuildRecord:
    """
    Cria o Build Record inicial de uma execução.

    ⚠️ Importante: esta função **não emite eventos implicitamente**.
    Ambiente e versão são registrados depois, via `set_input`, quando as
    Tasks correspondentes concluírem.
    """
    started_at = _ensure_tzaware_utc(started_at)
    return BuildRecord(
        run={
            "run_id": run_id,
            "started_at": _iso(started_at),
            "buildflow_version": buildflow_version,
            "root_task": root_task,
        },
        inputs={
            "config_hash": config_hash,
        },
        tasks={},
        events=[],
    )


def set_input(record: BuildRecord, key: str, value: Any) -> None:
    record.inputs[key] = value


def add_event(
    record: BuildRecord,
    *,
    event_type: str,
    ts: datetime,
    task_name: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> None:
    """Registra um evento explícito no fim do Event Log."""
    event: Dict[str, Any] = {"type": event_type, "ts": _iso(ts)}
    if task_name is not None:
        event["task_name"] = task_name
    if payload:
        event["payload"] = dict(payload)
    record.events.append(event)


def task_started(record: BuildRecord, *, task_name: str, kind: str, ts: datetime) -> None:
    record.tasks[task_name] = {
        "task_name": task_name,
        "kind": kind,
        "status": "running",
        "started_at": _iso(ts),
    }
    add_event(record, event_type="task_started", ts=ts, task_name=task_name)


def task_finished(
    record: BuildRecord,
    *,
    task_name: str,
    ts: datetime,
    summary: str,
    metrics: Optional[Dict[str, Any]] = None,
    warnings: Optional[List[str]] = None,
    artifacts: Optional[Dict[str, Any]] = None,
) -> None:
    entry = record.tasks.setdefault(task_name, {"task_name": task_name})
    entry.update(
        {
            "status": "success",
            "finished_at": _iso(ts),
            "summary": summary,
            "metrics": dict(metrics or {}),
            "warnings": list(warnings or []),
            "artifacts": dict(artifacts or {}),
        }
    )
    if "started_at" in entry:
        entry["duration_ms"] = _ms_between(datetime.fromisoformat(entry["started_at"]), ts)
    add_event(record, event_type="task_finished", ts=ts, task_name=task_name)


def task_failed(
    record: BuildRecord,
    *,
    task_name: str,
    ts: datetime,
    error: Dict[str, Any],
) -> None:
    entry = record.tasks.setdefault(task_name, {"task_name": task_name})
    entry.update(
        {
            "status": "failed",
            "finished_at": _iso(ts),
            "error": dict(error),
        }
    )
    if "started_at" in entry:
        entry["duration_ms"] = _ms_between(datetime.fromisoformat(entry["started_at"]), ts)
    add_event(record, event_type="task_failed", ts=ts, task_name=task_name, payload={"error_type": error.get("type")})


def save_build_record(record: Union[BuildRecord, Dict[str, Any]], path: Path) -> None:
    """Persiste o Build Record em JSON determinístico, criando diretórios intermediários."""
    data = record.to_dict() if isinstance(record, BuildRecord) else record
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True), encoding="utf-8")


def load_build_record(path: Path) -> BuildRecord:
    """Restaura um Build Record persistido (propaga erros de I/O e de JSON)."""
    data = json.loads(path.read_text(encoding="utf-8"))
    return BuildRecord.from_dict(data)
