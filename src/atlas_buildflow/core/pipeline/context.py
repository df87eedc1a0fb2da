# src/atlas_buildflow/core/pipeline/context.py
"""
Contexto de execução compartilhado do build.

Este módulo define o `BuildContext`, a estrutura canônica criada uma única
vez no início do orquestrador e passada explicitamente a todas as Tasks.
Ele substitui qualquer estado global de build (caminho de origem, caminho
de saída, versão calculada).

O BuildContext consolida:
    - identidade da execução (run_id, created_at)
    - configuração efetiva
    - caminhos do projeto (raiz, código-fonte, saída) e nome do módulo
    - slots write-once: ambiente, release anterior, superfície, versão
    - store de artefatos intermediários (ex.: diretório de dados de cobertura)
    - log estruturado de eventos e warnings por Task

Princípios fundamentais:
    - Isolamento por execução (cada build possui seu próprio contexto)
    - Nenhuma Task acessa estado global para comunicação indireta
    - Slots de decisão são escritos uma única vez e lidos por todas as
      Tasks posteriores

Invariantes:
    - Escrever duas vezes um slot write-once levanta `ContextStateError`
    - Ler um slot ainda não escrito levanta `ContextStateError`
    - Eventos sempre incluem `run_id` e `task_name`
    - Warnings são agrupados por `task_name`

Limites explícitos:
    - Não executa Tasks
    - Não persiste dados automaticamente
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from atlas_buildflow.core.exceptions import ContextStateError
from atlas_buildflow.environment.types import EnvironmentReport, PublishedModule
from atlas_buildflow.surface.types import PublicSurface
from atlas_buildflow.versioning.version import Version

EventListener = Callable[[Dict[str, Any]], None]

_UNSET = object()


@dataclass
class BuildContext:
    """
    Contexto de execução compartilhado de um build.

    Campos canônicos:
    - run_id: identificador único da execução
    - created_at: timestamp UTC de criação do contexto
    - config: configuração efetiva (defaults + projeto, deep-merge)
    - project_root: raiz do projeto sendo construído
    - source_root: raiz do código-fonte do módulo
    - output_root: raiz de saída do build
    - module_name: nome do módulo (usado na origem de pacotes e no layout de saída)
    """

    run_id: str
    created_at: datetime
    config: Dict[str, Any]
    project_root: Path
    source_root: Path
    output_root: Path
    module_name: str

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)
    listeners: List[EventListener] = field(default_factory=list, init=False, repr=False)

    _artifacts: Dict[str, Any] = field(default_factory=dict, init=False, repr=False)
    _slots: Dict[str, Any] = field(default_factory=dict, init=False, repr=False)

    # -----------------------------
    # Slots write-once
    # -----------------------------
    def _write_once(self, slot: str, value: Any) -> None:
        if slot in self._slots:
            raise ContextStateError(
                f"BuildContext.{slot} já foi definido nesta execução",
                details={"slot": slot, "current": str(self._slots[slot])},
            )
        self._slots[slot] = value

    def _read(self, slot: str) -> Any:
        value = self._slots.get(slot, _UNSET)
        if value is _UNSET:
            raise ContextStateError(
                f"BuildContext.{slot} ainda não foi definido",
                details={"slot": slot},
                hint="Declare a Task que produz este valor como pré-requisito.",
            )
        return value

    def has(self, slot: str) -> bool:
        return slot in self._slots

    @property
    def environment(self) -> EnvironmentReport:
        return self._read("environment")

    def set_environment(self, report: EnvironmentReport) -> None:
        self._write_once("environment", report)

    @property
    def previous_release(self) -> PublishedModule:
        """Release anterior de referência (gravada junto com o ambiente)."""
        return self.environment.previous

    @property
    def surface(self) -> PublicSurface:
        return self._read("surface")

    def set_surface(self, surface: PublicSurface) -> None:
        self._write_once("surface", surface)

    @property
    def version(self) -> Version:
        return self._read("version")

    def set_version(self, version: Version) -> None:
        self._write_once("version", version)

    # -----------------------------
    # Caminhos derivados
    # -----------------------------
    def path(self, key: str) -> Path:
        """Resolve `paths.<key>` relativo à raiz do projeto."""
        return self.project_root / str(self.config["paths"][key])

    def source_path(self, key: str) -> Path:
        """Resolve `paths.<key>` relativo à raiz do código-fonte do módulo."""
        return self.source_root / str(self.config["paths"][key])

    @property
    def staging_dir(self) -> Path:
        return self.output_root / self.module_name / str(self.version)

    # -----------------------------
    # Artifact store
    # -----------------------------
    def set_artifact(self, key: str, value: Any) -> None:
        self._artifacts[key] = value

    def has_artifact(self, key: str) -> bool:
        return key in self._artifacts

    def get_artifact(self, key: str) -> Any:
        if key not in self._artifacts:
            raise KeyError(key)
        return self._artifacts[key]

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, task_name: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "task_name": task_name,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)
        for listener in self.listeners:
            listener(event)

    def add_warning(self, *, task_name: str, message: str) -> None:
        if task_name not in self.warnings:
            self.warnings[task_name] = []
        self.warnings[task_name].append(message)
        self.log(task_name=task_name, level="warning", message=message)


def create_build_context(
    *,
    config: Dict[str, Any],
    project_root: Path,
    run_id: str,
    created_at: Optional[datetime] = None,
) -> BuildContext:
    """
    Cria o BuildContext a partir da configuração efetiva.

    O nome do módulo vem de `module.name`; na ausência, é o nome do
    diretório do projeto.
    """
    root = Path(project_root).resolve()
    paths = config["paths"]
    module_name = (config.get("module") or {}).get("name") or root.name

    return BuildContext(
        run_id=run_id,
        created_at=created_at or datetime.now(timezone.utc),
        config=config,
        project_root=root,
        source_root=root / str(paths["source"]),
        output_root=root / str(paths["output"]),
        module_name=str(module_name),
    )
