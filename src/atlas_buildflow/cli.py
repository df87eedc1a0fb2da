# src/atlas_buildflow/cli.py
"""
CLI do Atlas BuildFlow.

    buildflow [TASK] [--project-root DIR] [--config FILE] [--list]

Executa a Task raiz solicitada (padrão: `default`) sobre o projeto em
`--project-root`. TASK deve ser uma das Tasks raiz de `tasks.graph.ROOT_TASKS`
(default, build, clean-build, analyze, test, code-coverage, clean). Sai com
0 em sucesso e 1 em qualquer falha, inclusive erros de configuração.
"""

from __future__ import annotations

import json
import sys
import uuid
from pathlib import Path
from typing import Any, Dict, Optional

import click

from atlas_buildflow import __version__
from atlas_buildflow.core.config.hashing import compute_config_hash
from atlas_buildflow.core.config.loader import load_config
from atlas_buildflow.core.engine.engine import Engine
from atlas_buildflow.core.exceptions import BuildflowError, UnknownTaskError
from atlas_buildflow.core.pipeline.context import BuildContext, create_build_context
from atlas_buildflow.core.traceability.record import (
    BuildRecord,
    create_build_record,
    save_build_record,
    set_input,
)
from atlas_buildflow.tasks.graph import DEFAULT_ROOT, ROOT_TASKS, build_task_registry

_LEVEL_STYLE = {
    "warning": {"fg": "yellow"},
    "error": {"fg": "red", "bold": True},
}


def _echo_event(event: Dict[str, Any]) -> None:
    level = str(event.get("level", "info"))
    line = f"[{event.get('task_name')}] {event.get('message')}"
    style = _LEVEL_STYLE.get(level)
    if style:
        click.secho(line, err=level == "error", **style)
    else:
        click.echo(line)


def _print_failure(task: Optional[str], error: Dict[str, Any]) -> None:
    click.secho(f"✗ Build failed at task '{task}'", fg="red", bold=True, err=True)
    click.echo(f"  {error.get('type')}: {error.get('message')}", err=True)
    details = error.get("details") or {}
    if details:
        click.echo("  details:", err=True)
        for line in json.dumps(details, ensure_ascii=False, indent=2, default=str).splitlines():
            click.echo(f"    {line}", err=True)
    if error.get("hint"):
        click.echo(f"  hint: {error['hint']}", err=True)


def _error_dict(exc: BuildflowError) -> Dict[str, Any]:
    return {"type": exc.__class__.__name__, "message": exc.message, "details": exc.details, "hint": exc.hint}


def _record_inputs(record: BuildRecord, ctx: BuildContext) -> None:
    if ctx.has("environment"):
        set_input(record, "environment", ctx.environment.kind.value)
        set_input(record, "previous_version", str(ctx.previous_release.version))
    if ctx.has("version"):
        set_input(record, "version", str(ctx.version))


@click.command()
@click.argument("task", default=DEFAULT_ROOT)
@click.option(
    "--project-root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Raiz do projeto do módulo.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Arquivo de configuração (YAML/JSON); padrão: buildflow.yaml na raiz.",
)
@click.option("--list", "list_tasks", is_flag=True, help="Lista as Tasks registradas e sai.")
@click.version_option(version=__version__, prog_name="buildflow")
def main(task: str, project_root: Path, config_path: Optional[Path], list_tasks: bool) -> None:
    """Atlas BuildFlow: executa TASK (padrão: default) e suas dependências."""
    registry = build_task_registry()

    if list_tasks:
        for t in registry.list():
            deps = ", ".join(t.depends_on) if t.depends_on else "-"
            click.echo(f"{t.name:<22} {t.kind.value:<11} {deps}")
        return

    if task not in ROOT_TASKS:
        error = UnknownTaskError(
            f"Unknown task: {task}",
            details={"task": task, "available": list(ROOT_TASKS)},
            hint="Tasks intermediárias rodam apenas como pré-requisito de uma Task raiz.",
        )
        _print_failure(task, _error_dict(error))
        sys.exit(1)

    try:
        config = load_config(project_root=project_root, config_path=config_path)
    except BuildflowError as e:
        _print_failure(None, _error_dict(e))
        sys.exit(1)

    run_id = uuid.uuid4().hex
    ctx = create_build_context(config=config, project_root=project_root, run_id=run_id)
    ctx.listeners.append(_echo_event)

    record_cfg = config.get("record") or {}
    record: Optional[BuildRecord] = None
    if record_cfg.get("enabled", True):
        record = create_build_record(
            run_id=run_id,
            started_at=ctx.created_at,
            buildflow_version=__version__,
            root_task=task,
            config_hash=compute_config_hash(config),
        )

    engine = Engine(tasks=registry.list(), ctx=ctx, record=record)
    try:
        result = engine.run(task)
    except BuildflowError as e:
        _print_failure(task, _error_dict(e))
        sys.exit(1)

    # clean termina sem recriar a raiz de saída
    if record is not None and result.executed[-1:] != ["clean"]:
        _record_inputs(record, ctx)
        path = ctx.output_root / str(record_cfg.get("filename") or "build-record.json")
        save_build_record(record, path)

    if not result.ok:
        _print_failure(result.failed_task, result.error.to_dict() if result.error else {})
        sys.exit(1)

    version = f" {ctx.version}" if ctx.has("version") else ""
    click.secho(f"✓ {task}{version} completed ({len(result.tasks)} task(s))", fg="green")


if __name__ == "__main__":
    main()
