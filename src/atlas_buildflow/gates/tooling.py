# src/atlas_buildflow/gates/tooling.py
"""
Invocação de ferramentas externas dos quality gates.

Ferramentas (ruff, pytest, coverage) são chamadas como módulos do mesmo
interpretador do build (`sys.executable -m <tool>`), sempre com argumentos
explícitos. Não há timeout: uma ferramenta travada bloqueia o build.
"""

from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence

from atlas_buildflow.core.errors import quality_gate_failure, tool_invocation_error
from atlas_buildflow.core.exceptions import QualityGateFailure, ToolInvocationError


@dataclass(frozen=True)
class ToolRun:
    """Resultado bruto de uma invocação de ferramenta."""

    tool: str
    args: List[str]
    returncode: int
    stdout: str
    stderr: str


ToolRunner = Callable[..., ToolRun]


def run_tool(tool: str, args: Sequence[str], *, cwd: Optional[Path] = None) -> ToolRun:
    """
    Executa `python -m <tool> <args>` e captura a saída.

    Raises:
        ToolInvocationError: Interpretador ausente ou módulo da ferramenta
            não instalado.
    """
    cmd = [sys.executable, "-m", tool, *[str(a) for a in args]]
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd is not None else None,
            capture_output=True,
            text=True,
        )
    except OSError as e:
        raise tool_error(tool, stderr=str(e)) from e

    if proc.returncode != 0 and f"No module named {tool}" in (proc.stderr or ""):
        raise tool_error(
            tool,
            returncode=proc.returncode,
            stderr=proc.stderr,
            hint=f"Instale '{tool}' no ambiente do build (pip install atlas-buildflow[gates]).",
        )

    return ToolRun(
        tool=tool,
        args=list(cmd[3:]),
        returncode=proc.returncode,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
    )


def tool_error(
    tool: str,
    *,
    returncode: Optional[int] = None,
    stderr: Optional[str] = None,
    hint: Optional[str] = None,
) -> ToolInvocationError:
    kwargs = {"hint": hint} if hint else {}
    payload = tool_invocation_error(
        tool=tool,
        returncode=returncode,
        stderr=_tail(stderr),
        **kwargs,
    )
    return ToolInvocationError(payload.message, details=payload.details, hint=payload.hint)


def _tail(text: Optional[str], lines: int = 20) -> Optional[str]:
    if not text:
        return text
    return "\n".join(text.strip().splitlines()[-lines:])


def gate_failure(
    gate: str,
    *,
    threshold: Any,
    actual: Any,
    offending: Optional[List[Any]] = None,
    report: Optional[Path] = None,
) -> QualityGateFailure:
    payload = quality_gate_failure(gate=gate, threshold=threshold, actual=actual, offending=offending)
    details = dict(payload.details)
    if report is not None:
        details["report"] = str(report)
    return QualityGateFailure(
        f"{payload.message}: {actual} (limiar {threshold})",
        details=details,
        hint=payload.hint,
    )
