# src/atlas_buildflow/surface/isolation.py
"""
Fronteira de isolamento para introspecção de artefatos.

O `IsolatedInterpreter` executa código em um interpretador Python novo
(`sys.executable -I`), com diretório de trabalho temporário e descartável.
O processo do orquestrador nunca importa o artefato: `sys.modules` e
`sys.path` do build permanecem intactos.

Invariantes:
    - O diretório temporário é removido em todos os caminhos de saída,
      inclusive quando o processo filho falha
    - O processo filho termina antes da saída do contexto
    - O processo filho não grava bytecode (`-B`): nenhum `__pycache__` surge
      ao lado do artefato introspectado
"""

from __future__ import annotations

import subprocess
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence


@dataclass(frozen=True)
class ChildRun:
    returncode: int
    stdout: str
    stderr: str


class IsolatedInterpreter:
    """
    Contexto de execução isolado.

    Uso:
        with IsolatedInterpreter() as interp:
            run = interp.run_script(code, ["arg"])
    """

    def __init__(self, *, python: Optional[str] = None):
        self.python = python or sys.executable
        self._tmp: Optional[tempfile.TemporaryDirectory] = None

    @property
    def workdir(self) -> Path:
        if self._tmp is None:
            raise RuntimeError("IsolatedInterpreter não está ativo")
        return Path(self._tmp.name)

    def __enter__(self) -> "IsolatedInterpreter":
        self._tmp = tempfile.TemporaryDirectory(prefix="buildflow-isolated-")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        tmp, self._tmp = self._tmp, None
        if tmp is not None:
            tmp.cleanup()

    def run_script(self, code: str, args: Sequence[str] = ()) -> ChildRun:
        """Grava `code` no diretório temporário e o executa no interpretador isolado."""
        script = self.workdir / "loader.py"
        script.write_text(code, encoding="utf-8")

        cmd: List[str] = [self.python, "-I", "-B", str(script), *[str(a) for a in args]]
        proc = subprocess.run(
            cmd,
            cwd=str(self.workdir),
            capture_output=True,
            text=True,
        )
        return ChildRun(returncode=proc.returncode, stdout=proc.stdout, stderr=proc.stderr)
