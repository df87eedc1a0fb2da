# src/atlas_buildflow/surface/introspector.py
"""
Surface Introspector — derivação da superfície pública de um artefato.

A superfície pública é o conjunto de nomes que o artefato de implementação
exporta deliberadamente:

    - `__all__`, quando definido (lista/tupla de strings)
    - caso contrário, as funções e classes públicas (sem `_`) definidas
      no próprio artefato

Modos:
    - isolated (padrão): importa o artefato em um interpretador novo e
      descartável (`IsolatedInterpreter`) e lê os nomes já avaliados;
      `__all__` construído dinamicamente é suportado
    - static: analisa o código com `ast`, sem executá-lo; exige `__all__`
      literal

Qualquer falha (arquivo ausente, erro de sintaxe, erro de import, entrada
não-string em `__all__`, saída ilegível do processo filho) levanta
`LoadError`. Não há fallback entre os modos.
"""

from __future__ import annotations

import ast
import json
from pathlib import Path
from typing import List, Optional

from atlas_buildflow.core.exceptions import LoadError
from atlas_buildflow.surface.isolation import IsolatedInterpreter
from atlas_buildflow.surface.types import PublicSurface

ISOLATED = "isolated"
STATIC = "static"

_MARKER = "__BUILDFLOW_SURFACE__"

_LOADER = r'''
import importlib.util
import inspect
import json
import os
import sys

path = os.path.abspath(sys.argv[1])
marker = sys.argv[2]
is_package = os.path.basename(path) == "__init__.py"
if is_package:
    package_dir = os.path.dirname(path)
    name = os.path.basename(package_dir)
    sys.path.insert(0, os.path.dirname(package_dir))
    spec = importlib.util.spec_from_file_location(
        name, path, submodule_search_locations=[package_dir]
    )
else:
    name = os.path.splitext(os.path.basename(path))[0]
    sys.path.insert(0, os.path.dirname(path))
    spec = importlib.util.spec_from_file_location(name, path)

module = importlib.util.module_from_spec(spec)
sys.modules[name] = module
spec.loader.exec_module(module)

exported = getattr(module, "__all__", None)
if exported is None:
    exported = sorted(
        n for n, v in vars(module).items()
        if not n.startswith("_")
        and (inspect.isfunction(v) or inspect.isclass(v))
        and getattr(v, "__module__", None) == name
    )
    source = "definitions"
else:
    valid = isinstance(exported, (list, tuple)) and all(isinstance(n, str) for n in exported)
    exported = list(exported) if valid else None
    source = "__all__"

print(marker + json.dumps({"source": source, "operations": exported}))
'''


def introspect_surface(artifact_path: Path, *, mode: str = ISOLATED) -> PublicSurface:
    """
    Deriva a `PublicSurface` do artefato em `artifact_path`.

    Raises:
        LoadError: Se o artefato não puder ser carregado/analisado.
        ValueError: Se `mode` não for suportado.
    """
    path = Path(artifact_path)
    if not path.is_file():
        raise LoadError(
            "Artefato de implementação não encontrado",
            details={"path": str(path)},
            hint="Verifique paths.source e paths.artifact na configuração.",
        )

    if mode == ISOLATED:
        names = _isolated_names(path)
    elif mode == STATIC:
        names = _static_names(path)
    else:
        raise ValueError(f"Unsupported surface mode: {mode!r}")

    return PublicSurface.of(names)


# ---------------------------------------------------------------------------
# Modo isolado
# ---------------------------------------------------------------------------
def _isolated_names(path: Path) -> List[str]:
    with IsolatedInterpreter() as interp:
        run = interp.run_script(_LOADER, [str(path.resolve()), _MARKER])

    if run.returncode != 0:
        raise LoadError(
            "Falha ao carregar o artefato em interpretador isolado",
            details={"path": str(path), "returncode": run.returncode, "stderr": _tail(run.stderr)},
            hint="Corrija o erro de import do módulo e execute o build novamente.",
        )

    line = _marker_line(run.stdout)
    if line is None:
        raise LoadError(
            "Saída do interpretador isolado não contém a superfície",
            details={"path": str(path), "stdout": _tail(run.stdout)},
        )

    try:
        data = json.loads(line[len(_MARKER):])
    except ValueError as e:
        raise LoadError(
            "Saída do interpretador isolado não é JSON válido",
            details={"path": str(path)},
        ) from e

    return _validated(path, data.get("operations"))


def _marker_line(stdout: str) -> Optional[str]:
    for line in reversed(stdout.splitlines()):
        if line.startswith(_MARKER):
            return line
    return None


def _tail(text: str, lines: int = 20) -> str:
    return "\n".join((text or "").strip().splitlines()[-lines:])


# ---------------------------------------------------------------------------
# Modo estático
# ---------------------------------------------------------------------------
def _static_names(path: Path) -> List[str]:
    try:
        tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    except SyntaxError as e:
        raise LoadError(
            "Erro de sintaxe no artefato de implementação",
            details={"path": str(path), "line": e.lineno, "error": e.msg},
        ) from e

    for node in tree.body:
        value = None
        if isinstance(node, ast.Assign):
            if any(isinstance(t, ast.Name) and t.id == "__all__" for t in node.targets):
                value = node.value
        elif isinstance(node, ast.AnnAssign):
            if isinstance(node.target, ast.Name) and node.target.id == "__all__":
                value = node.value
        if value is None:
            continue

        if not isinstance(value, (ast.List, ast.Tuple)):
            raise LoadError(
                "__all__ não é uma lista literal; use o modo isolated",
                details={"path": str(path), "line": node.lineno},
            )
        # entradas não literais viram None e são rejeitadas em _validated
        names = [elt.value if isinstance(elt, ast.Constant) else None for elt in value.elts]
        return _validated(path, names)

    return sorted(
        node.name
        for node in tree.body
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef))
        and not node.name.startswith("_")
    )


def _validated(path: Path, names: object) -> List[str]:
    if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
        raise LoadError(
            "__all__ contém entradas que não são strings",
            details={"path": str(path)},
        )
    return list(names)
