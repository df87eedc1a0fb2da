# src/atlas_buildflow/environment/probe.py
"""
Environment Probe.

Classifica a execução como CI ou local a partir de uma única variável de
ambiente e, em CI, obtém a release anterior do módulo na origem de pacotes.
"""

from __future__ import annotations

import os
from typing import Callable, Mapping, Optional

from atlas_buildflow.environment.package_source import PackageSourceClient
from atlas_buildflow.environment.types import (
    EnvironmentKind,
    EnvironmentReport,
    unpublished,
)

TRUTHY_VALUES = ("1", "true", "yes", "on")

LOCAL_BUILD_WARNING = (
    "Build local: o artefato serve apenas para verificação local e não deve ser publicado"
)


def is_ci(env: Optional[Mapping[str, str]] = None, variable: str = "CI") -> bool:
    """True quando `variable` contém um valor verdadeiro (1/true/yes/on)."""
    source = os.environ if env is None else env
    value = source.get(variable)
    if value is None:
        return False
    return value.strip().lower() in TRUTHY_VALUES


def probe_environment(
    *,
    module_name: str,
    client_factory: Optional[Callable[[], PackageSourceClient]] = None,
    env: Optional[Mapping[str, str]] = None,
    variable: str = "CI",
) -> EnvironmentReport:
    """
    Detecta o ambiente e resolve a release anterior de referência.

    Local: versão anterior 0.0.0, nenhuma consulta externa.
    CI: cria o cliente via `client_factory` e consulta `find_module`;
    módulo não publicado vira 0.0.0 com superfície vazia. Erros da origem de pacotes propagam.
    """
    if not is_ci(env, variable):
        return EnvironmentReport(kind=EnvironmentKind.LOCAL, previous=unpublished(module_name))

    if client_factory is None:
        raise ValueError("client_factory é obrigatório em ambiente de CI")

    previous = client_factory().find_module(module_name)
    if previous is None:
        previous = unpublished(module_name)
    return EnvironmentReport(kind=EnvironmentKind.CI, previous=previous)
