# src/atlas_buildflow/core/config/defaults.py
"""
Configuração padrão (defaults) embutida do Atlas BuildFlow.

Os defaults são a base obrigatória sobre a qual o arquivo de projeto
(`buildflow.yaml`) é aplicado via `deep_merge`. Caminhos relativos em
`paths` são resolvidos a partir da raiz do projeto, exceto `artifact`,
`manifest` e `package_spec`, que são relativos à raiz do código-fonte do módulo.
"""

from typing import Any, Dict

PROJECT_CONFIG_FILENAMES = ("buildflow.yaml", "buildflow.yml", "buildflow.json")

SURFACE_DIFF_MODES = ("set", "count")
SURFACE_MODES = ("isolated", "static")

DEFAULT_CONFIG: Dict[str, Any] = {
    "module": {
        # None -> nome do diretório do projeto
        "name": None,
    },
    "paths": {
        "source": "src",
        "output": "build",
        "tests": "tests",
        "artifact": "__init__.py",
        "manifest": "module.yaml",
        "package_spec": "package.xml",
    },
    "environment": {
        "ci_variable": "CI",
    },
    "registry": {
        "index_url": "https://pypi.org/pypi",
        "token_variable": "BUILDFLOW_REGISTRY_TOKEN",
        "timeout_seconds": 30.0,
    },
    "versioning": {
        "surface_diff": "set",
    },
    "surface": {
        "mode": "isolated",
    },
    "manifest": {
        "version_field": "version",
        "exports_field": "exported_operations",
    },
    "gates": {
        "lint": {"max_violations": 0},
        "test": {"max_failures": 0},
        "coverage": {"min_percent": 80.0},
    },
    "staging": {
        "exclude": [
            "test_*.py",
            "*_test.py",
            "conftest.py",
            "tests",
            "__pycache__",
            "*.pyc",
        ],
    },
    "record": {
        "enabled": True,
        "filename": "build-record.json",
    },
}
