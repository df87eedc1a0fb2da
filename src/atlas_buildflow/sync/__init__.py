# src/atlas_buildflow/sync/__init__.py
"""
Manifest Synchronizer.

Mantém os dois artefatos de metadados do módulo consistentes com a versão
calculada: o manifest primário (YAML/JSON, versão + operações exportadas) e
a package spec secundária (XML, apenas versão). As duas escritas são
independentes; não há rollback entre arquivos.
"""

from .module_manifest import ManifestRecord, read_module_manifest, update_module_manifest
from .package_spec import read_package_spec_version, update_package_spec

__all__ = [
    "ManifestRecord",
    "read_module_manifest",
    "read_package_spec_version",
    "update_module_manifest",
    "update_package_spec",
]
