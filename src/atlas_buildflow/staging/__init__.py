# src/atlas_buildflow/staging/__init__.py
from .files import clean_output, stage_module_files

__all__ = ["clean_output", "stage_module_files"]
