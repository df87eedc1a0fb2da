# src/atlas_buildflow/surface/__init__.py
from .introspector import ISOLATED, STATIC, introspect_surface
from .isolation import IsolatedInterpreter
from .types import EMPTY_SURFACE, PublicSurface

__all__ = [
    "EMPTY_SURFACE",
    "ISOLATED",
    "IsolatedInterpreter",
    "PublicSurface",
    "STATIC",
    "introspect_surface",
]
