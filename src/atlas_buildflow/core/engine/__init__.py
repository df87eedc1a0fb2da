# src/atlas_buildflow/core/engine/__init__.py
from .engine import Engine, RunResult
from .planner import plan_execution, validate_graph

__all__ = ["Engine", "RunResult", "plan_execution", "validate_graph"]
