"""Circuit builder and executor."""

from .core import Circuit, CircuitStats
from .execution import CircuitResult, ExecutionContext, execute

__all__ = ["Circuit", "CircuitStats", "CircuitResult", "ExecutionContext", "execute"]
