"""State-vector backend operations."""

from .statevector import (
    apply_controlled_flip,
    apply_gate,
    apply_operation,
    measure_probs,
    zero_state,
)

__all__ = [
    "zero_state",
    "apply_gate",
    "apply_controlled_flip",
    "apply_operation",
    "measure_probs",
]
