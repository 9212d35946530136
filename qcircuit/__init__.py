"""qcircuit - a small PyTorch state-vector quantum circuit simulator."""

__version__ = "0.1.0"

from .backend import (
    apply_controlled_flip,
    apply_gate,
    apply_operation,
    measure_probs,
    zero_state,
)
from .circuit import Circuit, CircuitResult, CircuitStats, ExecutionContext, execute
from .config import get_max_qubits, max_qubits_context, set_max_qubits
from .core import Device, default_device, device
from .diagnostics import debug_context, is_debug_enabled, set_debug_enabled
from .errors import (
    GateIndexOutOfRange,
    InvalidShotCount,
    QCircuitError,
    QubitLimitExceeded,
    UnsupportedGateKind,
)
from .gates import Gate, GateKind, gate_matrix, is_unitary
from .io import parse_text_program, to_text_program
from .logging import configure_logging, get_logger, set_log_level
from .presets import bell_state, ghz_state, grover_iteration, qft, vqe_ansatz

__all__ = [
    "__version__",
    # Circuits
    "Circuit",
    "CircuitResult",
    "CircuitStats",
    "ExecutionContext",
    "execute",
    # Gates
    "Gate",
    "GateKind",
    "gate_matrix",
    "is_unitary",
    # Backend
    "zero_state",
    "apply_gate",
    "apply_controlled_flip",
    "apply_operation",
    "measure_probs",
    # Text programs
    "to_text_program",
    "parse_text_program",
    # Presets
    "bell_state",
    "ghz_state",
    "qft",
    "grover_iteration",
    "vqe_ansatz",
    # Errors
    "QCircuitError",
    "GateIndexOutOfRange",
    "InvalidShotCount",
    "UnsupportedGateKind",
    "QubitLimitExceeded",
    # Configuration
    "Device",
    "device",
    "default_device",
    "get_max_qubits",
    "set_max_qubits",
    "max_qubits_context",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    "get_logger",
    "set_log_level",
    "configure_logging",
]
