"""Exception types raised by qcircuit.

Each concrete error also derives from the builtin exception a caller
would naturally catch for it, so ``except ValueError`` keeps working.
"""

from __future__ import annotations


class QCircuitError(Exception):
    """Base class for all qcircuit errors."""


class GateIndexOutOfRange(QCircuitError, IndexError):
    """A qubit or classical-bit index lies outside its declared register."""

    def __init__(self, register: str, index: int, size: int) -> None:
        self.register = register
        self.index = index
        self.size = size
        super().__init__(
            f"{register} index {index} is out of range for a register of size {size}."
        )


class InvalidShotCount(QCircuitError, ValueError):
    """A non-positive (or non-integer) number of shots was requested."""

    def __init__(self, shots: object) -> None:
        self.shots = shots
        super().__init__(f"shots must be a positive integer, got {shots!r}.")


class UnsupportedGateKind(QCircuitError, ValueError):
    """A gate kind is unknown, or has no matrix for the requested operation."""


class QubitLimitExceeded(QCircuitError, ValueError):
    """A register wider than the configured qubit ceiling was requested."""

    def __init__(self, n_qubits: int, limit: int) -> None:
        self.n_qubits = n_qubits
        self.limit = limit
        super().__init__(
            f"{n_qubits} qubits exceeds the configured ceiling of {limit} "
            "(set QCIRCUIT_MAX_QUBITS or call qcircuit.config.set_max_qubits to raise it)."
        )


__all__ = [
    "QCircuitError",
    "GateIndexOutOfRange",
    "InvalidShotCount",
    "UnsupportedGateKind",
    "QubitLimitExceeded",
]
