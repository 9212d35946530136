"""Gate kinds and single-qubit gate matrices."""

from .kinds import Gate, GateKind
from .standard import (
    RX,
    RY,
    RZ,
    SDG,
    TDG,
    U1,
    U2,
    U3,
    H,
    S,
    T,
    X,
    Y,
    Z,
    gate_matrix,
    is_unitary,
)

__all__ = [
    "Gate",
    "GateKind",
    "H",
    "X",
    "Y",
    "Z",
    "S",
    "T",
    "SDG",
    "TDG",
    "RX",
    "RY",
    "RZ",
    "U1",
    "U2",
    "U3",
    "gate_matrix",
    "is_unitary",
]
