"""Gate kinds and the structural gate record."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Sequence, Tuple

from qcircuit.errors import UnsupportedGateKind


class GateKind(str, Enum):
    """Every gate a circuit can hold.

    The values are the names used as keys in gate statistics.
    """

    H = "H"
    X = "X"
    Y = "Y"
    Z = "Z"
    S = "S"
    T = "T"
    SDG = "Sdg"
    TDG = "Tdg"
    CNOT = "CNOT"
    CZ = "CZ"
    SWAP = "SWAP"
    TOFFOLI = "Toffoli"
    FREDKIN = "Fredkin"
    RX = "Rx"
    RY = "Ry"
    RZ = "Rz"
    U = "U"
    U1 = "U1"
    U2 = "U2"
    U3 = "U3"
    MEASURE = "Measure"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, name: "GateKind | str") -> "GateKind":
        """
        Resolve a kind from its name, case-insensitively.

        ``cx`` is accepted for CNOT, ``ccx`` for Toffoli and ``cswap``
        for Fredkin.

        Raises
        ------
        UnsupportedGateKind
            If the name matches no kind.
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip().upper()
        kind = _BY_NAME.get(key)
        if kind is None:
            raise UnsupportedGateKind(
                f"Unsupported gate kind {name!r}. "
                f"Supported kinds: {', '.join(k.value for k in cls)}."
            )
        return kind

    @property
    def num_qubits(self) -> int:
        """Number of qubits the kind acts on."""
        return _SIGNATURES[self][0]

    @property
    def num_params(self) -> int:
        """Number of rotation angles the kind takes."""
        return _SIGNATURES[self][1]


# kind -> (qubit count, parameter count)
_SIGNATURES: Dict[GateKind, Tuple[int, int]] = {
    GateKind.H: (1, 0),
    GateKind.X: (1, 0),
    GateKind.Y: (1, 0),
    GateKind.Z: (1, 0),
    GateKind.S: (1, 0),
    GateKind.T: (1, 0),
    GateKind.SDG: (1, 0),
    GateKind.TDG: (1, 0),
    GateKind.CNOT: (2, 0),
    GateKind.CZ: (2, 0),
    GateKind.SWAP: (2, 0),
    GateKind.TOFFOLI: (3, 0),
    GateKind.FREDKIN: (3, 0),
    GateKind.RX: (1, 1),
    GateKind.RY: (1, 1),
    GateKind.RZ: (1, 1),
    GateKind.U: (1, 3),
    GateKind.U1: (1, 1),
    GateKind.U2: (1, 2),
    GateKind.U3: (1, 3),
    GateKind.MEASURE: (1, 0),
}

_BY_NAME: Dict[str, GateKind] = {kind.value.upper(): kind for kind in GateKind}
_BY_NAME.update({"CX": GateKind.CNOT, "CCX": GateKind.TOFFOLI, "CSWAP": GateKind.FREDKIN})


@dataclass(frozen=True)
class Gate:
    """
    A single gate application in a circuit.

    Purely structural: which kind is applied to which qubits with which
    angles. Register bounds are checked by the owning circuit, not here.

    Attributes
    ----------
    kind:
        The gate kind.
    qubits:
        Target qubit indices (0-based). Two-qubit kinds are
        ``(control, target)``; three-qubit kinds ``(c1, c2, target)``.
    params:
        Rotation angles in radians, or None for fixed gates.
    classical:
        Classical bit receiving the outcome; set for Measure only.
    """

    kind: GateKind
    qubits: Tuple[int, ...]
    params: Optional[Tuple[float, ...]] = None
    classical: Optional[int] = None

    def __post_init__(self) -> None:
        n_qubits, n_params = _SIGNATURES[self.kind]
        if len(self.qubits) != n_qubits:
            raise ValueError(
                f"Gate {self.kind.value} expects {n_qubits} qubit(s), "
                f"received {len(self.qubits)}."
            )
        if len(set(self.qubits)) != len(self.qubits):
            raise ValueError(
                f"Gate {self.kind.value} qubits must be distinct, got {self.qubits}."
            )
        received = len(self.params) if self.params else 0
        if received != n_params:
            raise ValueError(
                f"Gate {self.kind.value} requires {n_params} parameter(s), got {received}."
            )
        if self.params and not all(math.isfinite(p) for p in self.params):
            raise ValueError(
                f"Gate {self.kind.value} parameters must be finite, got {self.params}."
            )
        if self.kind is GateKind.MEASURE:
            if self.classical is None:
                raise ValueError("Measure gates require a classical target bit.")
        elif self.classical is not None:
            raise ValueError(
                f"Only Measure gates take a classical target, not {self.kind.value}."
            )

    @classmethod
    def create(
        cls,
        kind: GateKind | str,
        qubits: Sequence[int],
        params: Optional[Sequence[float]] = None,
        classical: Optional[int] = None,
    ) -> "Gate":
        """Build a gate from loosely typed arguments."""
        p_tuple: Optional[Tuple[float, ...]]
        if params is None or len(params) == 0:
            p_tuple = None
        else:
            p_tuple = tuple(float(p) for p in params)
        return cls(
            kind=GateKind.parse(kind),
            qubits=tuple(int(q) for q in qubits),
            params=p_tuple,
            classical=None if classical is None else int(classical),
        )

    @property
    def is_measurement(self) -> bool:
        return self.kind is GateKind.MEASURE

    def describe(self) -> str:
        targets = ",".join(f"q{q}" for q in self.qubits)
        if self.is_measurement:
            return f"Measure {targets}->c{self.classical}"
        if self.params:
            angles = ",".join(f"{p:.4g}" for p in self.params)
            return f"{self.kind.value}({angles}) {targets}"
        return f"{self.kind.value} {targets}"

    def __str__(self) -> str:  # pragma: no cover - convenience wrapper
        return self.describe()


__all__ = ["GateKind", "Gate"]
