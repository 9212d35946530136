"""Circuit builder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import torch

from qcircuit.config import check_qubit_count
from qcircuit.core.device import Device, resolve_device
from qcircuit.errors import GateIndexOutOfRange
from qcircuit.gates.kinds import Gate, GateKind

from .execution import CircuitResult, ExecutionContext, execute


@dataclass(frozen=True)
class CircuitStats:
    """Summary counts for a circuit."""

    qubits: int
    depth: int
    gate_count: int
    gates_by_kind: Dict[str, int]


class Circuit:
    """
    An ordered, append-only list of gates over fixed quantum and
    classical registers.

    Every gate-adding method returns the circuit itself, so construction
    chains:

    >>> Circuit(2).h(0).cnot(0, 1).measure_all().num_gates()
    4

    The circuit also keeps its own ExecutionContext (``context``). Plain
    ``execute()`` calls ignore it and start from |0...0⟩ each time; pass
    ``context=circuit.context`` to accumulate on it instead.
    """

    def __init__(
        self,
        num_qubits: int,
        num_classical_bits: Optional[int] = None,
        name: str = "circuit",
        device: Device | torch.device | str | None = None,
    ) -> None:
        """Initialize a Circuit.

        A classical register size of None or 0 means one bit per qubit.

        Raises:
            ValueError: If num_qubits < 1 or num_classical_bits < 0.
            QubitLimitExceeded: If num_qubits is above the configured ceiling.
        """
        if int(num_qubits) <= 0:
            raise ValueError("Circuit requires num_qubits >= 1.")
        check_qubit_count(int(num_qubits))

        self._num_qubits = int(num_qubits)
        self._num_classical_bits = int(num_classical_bits or self._num_qubits)
        if self._num_classical_bits < 0:
            raise ValueError("Circuit requires num_classical_bits >= 0.")
        self.name = name
        self._device = resolve_device(device)
        self._gates: List[Gate] = []
        self._context = ExecutionContext(
            self._num_qubits, self._num_classical_bits, device=self._device
        )

    @property
    def num_qubits(self) -> int:
        return self._num_qubits

    @property
    def num_classical_bits(self) -> int:
        return self._num_classical_bits

    @property
    def device(self) -> Device:
        return self._device

    @property
    def gates(self) -> Tuple[Gate, ...]:
        """Return a read-only tuple of all gates."""
        return tuple(self._gates)

    @property
    def context(self) -> ExecutionContext:
        """The circuit's own execution context."""
        return self._context

    def new_context(self) -> ExecutionContext:
        """Create a fresh context sized for this circuit."""
        return ExecutionContext(
            self._num_qubits, self._num_classical_bits, device=self._device
        )

    def reset(self) -> None:
        """Clear the gate list and return the circuit's context to |0...0⟩."""
        self._gates.clear()
        self._context.reset()

    def _check_qubit(self, q: int) -> None:
        if q < 0 or q >= self._num_qubits:
            raise GateIndexOutOfRange("qubit", q, self._num_qubits)

    def _check_classical(self, c: int) -> None:
        if c < 0 or c >= self._num_classical_bits:
            raise GateIndexOutOfRange("classical bit", c, self._num_classical_bits)

    def add_gate(
        self,
        kind: GateKind | str,
        qubits: Sequence[int],
        params: Optional[Sequence[float]] = None,
        classical: Optional[int] = None,
    ) -> "Circuit":
        """
        Append a gate to the circuit.

        Parameters
        ----------
        kind:
            A GateKind or its name ("H", "cx", "Rz", ...).
        qubits:
            Target qubit indices (0-based).
        params:
            Rotation angles in radians, for parametric kinds.
        classical:
            Classical bit index, for Measure only.

        Raises
        ------
        GateIndexOutOfRange
            If a qubit or classical index is outside its register. The
            gate list is left unchanged.
        UnsupportedGateKind
            If ``kind`` names no known gate.
        """
        gate = Gate.create(kind, qubits, params, classical)
        for q in gate.qubits:
            self._check_qubit(q)
        if gate.classical is not None:
            self._check_classical(gate.classical)

        self._gates.append(gate)
        return self

    def h(self, qubit: int) -> "Circuit":
        return self.add_gate(GateKind.H, [qubit])

    def x(self, qubit: int) -> "Circuit":
        return self.add_gate(GateKind.X, [qubit])

    def y(self, qubit: int) -> "Circuit":
        return self.add_gate(GateKind.Y, [qubit])

    def z(self, qubit: int) -> "Circuit":
        return self.add_gate(GateKind.Z, [qubit])

    def s(self, qubit: int) -> "Circuit":
        return self.add_gate(GateKind.S, [qubit])

    def t(self, qubit: int) -> "Circuit":
        return self.add_gate(GateKind.T, [qubit])

    def sdg(self, qubit: int) -> "Circuit":
        return self.add_gate(GateKind.SDG, [qubit])

    def tdg(self, qubit: int) -> "Circuit":
        return self.add_gate(GateKind.TDG, [qubit])

    def rx(self, qubit: int, theta: float) -> "Circuit":
        return self.add_gate(GateKind.RX, [qubit], [theta])

    def ry(self, qubit: int, theta: float) -> "Circuit":
        return self.add_gate(GateKind.RY, [qubit], [theta])

    def rz(self, qubit: int, theta: float) -> "Circuit":
        return self.add_gate(GateKind.RZ, [qubit], [theta])

    def u1(self, qubit: int, lam: float) -> "Circuit":
        return self.add_gate(GateKind.U1, [qubit], [lam])

    def u2(self, qubit: int, phi: float, lam: float) -> "Circuit":
        return self.add_gate(GateKind.U2, [qubit], [phi, lam])

    def u3(self, qubit: int, theta: float, phi: float, lam: float) -> "Circuit":
        return self.add_gate(GateKind.U3, [qubit], [theta, phi, lam])

    def u(self, qubit: int, theta: float, phi: float, lam: float) -> "Circuit":
        return self.add_gate(GateKind.U, [qubit], [theta, phi, lam])

    def cnot(self, control: int, target: int) -> "Circuit":
        return self.add_gate(GateKind.CNOT, [control, target])

    cx = cnot

    def cz(self, control: int, target: int) -> "Circuit":
        """Append a CZ gate. Executes as a controlled bit flip, like CNOT."""
        return self.add_gate(GateKind.CZ, [control, target])

    def swap(self, qubit1: int, qubit2: int) -> "Circuit":
        """Append a SWAP gate. Executes as a controlled bit flip from qubit1 onto qubit2."""
        return self.add_gate(GateKind.SWAP, [qubit1, qubit2])

    def toffoli(self, control1: int, control2: int, target: int) -> "Circuit":
        return self.add_gate(GateKind.TOFFOLI, [control1, control2, target])

    def fredkin(self, control: int, qubit1: int, qubit2: int) -> "Circuit":
        """Append a Fredkin gate. Executes as a Toffoli flip of qubit2."""
        return self.add_gate(GateKind.FREDKIN, [control, qubit1, qubit2])

    def measure(self, qubit: int, classical: Optional[int] = None) -> "Circuit":
        """Measure ``qubit`` into ``classical`` (defaults to the same index)."""
        if classical is None:
            classical = qubit
        return self.add_gate(GateKind.MEASURE, [qubit], classical=classical)

    def measure_all(self) -> "Circuit":
        """Measure every qubit into the classical bit of the same index."""
        if self._num_classical_bits < self._num_qubits:
            raise GateIndexOutOfRange(
                "classical bit", self._num_qubits - 1, self._num_classical_bits
            )
        for q in range(self._num_qubits):
            self.measure(q, q)
        return self

    def copy(self) -> "Circuit":
        """Return a copy with the same registers and gates and a fresh context."""
        new = Circuit(
            self._num_qubits,
            self._num_classical_bits,
            name=self.name,
            device=self._device,
        )
        new._gates.extend(self._gates)
        return new

    def __len__(self) -> int:
        return len(self._gates)

    def __repr__(self) -> str:
        return (
            f"Circuit(name={self.name!r}, num_qubits={self._num_qubits}, "
            f"num_classical_bits={self._num_classical_bits}, gates={len(self._gates)})"
        )

    def num_gates(self) -> int:
        return len(self._gates)

    def gate_counts(self) -> Dict[str, int]:
        """Return a dictionary mapping gate kind names to their counts."""
        counts: Dict[str, int] = {}
        for gate in self._gates:
            key = gate.kind.value
            counts[key] = counts.get(key, 0) + 1
        return counts

    def depth(self) -> int:
        """Circuit depth, counted as one step per gate (the gate count)."""
        return len(self._gates)

    def layered_depth(self) -> int:
        """
        Number of sequential layers when gates on disjoint qubits run in
        parallel. Measurements occupy a layer on their qubit like any gate.
        """
        if not self._gates:
            return 0

        qubit_layer = [0] * self._num_qubits
        max_layer = 0

        for gate in self._gates:
            layer = max(qubit_layer[q] for q in gate.qubits) + 1
            for q in gate.qubits:
                qubit_layer[q] = layer
            max_layer = max(max_layer, layer)

        return max_layer

    def stats(self) -> CircuitStats:
        return CircuitStats(
            qubits=self._num_qubits,
            depth=self.depth(),
            gate_count=len(self._gates),
            gates_by_kind=self.gate_counts(),
        )

    def execute(
        self,
        shots: int = 1024,
        *,
        context: Optional[ExecutionContext] = None,
        generator: Optional[torch.Generator] = None,
    ) -> CircuitResult:
        """Run the circuit; see :func:`qcircuit.circuit.execution.execute`."""
        return execute(self, shots, context=context, generator=generator)

    def to_text_program(self) -> str:
        """Serialize to the OpenQASM 3 style text program."""
        from qcircuit.io.text_program import to_text_program

        return to_text_program(self)

    def to_text_diagram(self) -> str:
        """
        Return a simple ASCII diagram of the circuit.

        One wire per qubit, one column per gate. Controls are drawn as
        '●', bit-flip targets as '⊕', measurements as 'M'; other gates
        show the first letter of their name.
        """
        wire_segments: List[List[str]] = [[] for _ in range(self._num_qubits)]

        for gate in self._gates:
            for q in range(self._num_qubits):
                wire_segments[q].append("───")

            if gate.is_measurement:
                wire_segments[gate.qubits[0]][-1] = "─M─"
            elif gate.kind.num_qubits == 1:
                wire_segments[gate.qubits[0]][-1] = f"─{gate.kind.value[0]}─"
            elif gate.kind in (GateKind.CNOT, GateKind.TOFFOLI):
                *controls, target = gate.qubits
                for c in controls:
                    wire_segments[c][-1] = "─●─"
                wire_segments[target][-1] = "─⊕─"
            else:
                for q in gate.qubits:
                    wire_segments[q][-1] = "─#─"

        lines = [
            f"q{q}: " + "".join(wire_segments[q]) for q in range(self._num_qubits)
        ]
        return "\n".join(lines)
