"""OpenQASM 3 style text programs.

Export layout::

    OPENQASM 3.0;
    qubit[2] q;
    bit[2] c;

    h q[0];
    cx q[0], q[1];
    c[0] = measure q[0];
    c[1] = measure q[1];

Only H, X, Y, Z, CNOT, CZ, Rx, Ry, Rz and Measure have a mnemonic.
Gates of any other kind are left out of the export without error.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

from qcircuit.circuit import Circuit
from qcircuit.gates.kinds import Gate, GateKind

from .utils import angle_str_to_float, float_to_angle_str

HEADER = "OPENQASM 3.0;"

MNEMONICS: Dict[GateKind, str] = {
    GateKind.H: "h",
    GateKind.X: "x",
    GateKind.Y: "y",
    GateKind.Z: "z",
    GateKind.CNOT: "cx",
    GateKind.CZ: "cz",
    GateKind.RX: "rx",
    GateKind.RY: "ry",
    GateKind.RZ: "rz",
}

_QUBIT_DECL = re.compile(r"^qubit\s*\[\s*(\d+)\s*\]\s*(\w+)$")
_BIT_DECL = re.compile(r"^bit\s*\[\s*(\d+)\s*\]\s*(\w+)$")
_MEASURE = re.compile(r"^(\w+)\s*\[\s*(\d+)\s*\]\s*=\s*measure\s+(\w+)\s*\[\s*(\d+)\s*\]$")
_GATE = re.compile(r"^(\w+)\s*(?:\(([^)]*)\))?\s+(.+)$")
_OPERAND = re.compile(r"^(\w+)\s*\[\s*(\d+)\s*\]$")


def _gate_to_statement(gate: Gate) -> Optional[str]:
    operands = ", ".join(f"q[{q}]" for q in gate.qubits)

    if gate.kind is GateKind.MEASURE:
        return f"c[{gate.classical}] = measure {operands};"

    mnemonic = MNEMONICS.get(gate.kind)
    if mnemonic is None:
        return None
    if gate.params:
        angles = ", ".join(float_to_angle_str(p) for p in gate.params)
        return f"{mnemonic}({angles}) {operands};"
    return f"{mnemonic} {operands};"


def to_text_program(circuit: Circuit) -> str:
    """
    Serialize a circuit to an OpenQASM 3 style program.

    Returns
    -------
    str
        The program text, every line newline-terminated.
    """
    lines = [
        HEADER,
        f"qubit[{circuit.num_qubits}] q;",
        f"bit[{circuit.num_classical_bits}] c;",
        "",
    ]
    for gate in circuit.gates:
        statement = _gate_to_statement(gate)
        if statement is not None:
            lines.append(statement)
    return "\n".join(lines) + "\n"


def _strip_comments(text: str) -> str:
    text = re.sub(r"/\*.*?\*/", "", text, flags=re.DOTALL)
    return "\n".join(line.split("//", 1)[0] for line in text.splitlines())


def _statements(text: str) -> List[str]:
    parts = [" ".join(part.split()) for part in _strip_comments(text).split(";")]
    return [part for part in parts if part]


def _operand(text: str, register: Optional[Tuple[str, int]], what: str) -> int:
    match = _OPERAND.match(text.strip())
    if not match:
        raise ValueError(f"Invalid {what} reference: {text!r}")
    if register is None:
        raise ValueError(f"{what} reference {text!r} appears before its register declaration.")
    name, index = match.group(1), int(match.group(2))
    if name != register[0]:
        raise ValueError(f"Unknown {what} register {name!r} in {text!r}")
    return index


def parse_text_program(text: str, name: str = "circuit") -> Circuit:
    """
    Read a text program back into a Circuit.

    Understands the exported subset: the version header, one ``qubit``
    and one ``bit`` declaration, gate statements and measurement
    assignments. Gate names resolve through GateKind, so ``s``, ``swap``
    or ``ccx`` are read as well. ``include`` lines and comments are
    ignored.

    Raises
    ------
    ValueError
        On malformed statements, unknown registers or a missing qubit
        declaration.
    GateIndexOutOfRange
        If a statement addresses an index outside its register.
    """
    qreg: Optional[Tuple[str, int]] = None
    creg: Optional[Tuple[str, int]] = None
    circuit: Optional[Circuit] = None

    def ensure_circuit() -> Circuit:
        nonlocal circuit
        if circuit is None:
            if qreg is None:
                raise ValueError("Text program declares no qubit register.")
            n_bits = creg[1] if creg is not None else qreg[1]
            circuit = Circuit(qreg[1], n_bits, name=name)
        return circuit

    for stmt in _statements(text):
        if stmt.startswith("OPENQASM") or stmt.startswith("include"):
            continue

        decl = _QUBIT_DECL.match(stmt)
        if decl:
            if qreg is not None:
                raise ValueError("Only one qubit register is supported.")
            qreg = (decl.group(2), int(decl.group(1)))
            continue

        decl = _BIT_DECL.match(stmt)
        if decl:
            if creg is not None:
                raise ValueError("Only one bit register is supported.")
            if circuit is not None:
                raise ValueError("bit register must be declared before any gate.")
            creg = (decl.group(2), int(decl.group(1)))
            continue

        measure = _MEASURE.match(stmt)
        if measure:
            target = ensure_circuit()
            bit = _operand(f"{measure.group(1)}[{measure.group(2)}]", creg, "bit")
            qubit = _operand(f"{measure.group(3)}[{measure.group(4)}]", qreg, "qubit")
            target.measure(qubit, bit)
            continue

        gate = _GATE.match(stmt)
        if not gate:
            raise ValueError(f"Invalid statement: {stmt!r}")
        target = ensure_circuit()
        params = None
        if gate.group(2) is not None and gate.group(2).strip():
            params = [angle_str_to_float(p) for p in gate.group(2).split(",")]
        qubits = [_operand(op, qreg, "qubit") for op in gate.group(3).split(",")]
        target.add_gate(gate.group(1), qubits, params)

    return ensure_circuit()


__all__ = ["MNEMONICS", "to_text_program", "parse_text_program"]
