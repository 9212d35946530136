"""Tests for OpenQASM 3 style export and import."""

from __future__ import annotations

import math

import pytest

from qcircuit import Circuit, GateIndexOutOfRange, UnsupportedGateKind
from qcircuit.gates import GateKind
from qcircuit.io import MNEMONICS, parse_text_program, to_text_program
from qcircuit.io.utils import angle_str_to_float, float_to_angle_str
from qcircuit.presets import bell_state, ghz_state, qft

BELL_PROGRAM = (
    "OPENQASM 3.0;\n"
    "qubit[2] q;\n"
    "bit[2] c;\n"
    "\n"
    "h q[0];\n"
    "cx q[0], q[1];\n"
    "c[0] = measure q[0];\n"
    "c[1] = measure q[1];\n"
)


def test_bell_export_exact() -> None:
    assert to_text_program(bell_state()) == BELL_PROGRAM
    assert bell_state().to_text_program() == BELL_PROGRAM


def test_empty_circuit_export() -> None:
    assert to_text_program(Circuit(3, 1)) == "OPENQASM 3.0;\nqubit[3] q;\nbit[1] c;\n\n"


def test_rotations_export_with_angles() -> None:
    circuit = Circuit(1).rx(0, math.pi / 2).ry(0, -math.pi / 4).rz(0, 0.3)
    lines = to_text_program(circuit).splitlines()[4:]
    assert lines == ["rx(pi/2) q[0];", "ry(-pi/4) q[0];", "rz(0.3) q[0];"]


def test_kinds_without_mnemonic_are_omitted() -> None:
    circuit = (
        Circuit(3)
        .s(0)
        .t(1)
        .swap(0, 1)
        .toffoli(0, 1, 2)
        .fredkin(0, 1, 2)
        .u3(0, 0.1, 0.2, 0.3)
        .cz(1, 2)
    )
    body = to_text_program(circuit).splitlines()[4:]
    assert body == ["cz q[1], q[2];"]


def test_exported_statement_count_matches_supported_gates() -> None:
    circuit = qft(4)
    supported = sum(
        1
        for g in circuit.gates
        if g.kind in MNEMONICS or g.kind is GateKind.MEASURE
    )
    body = to_text_program(circuit).splitlines()[4:]
    assert len(body) == supported == len(circuit)


def test_every_line_newline_terminated() -> None:
    text = to_text_program(ghz_state(4))
    assert text.endswith(";\n")
    assert all(line for line in text.split("\n")[4:-1])


@pytest.mark.parametrize(
    "angle,expected",
    [
        (0.0, "0"),
        (math.pi, "pi"),
        (-math.pi, "-pi"),
        (math.pi / 2, "pi/2"),
        (-math.pi / 4, "-pi/4"),
        (3 * math.pi / 4, "3*pi/4"),
        (2 * math.pi, "2*pi"),
        (math.pi / 12, "pi/12"),
        (0.5, "0.5"),
    ],
)
def test_float_to_angle_str(angle, expected) -> None:
    assert float_to_angle_str(angle) == expected


@pytest.mark.parametrize(
    "text,expected",
    [
        ("pi", math.pi),
        ("-pi/2", -math.pi / 2),
        ("3*pi/4", 3 * math.pi / 4),
        ("2 * (pi - 1)", 2 * (math.pi - 1)),
        ("1.5e-3", 1.5e-3),
    ],
)
def test_angle_str_to_float(text, expected) -> None:
    assert angle_str_to_float(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", ["", "theta", "pi/0", "2**pi", "__import__('os')"])
def test_angle_str_to_float_rejects(text) -> None:
    with pytest.raises(ValueError):
        angle_str_to_float(text)


def test_parse_bell_program() -> None:
    circuit = parse_text_program(BELL_PROGRAM, name="bell")
    assert circuit.name == "bell"
    assert circuit.gates == bell_state().gates
    assert circuit.num_classical_bits == 2


@pytest.mark.parametrize("n", [1, 2, 3, 5])
def test_export_then_parse_preserves_gates(n) -> None:
    original = qft(n)
    restored = parse_text_program(to_text_program(original))
    assert restored.num_qubits == original.num_qubits
    assert restored.gates == original.gates


def test_parse_accepts_comments_includes_and_aliases() -> None:
    text = """
    OPENQASM 3.0;
    include "stdgates.inc";
    // three qubits, one bit
    qubit[3] q;
    bit[1] c;
    /* block
       comment */
    s q[0];
    swap q[0], q[1];
    ccx q[0], q[1], q[2];
    rz(pi/8) q[2];
    c[0] = measure q[2];
    """
    circuit = parse_text_program(text)
    kinds = [g.kind for g in circuit.gates]
    assert kinds == [
        GateKind.S,
        GateKind.SWAP,
        GateKind.TOFFOLI,
        GateKind.RZ,
        GateKind.MEASURE,
    ]
    assert circuit.gates[3].params == pytest.approx((math.pi / 8,))
    assert circuit.gates[4].classical == 0


def test_parse_without_bit_register_sizes_bits_to_qubits() -> None:
    circuit = parse_text_program("OPENQASM 3.0;\nqubit[2] q;\nh q[1];\n")
    assert circuit.num_classical_bits == 2


def test_parse_unknown_gate() -> None:
    with pytest.raises(UnsupportedGateKind):
        parse_text_program("qubit[1] q;\nfoo q[0];\n")


def test_parse_out_of_range_qubit() -> None:
    with pytest.raises(GateIndexOutOfRange):
        parse_text_program("qubit[2] q;\ncx q[0], q[2];\n")


def test_parse_out_of_range_bit() -> None:
    with pytest.raises(GateIndexOutOfRange):
        parse_text_program("qubit[2] q;\nbit[1] c;\nc[1] = measure q[0];\n")


@pytest.mark.parametrize(
    "text,match",
    [
        ("h q[0];", "no qubit register"),
        ("qubit[1] q;\nh r[0];", "Unknown qubit register"),
        ("qubit[1] q;\nqubit[1] r;", "Only one qubit register"),
        ("qubit[1] q;\nh q0;", "Invalid qubit reference"),
        ("qubit[1] q;\nh q[0];\nbit[1] c;", "before any gate"),
        ("", "no qubit register"),
    ],
)
def test_parse_malformed(text, match) -> None:
    with pytest.raises(ValueError, match=match):
        parse_text_program(text)


@pytest.mark.parametrize("angle", [math.inf, -math.inf, math.nan])
def test_non_finite_angle_never_reaches_export(angle) -> None:
    circuit = Circuit(1).h(0)
    with pytest.raises(ValueError, match="finite"):
        circuit.rz(0, angle)
    assert len(circuit) == 1
    assert to_text_program(circuit).splitlines()[4:] == ["h q[0];"]


def test_parse_rejects_overflowing_angle() -> None:
    with pytest.raises(ValueError, match="finite"):
        parse_text_program("qubit[1] q;\nrx(1e999) q[0];\n")
