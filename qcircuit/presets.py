"""Ready-made circuits.

Each constructor returns a fully built circuit ending in ``measure_all()``.
Several are structural sketches of the named algorithm rather than
complete implementations; the docstrings say which parts are missing.
"""

from __future__ import annotations

import math
from typing import Optional

import torch

from qcircuit.circuit import Circuit


def _require_qubits(n: int, what: str) -> int:
    n = int(n)
    if n < 1:
        raise ValueError(f"{what} requires n >= 1, got {n}.")
    return n


def bell_state() -> Circuit:
    """(|00⟩ + |11⟩)/√2: H on qubit 0, then CNOT(0 → 1)."""
    return Circuit(2, name="bell").h(0).cnot(0, 1).measure_all()


def ghz_state(n: int = 3) -> Circuit:
    """n-qubit GHZ state: H on qubit 0, then CNOT(0 → i) for every other qubit."""
    n = _require_qubits(n, "ghz_state")
    circuit = Circuit(n, name=f"ghz_{n}")
    circuit.h(0)
    for i in range(1, n):
        circuit.cnot(0, i)
    return circuit.measure_all()


def qft(n: int = 3) -> Circuit:
    """
    Quantum Fourier transform skeleton.

    For each qubit ``i``: H, then Rz(π / 2**(j - i)) on every later
    qubit ``j``. The rotations are uncontrolled, so this has the gate
    layout of a QFT without its controlled-phase coupling.
    """
    n = _require_qubits(n, "qft")
    circuit = Circuit(n, name=f"qft_{n}")
    for i in range(n):
        circuit.h(i)
        for j in range(i + 1, n):
            circuit.rz(j, math.pi / 2 ** (j - i))
    return circuit.measure_all()


def grover_iteration(n: int = 3, oracle: int = 5) -> Circuit:
    """
    One truncated Grover iteration.

    Uniform superposition, X on every qubit whose bit is set in
    ``oracle`` as the marking step, then H and X on every qubit in place
    of the diffusion operator. It does not converge on the marked state.
    """
    n = _require_qubits(n, "grover_iteration")
    oracle = int(oracle)
    if oracle < 0:
        raise ValueError(f"oracle must be non-negative, got {oracle}.")

    circuit = Circuit(n, name=f"grover_{n}")
    for i in range(n):
        circuit.h(i)
    for i in range(n):
        if (oracle >> i) & 1:
            circuit.x(i)
    for i in range(n):
        circuit.h(i)
        circuit.x(i)
    return circuit.measure_all()


def vqe_ansatz(
    n: int = 2,
    layers: int = 2,
    generator: Optional[torch.Generator] = None,
) -> Circuit:
    """
    Hardware-efficient ansatz with random angles.

    Each layer applies Ry and Rz with angles drawn uniformly from
    [0, π) to every qubit, then a CNOT chain (i → i + 1).

    Parameters
    ----------
    n:
        Number of qubits.
    layers:
        Number of rotation + entangling layers.
    generator:
        Optional torch.Generator for reproducible angles.
    """
    n = _require_qubits(n, "vqe_ansatz")
    layers = int(layers)
    if layers < 0:
        raise ValueError(f"layers must be >= 0, got {layers}.")

    circuit = Circuit(n, name=f"vqe_{n}x{layers}")
    for _ in range(layers):
        angles = torch.rand(n, 2, generator=generator, dtype=torch.float64) * math.pi
        for i in range(n):
            circuit.ry(i, float(angles[i, 0]))
            circuit.rz(i, float(angles[i, 1]))
        for i in range(n - 1):
            circuit.cnot(i, i + 1)
    return circuit.measure_all()


__all__ = ["bell_state", "ghz_state", "qft", "grover_iteration", "vqe_ansatz"]
