"""Single-qubit gate matrices.

Every factory returns a (2, 2) complex tensor, complex128 on the CPU
unless told otherwise. Rows and columns are ordered |0>, |1>.
"""

from __future__ import annotations

import cmath
import math
from typing import Optional, Sequence

import torch

from qcircuit.errors import UnsupportedGateKind

from .kinds import GateKind

_SQRT2_INV = 1.0 / math.sqrt(2.0)


def _matrix(
    rows: list[list[complex]],
    dtype: torch.dtype | None,
    device: torch.device | None,
) -> torch.Tensor:
    if dtype is None:
        dtype = torch.complex128
    if device is None:
        device = torch.device("cpu")
    return torch.tensor(rows, dtype=dtype, device=device)


def H(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Hadamard gate."""
    return _matrix([[_SQRT2_INV, _SQRT2_INV], [_SQRT2_INV, -_SQRT2_INV]], dtype, device)


def X(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Pauli-X gate (bit flip)."""
    return _matrix([[0.0, 1.0], [1.0, 0.0]], dtype, device)


def Y(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Pauli-Y gate."""
    return _matrix([[0.0, -1.0j], [1.0j, 0.0]], dtype, device)


def Z(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Pauli-Z gate (phase flip)."""
    return _matrix([[1.0, 0.0], [0.0, -1.0]], dtype, device)


def S(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """S gate (√Z)."""
    return _matrix([[1.0, 0.0], [0.0, 1.0j]], dtype, device)


def SDG(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """S† gate."""
    return _matrix([[1.0, 0.0], [0.0, -1.0j]], dtype, device)


def T(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """T gate (π/8 gate, √S)."""
    return _matrix([[1.0, 0.0], [0.0, cmath.exp(1.0j * math.pi / 4.0)]], dtype, device)


def TDG(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """T† gate."""
    return _matrix([[1.0, 0.0], [0.0, cmath.exp(-1.0j * math.pi / 4.0)]], dtype, device)


def RX(
    theta: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Rotation around the X axis: RX(θ) = exp(-iθX/2).

    Matrix form:
        [[cos(θ/2), -i sin(θ/2)],
         [-i sin(θ/2), cos(θ/2)]]
    """
    half = float(theta) / 2.0
    c, s = math.cos(half), math.sin(half)
    return _matrix([[c, -1.0j * s], [-1.0j * s, c]], dtype, device)


def RY(
    theta: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Rotation around the Y axis: RY(θ) = exp(-iθY/2).

    Matrix form:
        [[cos(θ/2), -sin(θ/2)],
         [sin(θ/2), cos(θ/2)]]
    """
    half = float(theta) / 2.0
    c, s = math.cos(half), math.sin(half)
    return _matrix([[c, -s], [s, c]], dtype, device)


def RZ(
    theta: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Rotation around the Z axis: RZ(θ) = exp(-iθZ/2).

    Matrix form:
        [[exp(-iθ/2), 0],
         [0, exp(iθ/2)]]
    """
    half = float(theta) / 2.0
    return _matrix(
        [[cmath.exp(-1.0j * half), 0.0], [0.0, cmath.exp(1.0j * half)]], dtype, device
    )


def U3(
    theta: float,
    phi: float,
    lam: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    General single-qubit rotation in the OpenQASM convention.

    Matrix form:
        [[cos(θ/2), -e^{iλ} sin(θ/2)],
         [e^{iφ} sin(θ/2), e^{i(φ+λ)} cos(θ/2)]]
    """
    half = float(theta) / 2.0
    c, s = math.cos(half), math.sin(half)
    phi, lam = float(phi), float(lam)
    return _matrix(
        [
            [c, -cmath.exp(1.0j * lam) * s],
            [cmath.exp(1.0j * phi) * s, cmath.exp(1.0j * (phi + lam)) * c],
        ],
        dtype,
        device,
    )


def U2(
    phi: float,
    lam: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """U2(φ, λ) = U3(π/2, φ, λ)."""
    return U3(math.pi / 2.0, phi, lam, dtype=dtype, device=device)


def U1(
    lam: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """U1(λ) = diag(1, e^{iλ}), a phase shift."""
    return _matrix([[1.0, 0.0], [0.0, cmath.exp(1.0j * float(lam))]], dtype, device)


def gate_matrix(
    kind: GateKind | str,
    params: Optional[Sequence[float]] = None,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Map a single-qubit gate kind and its angles to a 2x2 unitary.

    Multi-qubit kinds and Measure have no 2x2 matrix; asking for one is
    an error rather than a silent substitution.

    Raises
    ------
    UnsupportedGateKind
        For CNOT, CZ, SWAP, Toffoli, Fredkin and Measure.
    ValueError
        If the number of angles does not match the kind.
    """
    k = GateKind.parse(kind)
    angles = tuple(float(p) for p in params) if params else ()

    if k.num_qubits != 1 or k is GateKind.MEASURE:
        raise UnsupportedGateKind(
            f"Gate kind {k.value} has no single-qubit matrix; "
            "multi-qubit kinds are applied as controlled bit flips and "
            "measurements are sampled, not applied."
        )
    if len(angles) != k.num_params:
        raise ValueError(
            f"Gate {k.value} requires {k.num_params} parameter(s), got {len(angles)}."
        )

    if k is GateKind.H:
        return H(dtype=dtype, device=device)
    if k is GateKind.X:
        return X(dtype=dtype, device=device)
    if k is GateKind.Y:
        return Y(dtype=dtype, device=device)
    if k is GateKind.Z:
        return Z(dtype=dtype, device=device)
    if k is GateKind.S:
        return S(dtype=dtype, device=device)
    if k is GateKind.T:
        return T(dtype=dtype, device=device)
    if k is GateKind.SDG:
        return SDG(dtype=dtype, device=device)
    if k is GateKind.TDG:
        return TDG(dtype=dtype, device=device)
    if k is GateKind.RX:
        return RX(angles[0], dtype=dtype, device=device)
    if k is GateKind.RY:
        return RY(angles[0], dtype=dtype, device=device)
    if k is GateKind.RZ:
        return RZ(angles[0], dtype=dtype, device=device)
    if k is GateKind.U1:
        return U1(angles[0], dtype=dtype, device=device)
    if k is GateKind.U2:
        return U2(angles[0], angles[1], dtype=dtype, device=device)
    if k in (GateKind.U, GateKind.U3):
        return U3(angles[0], angles[1], angles[2], dtype=dtype, device=device)

    raise UnsupportedGateKind(f"No matrix registered for gate kind {k.value}.")


def is_unitary(matrix: torch.Tensor, atol: float = 1e-9) -> bool:
    """
    Check whether U†U = I within ``atol``.

    Args:
        matrix: Tensor of shape (..., n, n).
        atol: Absolute tolerance for the check.
    """
    if matrix.shape[-1] != matrix.shape[-2]:
        return False

    adjoint = matrix.conj().transpose(-1, -2)
    product = torch.matmul(adjoint, matrix)

    n = matrix.shape[-1]
    identity = torch.eye(n, dtype=matrix.dtype, device=matrix.device)
    if product.ndim > 2:
        identity = identity.expand(product.shape)

    diff = torch.abs(product - identity)
    return bool(torch.all(diff < atol).item())
