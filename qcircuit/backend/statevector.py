"""State-vector backend.

Convention: qubit ``q`` of basis index ``i`` is bit ``(i >> q) & 1``, so
qubit 0 is the least significant bit. All functions are pure: they
return a new tensor and leave their input untouched.
"""

from __future__ import annotations

import math
from typing import Sequence

import torch

from qcircuit.config import check_qubit_count
from qcircuit.core.device import Device, resolve_device
from qcircuit.diagnostics import assert_normalized, is_debug_enabled
from qcircuit.gates.kinds import Gate, GateKind
from qcircuit.gates.standard import gate_matrix
from qcircuit.logging import get_logger

logger = get_logger(__name__)

# Kinds whose bit-flip application matches their textbook definition.
_FLIP_NATIVE_KINDS = frozenset({GateKind.CNOT, GateKind.TOFFOLI})


def zero_state(
    n_qubits: int,
    device: Device | torch.device | str | None = None,
    dtype: torch.dtype | None = None,
) -> torch.Tensor:
    """
    Create the all-zero basis state |0...0⟩.

    Args:
        n_qubits: Number of qubits, between 1 and the configured ceiling.
        device: Device specification. Can be Device, str, torch.device, or None.
        dtype: Complex dtype. Defaults to the device's complex dtype.

    Returns:
        A complex tensor of shape (2**n_qubits,) with amplitude 1 at index 0.

    Raises:
        ValueError: If n_qubits < 1.
        QubitLimitExceeded: If n_qubits is above the ceiling.
    """
    if n_qubits < 1:
        raise ValueError(f"n_qubits must be >= 1, got {n_qubits}")
    check_qubit_count(n_qubits)

    qdevice = resolve_device(device)
    if dtype is None:
        dtype = qdevice.complex_dtype

    state = torch.zeros(2**n_qubits, dtype=dtype, device=qdevice.as_torch_device())
    state[0] = 1.0 + 0.0j
    return state


def _infer_n_qubits(state: torch.Tensor, n_qubits: int | None) -> int:
    if not torch.is_complex(state):
        raise ValueError(f"state must be complex dtype, got {state.dtype}")

    dim = state.shape[-1]
    if n_qubits is None:
        n_qubits = int(math.log2(dim))
        if 2**n_qubits != dim:
            raise ValueError(
                f"state dimension {dim} is not a power of 2. "
                "Please specify n_qubits explicitly."
            )
    elif 2**n_qubits != dim:
        raise ValueError(
            f"state dimension {dim} does not match 2**n_qubits = {2**n_qubits}"
        )
    return n_qubits


def apply_gate(
    state: torch.Tensor,
    gate: torch.Tensor,
    qubit: int,
    n_qubits: int | None = None,
) -> torch.Tensor:
    """
    Apply a single-qubit gate to one qubit of the state vector.

    With stride ``2**qubit``, every pair of amplitudes ``(a0, a1)`` at
    indices ``(block + j, block + j + stride)`` becomes
    ``(m00*a0 + m01*a1, m10*a0 + m11*a1)``. The pairs are gathered by
    viewing the vector as ``(left, 2, right)`` with ``right = stride``.

    Args:
        state: State vector of shape (..., 2**n_qubits) with complex dtype.
        gate: Gate matrix of shape (2, 2).
        qubit: Target qubit (0 = least significant bit).
        n_qubits: Number of qubits. If None, inferred from state.shape[-1].

    Returns:
        A new state vector with the gate applied.
    """
    if gate.shape != (2, 2):
        raise ValueError(f"gate must have shape (2, 2), got {tuple(gate.shape)}")

    n_qubits = _infer_n_qubits(state, n_qubits)
    if qubit < 0 or qubit >= n_qubits:
        raise ValueError(f"qubit index {qubit} out of range [0, {n_qubits})")

    dim = state.shape[-1]
    batch_shape = state.shape[:-1]
    batch_size = math.prod(batch_shape) if batch_shape else 1

    left_size = 2 ** (n_qubits - 1 - qubit)
    right_size = 2**qubit

    state_view = state.reshape(batch_size, left_size, 2, right_size)
    gate = gate.to(dtype=state.dtype, device=state.device)
    transformed = torch.einsum("blqr,oq->blor", state_view, gate)

    new_state = transformed.reshape(*batch_shape, dim)

    if is_debug_enabled():
        assert_normalized(new_state)

    return new_state


def apply_controlled_flip(
    state: torch.Tensor,
    controls: Sequence[int],
    target: int,
    n_qubits: int | None = None,
) -> torch.Tensor:
    """
    Flip ``target`` on every basis state whose control bits are all 1.

    For each index ``i`` with every control bit set and the target bit
    clear, amplitudes ``i`` and ``i ^ (1 << target)`` are swapped.

    Args:
        state: State vector of shape (..., 2**n_qubits) with complex dtype.
        controls: One or more control qubits.
        target: Target qubit, distinct from the controls.
        n_qubits: Number of qubits. If None, inferred from state.shape[-1].
    """
    n_qubits = _infer_n_qubits(state, n_qubits)
    controls = tuple(int(c) for c in controls)
    if not controls:
        raise ValueError("apply_controlled_flip requires at least one control qubit.")
    for q in (*controls, target):
        if q < 0 or q >= n_qubits:
            raise ValueError(f"qubit index {q} out of range [0, {n_qubits})")
    if target in controls or len(set(controls)) != len(controls):
        raise ValueError(
            f"control and target qubits must be distinct, got {controls} and {target}"
        )

    index = torch.arange(state.shape[-1], device=state.device)
    active = torch.ones_like(index, dtype=torch.bool)
    for c in controls:
        active &= ((index >> c) & 1).bool()

    permutation = torch.where(active, index ^ (1 << target), index)
    new_state = state[..., permutation]

    if is_debug_enabled():
        assert_normalized(new_state)

    return new_state


def apply_operation(state: torch.Tensor, op: Gate, n_qubits: int) -> torch.Tensor:
    """
    Apply one circuit gate to the state vector.

    Single-qubit kinds go through their 2x2 matrix. Every two-qubit kind
    is applied as a controlled flip on ``(control, target)`` and every
    three-qubit kind as a doubly controlled flip on ``(c1, c2, target)``,
    whatever the kind: CZ and SWAP act as CNOT, Fredkin acts as Toffoli.
    Measurements leave the state unchanged; outcomes come from sampling.
    """
    if op.kind is GateKind.MEASURE:
        return state

    if op.kind.num_qubits == 1:
        matrix = gate_matrix(op.kind, op.params, dtype=state.dtype, device=state.device)
        return apply_gate(state, matrix, qubit=op.qubits[0], n_qubits=n_qubits)

    if op.kind not in _FLIP_NATIVE_KINDS:
        logger.debug(
            "%s on qubits %s applied as a controlled bit flip", op.kind.value, op.qubits
        )
    *controls, target = op.qubits
    return apply_controlled_flip(state, controls, target, n_qubits=n_qubits)


def measure_probs(
    state: torch.Tensor,
    n_qubits: int | None = None,
) -> torch.Tensor:
    """
    Probability of every computational basis state, ``|state[i]|**2``.

    The result is not renormalized: if the vector has drifted from unit
    norm the probabilities will not sum to 1.

    Returns:
        A real tensor of the same shape as state.
    """
    _infer_n_qubits(state, n_qubits)
    return (torch.abs(state) ** 2).contiguous()


__all__ = [
    "zero_state",
    "apply_gate",
    "apply_controlled_flip",
    "apply_operation",
    "measure_probs",
]
