"""Circuit execution: gate replay, probabilities and shot sampling."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple

import torch

from qcircuit.backend.statevector import apply_operation, measure_probs, zero_state
from qcircuit.core.device import Device, resolve_device
from qcircuit.diagnostics import total_probability
from qcircuit.gates.kinds import Gate
from qcircuit.logging import get_logger
from qcircuit.sampling import (
    bitstring_counts,
    bitstring_to_bits,
    counts_to_probs,
    most_frequent,
    sample_indices,
    validate_shots,
)

if TYPE_CHECKING:
    from .core import Circuit

logger = get_logger(__name__)

_NORM_TOLERANCE = 1e-6


class ExecutionContext:
    """
    Mutable simulation state for one circuit width: the amplitude vector
    and the classical register.

    A fresh context is created for every execution unless the caller
    passes one in, in which case gates are replayed on top of whatever
    the context already holds.
    """

    def __init__(
        self,
        n_qubits: int,
        n_classical_bits: Optional[int] = None,
        device: Device | torch.device | str | None = None,
        dtype: torch.dtype | None = None,
    ) -> None:
        self._device = resolve_device(device)
        self._dtype = dtype if dtype is not None else self._device.complex_dtype
        self.n_qubits = int(n_qubits)
        self.n_classical_bits = (
            self.n_qubits if n_classical_bits is None else int(n_classical_bits)
        )
        if self.n_classical_bits < 0:
            raise ValueError(
                f"n_classical_bits must be >= 0, got {self.n_classical_bits}."
            )
        self.state = zero_state(self.n_qubits, device=self._device, dtype=self._dtype)
        self.classical_register: List[int] = [0] * self.n_classical_bits

    @property
    def device(self) -> Device:
        return self._device

    def reset(self) -> None:
        """Return to |0...0⟩ with an all-zero classical register."""
        self.state = zero_state(self.n_qubits, device=self._device, dtype=self._dtype)
        self.classical_register = [0] * self.n_classical_bits

    def apply(self, op: Gate) -> None:
        """Apply one gate to the amplitude vector."""
        self.state = apply_operation(self.state, op, self.n_qubits)

    def probabilities(self) -> torch.Tensor:
        return measure_probs(self.state, n_qubits=self.n_qubits)

    def snapshot(self) -> torch.Tensor:
        """Return a copy of the amplitude vector."""
        return self.state.detach().clone()

    def record_outcome(self, ops: Sequence[Gate], bitstring: str) -> None:
        """Write the measured bits of ``bitstring`` into the classical register."""
        index = int(bitstring, 2)
        for op in ops:
            if op.is_measurement:
                self.classical_register[op.classical] = (index >> op.qubits[0]) & 1

    def __repr__(self) -> str:
        return (
            f"ExecutionContext(n_qubits={self.n_qubits}, "
            f"n_classical_bits={self.n_classical_bits}, device={self._device.name!r})"
        )


@dataclass(frozen=True)
class CircuitResult:
    """
    Outcome of one execution.

    Attributes
    ----------
    measurements:
        Bits of the most frequently sampled outcome, in bitstring order
        (highest qubit first).
    probabilities:
        ``|amplitude|**2`` for every basis index, not renormalized.
    state_vector:
        Copy of the amplitude vector after the replay.
    counts:
        Bitstring histogram over all shots, in first-drawn order.
    execution_time_ms:
        Wall-clock time of the whole execution.
    shots:
        Number of samples drawn.
    """

    measurements: Tuple[int, ...]
    probabilities: torch.Tensor
    state_vector: torch.Tensor
    counts: Dict[str, int] = field(default_factory=dict)
    execution_time_ms: float = 0.0
    shots: int = 0

    @property
    def most_likely(self) -> str:
        return "".join(str(b) for b in self.measurements)

    def frequencies(self) -> Dict[str, float]:
        """Empirical frequency of every observed bitstring."""
        return counts_to_probs(self.counts)

    def state_components(self) -> List[Tuple[float, float]]:
        """The state vector as (real, imag) pairs."""
        amplitudes = self.state_vector.detach().cpu()
        return [
            (float(a.real), float(a.imag))
            for a in amplitudes.tolist()
        ]


def execute(
    circuit: "Circuit",
    shots: int = 1024,
    *,
    context: Optional[ExecutionContext] = None,
    generator: Optional[torch.Generator] = None,
) -> CircuitResult:
    """
    Run a circuit and sample ``shots`` outcomes.

    Every non-measurement gate is replayed in order on ``context`` (a
    fresh one when None). Probabilities are the squared magnitudes of
    the resulting amplitudes; shots are drawn from them and tallied.

    Parameters
    ----------
    circuit:
        The circuit to run. Its gate list is only read.
    shots:
        Number of samples, a positive integer.
    context:
        Existing context to continue from. Executing twice with the same
        context applies the gate sequence twice.
    generator:
        Optional torch.Generator for reproducible sampling.

    Raises
    ------
    InvalidShotCount
        If ``shots`` is not a positive integer.
    ValueError
        If ``context`` does not match the circuit's register sizes.
    """
    shots = validate_shots(shots)
    start = time.perf_counter()

    if context is None:
        context = ExecutionContext(
            circuit.num_qubits, circuit.num_classical_bits, device=circuit.device
        )
    elif (
        context.n_qubits != circuit.num_qubits
        or context.n_classical_bits != circuit.num_classical_bits
    ):
        raise ValueError(
            f"Context registers ({context.n_qubits} qubits, "
            f"{context.n_classical_bits} bits) do not match circuit "
            f"{circuit.name!r} ({circuit.num_qubits} qubits, "
            f"{circuit.num_classical_bits} bits)."
        )

    ops = circuit.gates
    for op in ops:
        if op.is_measurement:
            continue
        context.apply(op)

    probs = context.probabilities()
    total = total_probability(probs)
    if abs(total - 1.0) > _NORM_TOLERANCE:
        logger.warning(
            "Circuit %r: probabilities sum to %.12f, not 1; sampling uses them as-is",
            circuit.name,
            total,
        )

    indices = sample_indices(probs, shots, generator=generator)
    counts = bitstring_counts(indices, circuit.num_qubits)
    best, best_count = most_frequent(counts)
    context.record_outcome(ops, best)

    elapsed_ms = (time.perf_counter() - start) * 1000.0
    logger.debug(
        "Executed %r: %d gates, %d shots, most likely %s (%d), %.3f ms",
        circuit.name,
        len(ops),
        shots,
        best,
        best_count,
        elapsed_ms,
    )

    return CircuitResult(
        measurements=tuple(bitstring_to_bits(best)),
        probabilities=probs,
        state_vector=context.snapshot(),
        counts=counts,
        execution_time_ms=elapsed_ms,
        shots=shots,
    )


__all__ = ["ExecutionContext", "CircuitResult", "execute"]
