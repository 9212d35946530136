"""Shot sampling from a basis-state probability array."""

from __future__ import annotations

import operator
from typing import List, Optional

import torch

from qcircuit.errors import InvalidShotCount


def validate_shots(shots: object) -> int:
    """
    Return ``shots`` as an int, or raise InvalidShotCount.

    Any integer-like value (numpy integers, 0-d integer tensors) is
    accepted; bools and floats are not.
    """
    if isinstance(shots, bool):
        raise InvalidShotCount(shots)
    try:
        count = operator.index(shots)
    except TypeError:
        raise InvalidShotCount(shots) from None
    if count <= 0:
        raise InvalidShotCount(shots)
    return count


def sample_indices(
    probs: torch.Tensor,
    shots: int,
    generator: Optional[torch.Generator] = None,
) -> torch.Tensor:
    """
    Draw ``shots`` basis-state indices from a probability array.

    Each shot draws ``u`` uniformly from [0, 1) and picks the first index
    whose running probability sum exceeds ``u``. If rounding keeps every
    running sum at or below ``u`` the last index is picked. The array is
    used as given: it is not renormalized, so a total below 1 shifts mass
    onto the last index and a total above 1 starves the tail.

    Parameters
    ----------
    probs:
        1-D real tensor of length 2**n_qubits.
    shots:
        Number of draws, a positive integer.
    generator:
        Optional torch.Generator for reproducible sampling.

    Returns
    -------
    torch.Tensor
        int64 tensor of shape (shots,) with values in [0, len(probs)).
    """
    shots = validate_shots(shots)
    if probs.dim() != 1:
        raise ValueError(f"probs must be 1-D, got shape {tuple(probs.shape)}.")

    cumulative = torch.cumsum(probs, dim=0)
    draws = torch.rand(
        shots, generator=generator, dtype=cumulative.dtype, device=cumulative.device
    )
    indices = torch.searchsorted(cumulative, draws, right=True)
    return torch.clamp(indices, max=probs.shape[0] - 1)


def index_to_bitstring(index: int, n_qubits: int) -> str:
    """
    Format a basis index as a zero-padded binary string.

    The most significant qubit comes first, so qubit 0 is the last
    character: index 1 of a 3-qubit register is ``"001"``.
    """
    if index < 0 or index >= 2**n_qubits:
        raise ValueError(
            f"Basis index {index} is out of bounds for n_qubits={n_qubits}."
        )
    return format(index, f"0{n_qubits}b")


def bitstring_to_bits(bitstring: str) -> List[int]:
    """Split a bitstring into its digits, in string order."""
    return [int(ch) for ch in bitstring]
