"""Histograms over sampled bitstrings."""

from __future__ import annotations

from typing import Dict, Mapping, Tuple

import torch

from .bitstrings import index_to_bitstring


def bitstring_counts(indices: torch.Tensor, n_qubits: int) -> Dict[str, int]:
    """
    Tally sampled basis indices into a bitstring histogram.

    Keys appear in the order their bitstring was first drawn.

    Parameters
    ----------
    indices:
        Integer tensor of shape (shots,).
    n_qubits:
        Register width, which sets the bitstring length.
    """
    counts: Dict[str, int] = {}
    for index in indices.detach().cpu().tolist():
        key = index_to_bitstring(int(index), n_qubits)
        counts[key] = counts.get(key, 0) + 1
    return counts


def counts_to_probs(counts: Mapping[str, int]) -> Dict[str, float]:
    """Convert bitstring counts into empirical frequencies summing to 1."""
    total = sum(counts.values())
    if total <= 0:
        raise ValueError("Total count must be positive.")
    return {k: v / float(total) for k, v in counts.items()}


def most_frequent(counts: Mapping[str, int]) -> Tuple[str, int]:
    """
    Return the bitstring with the highest count, and that count.

    Ties go to the bitstring that comes first in the mapping's order.
    """
    if not counts:
        raise ValueError("counts must be non-empty.")
    best_key = ""
    best_count = -1
    for key, count in counts.items():
        if count > best_count:
            best_key, best_count = key, count
    return best_key, best_count
