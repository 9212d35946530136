"""Norm diagnostics for state vectors."""

from __future__ import annotations

import torch


def state_norm(state: torch.Tensor) -> torch.Tensor:
    """
    Compute the L2 norm of a state vector.

    Parameters
    ----------
    state:
        Complex tensor with shape (..., dim).

    Returns
    -------
    torch.Tensor
        Real tensor with shape (...) giving the norm for each batch
        element.
    """
    if state.dim() < 1:
        raise ValueError("state_norm expects a tensor with at least 1 dimension.")

    norm_sq = (state.conj() * state).sum(dim=-1).real
    return torch.sqrt(norm_sq)


def total_probability(probs: torch.Tensor) -> float:
    """Return the sum of a probability array as a Python float."""
    return float(probs.sum().item())


def assert_normalized(
    state: torch.Tensor,
    atol: float = 1e-9,
) -> None:
    """
    Assert that a state vector has norm ~1 within a tolerance.

    Raises
    ------
    ValueError
        If the norm is non-finite or differs from 1 by more than ``atol``.
    """
    norms = state_norm(state)
    if not torch.all(torch.isfinite(norms)):
        raise ValueError("State norm contains non-finite values.")

    if not torch.allclose(norms, torch.ones_like(norms), atol=atol, rtol=0.0):
        raise ValueError(
            f"State is not normalized within tolerance {atol}. "
            f"Norms found: {norms.detach().cpu().tolist()}"
        )
