"""Runtime configuration for qcircuit.

The state vector of an n-qubit register holds ``2**n`` complex128
amplitudes (16 bytes each), so memory grows fast: 24 qubits already take
256 MiB. Registers above the ceiling are rejected at construction. The
ceiling defaults to 24 and can be overridden with the
``QCIRCUIT_MAX_QUBITS`` environment variable or at runtime.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

from .errors import QubitLimitExceeded

DEFAULT_MAX_QUBITS = 24

_MAX_QUBITS_ENV_VAR = "QCIRCUIT_MAX_QUBITS"


def _read_env_max_qubits() -> int:
    raw = os.getenv(_MAX_QUBITS_ENV_VAR)
    if raw is None or not raw.strip():
        return DEFAULT_MAX_QUBITS
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(
            f"{_MAX_QUBITS_ENV_VAR} must be an integer, got {raw!r}."
        ) from None
    if value < 1:
        raise ValueError(f"{_MAX_QUBITS_ENV_VAR} must be >= 1, got {value}.")
    return value


_max_qubits: int = _read_env_max_qubits()


def get_max_qubits() -> int:
    """Return the largest register width a circuit may declare."""
    return _max_qubits


def set_max_qubits(limit: int) -> None:
    """
    Globally set the qubit ceiling.

    Parameters
    ----------
    limit:
        New ceiling, at least 1.
    """
    global _max_qubits
    limit = int(limit)
    if limit < 1:
        raise ValueError(f"max qubits must be >= 1, got {limit}.")
    _max_qubits = limit


@contextmanager
def max_qubits_context(limit: int) -> Iterator[None]:
    """Temporarily override the qubit ceiling."""
    global _max_qubits
    prev = _max_qubits
    set_max_qubits(limit)
    try:
        yield
    finally:
        _max_qubits = prev


def check_qubit_count(n_qubits: int) -> None:
    """Raise QubitLimitExceeded if ``n_qubits`` is above the ceiling."""
    if n_qubits > _max_qubits:
        raise QubitLimitExceeded(n_qubits, _max_qubits)


__all__ = [
    "DEFAULT_MAX_QUBITS",
    "get_max_qubits",
    "set_max_qubits",
    "max_qubits_context",
    "check_qubit_count",
]
