"""Debug mode switch.

While debug mode is on, every gate application asserts that the state
vector still has unit norm. It starts from the ``QCIRCUIT_DEBUG``
environment variable (``1``, ``true``, ``yes`` or ``on``).
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator, Optional

_DEBUG_ENV_VAR = "QCIRCUIT_DEBUG"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _env_flag(raw: Optional[str]) -> bool:
    return raw is not None and raw.strip().lower() in _TRUTHY


_debug_enabled: bool = _env_flag(os.getenv(_DEBUG_ENV_VAR))


def is_debug_enabled() -> bool:
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """Globally enable or disable debug mode."""
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Temporarily switch debug mode, restoring the previous setting on exit.

    >>> with debug_context(True):
    ...     circuit.execute(shots=100)
    """
    prev = is_debug_enabled()
    set_debug_enabled(enabled)
    try:
        yield
    finally:
        set_debug_enabled(prev)
