"""Diagnostics and debugging utilities for qcircuit."""

from .core import assert_normalized, state_norm, total_probability
from .debug_mode import debug_context, is_debug_enabled, set_debug_enabled

__all__ = [
    "state_norm",
    "total_probability",
    "assert_normalized",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
