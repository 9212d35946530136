"""Tests for debug mode and norm diagnostics."""

import math

import pytest
import torch

from qcircuit import Circuit
from qcircuit.diagnostics import (
    assert_normalized,
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
    state_norm,
    total_probability,
)


def test_debug_mode_toggle_and_context() -> None:
    """Test debug mode toggling and context manager."""
    original = is_debug_enabled()

    try:
        set_debug_enabled(False)
        assert not is_debug_enabled()

        with debug_context(True):
            assert is_debug_enabled()

        assert not is_debug_enabled()

        set_debug_enabled(True)
        with debug_context(False):
            assert not is_debug_enabled()
        assert is_debug_enabled()
    finally:
        set_debug_enabled(original)


def test_debug_context_nested() -> None:
    original = is_debug_enabled()

    try:
        set_debug_enabled(False)
        with debug_context(True):
            with debug_context(False):
                assert not is_debug_enabled()
            assert is_debug_enabled()
        assert not is_debug_enabled()
    finally:
        set_debug_enabled(original)


def test_debug_context_restores_after_exception() -> None:
    original = is_debug_enabled()
    with pytest.raises(RuntimeError):
        with debug_context(not original):
            raise RuntimeError("boom")
    assert is_debug_enabled() == original


def test_state_norm_and_total_probability() -> None:
    s = 1.0 / math.sqrt(2.0)
    state = torch.tensor([s, 1j * s], dtype=torch.complex128)
    assert float(state_norm(state)) == pytest.approx(1.0)
    assert total_probability(torch.tensor([0.25, 0.25, 0.5], dtype=torch.float64)) == 1.0


def test_state_norm_rejects_scalar() -> None:
    with pytest.raises(ValueError):
        state_norm(torch.tensor(1.0 + 0j))


def test_assert_normalized() -> None:
    assert_normalized(torch.tensor([0.6, 0.8j], dtype=torch.complex128))
    with pytest.raises(ValueError, match="not normalized"):
        assert_normalized(torch.tensor([1.0, 1.0], dtype=torch.complex128))
    with pytest.raises(ValueError, match="non-finite"):
        assert_normalized(torch.tensor([float("nan"), 0.0], dtype=torch.complex128))


def test_debug_mode_checks_execution(torch_rng) -> None:
    circuit = Circuit(1).h(0)
    context = circuit.new_context()
    context.state = torch.tensor([1.0, 1.0], dtype=torch.complex128)

    with debug_context(True):
        with pytest.raises(ValueError, match="not normalized"):
            circuit.execute(shots=1, context=context, generator=torch_rng)

    with debug_context(True):
        result = Circuit(2).h(0).cnot(0, 1).execute(shots=4, generator=torch_rng)
    assert set(result.counts) <= {"00", "11"}


@pytest.mark.parametrize(
    "raw,expected",
    [("1", True), ("TRUE", True), (" on ", True), ("yes", True), ("0", False), ("", False), (None, False)],
)
def test_env_flag(raw, expected) -> None:
    from qcircuit.diagnostics.debug_mode import _env_flag

    assert _env_flag(raw) is expected
