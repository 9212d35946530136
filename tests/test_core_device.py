"""Tests for the device abstraction."""

import pytest
import torch

from qcircuit import Circuit
from qcircuit.core.device import Device, default_device, device, resolve_device


def test_default_device_is_cpu_complex128() -> None:
    dev = default_device()
    assert dev.name == "sv_cpu"
    assert dev.as_torch_device() == torch.device("cpu")
    assert dev.dtype == torch.float64
    assert dev.complex_dtype == torch.complex128


def test_unknown_device_name() -> None:
    with pytest.raises(ValueError, match="Unsupported device name"):
        device("qpu")


@pytest.mark.skipif(torch.cuda.is_available(), reason="CUDA present")
def test_cuda_device_unavailable() -> None:
    with pytest.raises(RuntimeError):
        device("sv_cuda")


@pytest.mark.parametrize("spec", [None, "sv_cpu", torch.device("cpu")])
def test_resolve_device(spec) -> None:
    assert resolve_device(spec).name == "sv_cpu"


def test_resolve_device_passes_instances_through() -> None:
    dev = Device("custom", torch.device("cpu"), complex_dtype=torch.complex64)
    assert resolve_device(dev) is dev


def test_resolve_device_rejects_other_types() -> None:
    with pytest.raises(TypeError):
        resolve_device(3)


def test_circuit_context_uses_device_dtype() -> None:
    dev = Device("sv_cpu64", torch.device("cpu"), complex_dtype=torch.complex64)
    circuit = Circuit(2, device=dev)
    assert circuit.device is dev
    assert circuit.context.state.dtype == torch.complex64
