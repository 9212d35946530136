"""Tests for single-qubit gate matrices."""

import cmath
import math

import pytest
import torch

import qcircuit as qc
from qcircuit.gates import standard as stdgates
from qcircuit.gates.standard import gate_matrix, is_unitary


class TestFixedGates:
    """Tests for fixed single-qubit gates."""

    def test_default_dtype_is_complex128(self):
        assert stdgates.H().dtype == torch.complex128
        assert stdgates.H().shape == (2, 2)

    def test_x_gate_matrix(self):
        expected = torch.tensor([[0.0, 1.0], [1.0, 0.0]], dtype=torch.complex128)
        assert torch.allclose(stdgates.X(), expected)

    def test_y_gate_matrix(self):
        expected = torch.tensor([[0.0, -1.0j], [1.0j, 0.0]], dtype=torch.complex128)
        assert torch.allclose(stdgates.Y(), expected)

    def test_z_gate_matrix(self):
        expected = torch.tensor([[1.0, 0.0], [0.0, -1.0]], dtype=torch.complex128)
        assert torch.allclose(stdgates.Z(), expected)

    def test_h_gate_matrix(self):
        s = 1.0 / math.sqrt(2.0)
        expected = torch.tensor([[s, s], [s, -s]], dtype=torch.complex128)
        assert torch.allclose(stdgates.H(), expected)

    def test_t_squared_is_s(self):
        assert torch.allclose(stdgates.T() @ stdgates.T(), stdgates.S())

    def test_dagger_gates_invert(self):
        identity = torch.eye(2, dtype=torch.complex128)
        assert torch.allclose(stdgates.S() @ stdgates.SDG(), identity)
        assert torch.allclose(stdgates.T() @ stdgates.TDG(), identity)

    def test_dtype_override(self):
        gate = stdgates.X(dtype=torch.complex64)
        assert gate.dtype == torch.complex64


class TestRotationGates:
    """Tests for parametric gates."""

    @pytest.mark.parametrize("theta", [0.0, 0.3, math.pi / 2, math.pi, 2.5, -1.1])
    def test_rotations_are_unitary(self, theta):
        for factory in (stdgates.RX, stdgates.RY, stdgates.RZ):
            assert is_unitary(factory(theta))

    def test_rx_pi_is_x_up_to_phase(self):
        assert torch.allclose(stdgates.RX(math.pi), -1.0j * stdgates.X(), atol=1e-12)

    def test_ry_matrix(self):
        theta = 0.7
        c, s = math.cos(theta / 2), math.sin(theta / 2)
        expected = torch.tensor([[c, -s], [s, c]], dtype=torch.complex128)
        assert torch.allclose(stdgates.RY(theta), expected)

    def test_rz_matrix(self):
        theta = 1.3
        expected = torch.tensor(
            [[cmath.exp(-0.65j), 0.0], [0.0, cmath.exp(0.65j)]], dtype=torch.complex128
        )
        assert torch.allclose(stdgates.RZ(theta), expected)

    def test_u3_reduces_to_ry(self):
        assert torch.allclose(stdgates.U3(0.9, 0.0, 0.0), stdgates.RY(0.9))

    def test_u1_is_rz_up_to_global_phase(self):
        lam = 0.8
        assert torch.allclose(
            stdgates.U1(lam), cmath.exp(0.4j) * stdgates.RZ(lam), atol=1e-12
        )

    def test_u2_is_u3_with_half_pi(self):
        assert torch.allclose(stdgates.U2(0.1, 0.2), stdgates.U3(math.pi / 2, 0.1, 0.2))


class TestGateMatrixLookup:
    """Tests for the kind -> matrix lookup."""

    def test_lookup_by_name_and_kind(self):
        assert torch.allclose(gate_matrix("h"), stdgates.H())
        assert torch.allclose(gate_matrix(qc.GateKind.RX, [0.4]), stdgates.RX(0.4))
        assert torch.allclose(gate_matrix("U", [0.1, 0.2, 0.3]), stdgates.U3(0.1, 0.2, 0.3))

    @pytest.mark.parametrize(
        "kind", ["CNOT", "CZ", "SWAP", "Toffoli", "Fredkin", "Measure"]
    )
    def test_kinds_without_matrix_raise(self, kind):
        with pytest.raises(qc.UnsupportedGateKind, match="no single-qubit matrix"):
            gate_matrix(kind)

    def test_no_hadamard_fallback_for_unknown_kind(self):
        with pytest.raises(qc.UnsupportedGateKind):
            gate_matrix("iSWAP")

    def test_missing_angle_raises(self):
        with pytest.raises(ValueError, match="requires 1 parameter"):
            gate_matrix("Rx")

    def test_every_single_qubit_kind_has_unitary_matrix(self):
        for kind in qc.GateKind:
            if kind.num_qubits != 1 or kind is qc.GateKind.MEASURE:
                continue
            params = [0.5] * kind.num_params
            assert is_unitary(gate_matrix(kind, params)), kind


def test_is_unitary_rejects_non_unitary():
    assert not is_unitary(torch.tensor([[1.0, 1.0], [0.0, 1.0]], dtype=torch.complex128))
    assert not is_unitary(torch.zeros(2, 3, dtype=torch.complex128))
