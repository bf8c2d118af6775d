"""Invariant tests over random states and random gate sequences."""

import numpy as np
import pytest
import torch

import qkron as qk
from qkron import QuantumState
from qkron.engine import apply

_SINGLE_QUBIT = ["I", "X", "Y", "Z", "H", "S", "T"]
_TWO_QUBIT = ["CNOT", "SWAP"]


@pytest.mark.parametrize("n_qubits", [1, 2, 3, 4])
def test_normalization_invariant(n_qubits, rng, random_state):
    """Test sum |a|^2 stays within 1e-9 of 1 after every application."""
    state = random_state(n_qubits)
    for _ in range(25):
        use_two_qubit = n_qubits >= 2 and rng.random() < 0.3
        if use_two_qubit:
            gate = qk.get_gate(_TWO_QUBIT[rng.integers(len(_TWO_QUBIT))])
            target = rng.integers(n_qubits - 1)
        else:
            gate = qk.get_gate(_SINGLE_QUBIT[rng.integers(len(_SINGLE_QUBIT))])
            target = rng.integers(n_qubits)
        apply(gate, state, target)
        assert abs(float(state.probabilities().sum()) - 1.0) < 1e-9


@pytest.mark.parametrize("n_qubits", [1, 2, 3])
def test_identity_is_noop(n_qubits, random_state):
    """Test I on any qubit leaves the state unchanged."""
    state = random_state(n_qubits)
    before = state.amplitude_vector()
    for q in range(n_qubits):
        apply(qk.IDENTITY, state, q)
        assert torch.allclose(state.amplitude_vector(), before, atol=1e-12)


@pytest.mark.parametrize("n_qubits", [1, 2, 3])
def test_double_x_cancels(n_qubits, random_state):
    """Test X X on the same qubit restores the original vector."""
    state = random_state(n_qubits)
    before = state.amplitude_vector()
    for q in range(n_qubits):
        apply(qk.PAULI_X, state, q)
        apply(qk.PAULI_X, state, q)
        assert torch.allclose(state.amplitude_vector(), before, atol=1e-12)


@pytest.mark.parametrize("name", _SINGLE_QUBIT + _TWO_QUBIT)
def test_gate_then_dagger_restores_state(name, random_state):
    """Test U followed by U† is the identity on a random 3-qubit state."""
    gate = qk.get_gate(name)
    state = random_state(3)
    before = state.amplitude_vector()
    apply(gate, state, 1)
    apply(gate.dagger(), state, 1)
    assert torch.allclose(state.amplitude_vector(), before, atol=1e-12)


def test_engine_matches_dense_reference(rng, random_state):
    """Test apply() against an independent numpy Kronecker construction."""
    n = 3
    state = random_state(n)
    reference = state.amplitude_vector().numpy()
    eye = np.eye(2, dtype=complex)
    for _ in range(10):
        name = _SINGLE_QUBIT[rng.integers(len(_SINGLE_QUBIT))]
        target = rng.integers(n)
        local = qk.get_gate(name).matrix.to_numpy()
        full = np.array([[1.0 + 0j]])
        for q in range(n):
            full = np.kron(full, local if q == target else eye)
        reference = full @ reference
        apply(name, state, target)
    np.testing.assert_allclose(state.amplitude_vector().numpy(), reference, atol=1e-12)


def test_hadamard_twice_is_identity_on_basis_states():
    """Test H H |k> = |k> for every 2-qubit basis state."""
    for k in range(4):
        vector = [0.0] * 4
        vector[k] = 1.0
        state = QuantumState.from_vector(vector)
        apply(qk.HADAMARD, state, 0)
        apply(qk.HADAMARD, state, 0)
        assert state.probability_of(k) == pytest.approx(1.0, abs=1e-12)
