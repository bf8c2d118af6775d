"""Pytest configuration and shared fixtures for qkron tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- A random normalized state factory
"""

import os
from typing import Callable

import numpy as np
import pytest
import torch

from qkron import QuantumState


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function")
def torch_rng() -> torch.Generator:
    """Provide a deterministic CPU torch RNG for tests."""
    generator = torch.Generator(device="cpu")
    generator.manual_seed(_seed())
    return generator


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set global random seeds for reproducibility."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())


@pytest.fixture
def random_state(rng: np.random.Generator) -> Callable[[int], QuantumState]:
    """Return a factory for random normalized n-qubit states."""

    def make(num_qubits: int) -> QuantumState:
        dim = 1 << num_qubits
        vector = rng.normal(size=dim) + 1j * rng.normal(size=dim)
        vector = vector / np.linalg.norm(vector)
        return QuantumState.from_vector(vector)

    return make
