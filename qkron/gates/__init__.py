"""Quantum gate implementations."""

from .gate import Gate
from .standard import (
    CNOT,
    CX,
    HADAMARD,
    IDENTITY,
    PAULI_X,
    PAULI_Y,
    PAULI_Z,
    STANDARD_GATES,
    SWAP,
    H,
    I,
    S,
    T,
    X,
    Y,
    Z,
    get_gate,
)

__all__ = [
    "Gate",
    "IDENTITY",
    "PAULI_X",
    "PAULI_Y",
    "PAULI_Z",
    "HADAMARD",
    "S",
    "T",
    "CNOT",
    "SWAP",
    "I",
    "X",
    "Y",
    "Z",
    "H",
    "CX",
    "STANDARD_GATES",
    "get_gate",
]
