"""Quantum register state."""

from .statevector import QuantumState, custom_state, zero_state

__all__ = ["QuantumState", "zero_state", "custom_state"]
