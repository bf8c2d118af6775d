"""Exception types raised by qkron.

Every error is raised before any state is modified, so a caller that
catches one can keep using the objects involved.
"""

from __future__ import annotations


class QuantumError(Exception):
    """Base class for all qkron errors."""


class DimensionMismatch(QuantumError, ValueError):
    """Operand shapes are incompatible (multiply, construction, full-register gates)."""


class IndexOutOfRange(QuantumError, IndexError):
    """A matrix entry, amplitude or qubit position is outside valid bounds."""


class InvalidStateVector(QuantumError, ValueError):
    """A state vector length is not a power of two."""


class UnnormalizedState(QuantumError, ValueError):
    """A state vector's total probability differs from 1 beyond tolerance."""


__all__ = [
    "QuantumError",
    "DimensionMismatch",
    "IndexOutOfRange",
    "InvalidStateVector",
    "UnnormalizedState",
]
