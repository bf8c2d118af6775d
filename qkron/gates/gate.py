"""Matrix-backed quantum gates."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Optional

from ..diagnostics.core import is_unitary
from ..errors import DimensionMismatch
from ..linalg.matrix import ComplexMatrix

if TYPE_CHECKING:
    from ..state.statevector import QuantumState


class Gate:
    """
    A k-qubit operator wrapping a square ``2**k x 2**k`` matrix.

    The gate keeps a private copy of its matrix and never modifies it, so
    one instance can be applied any number of times and shared freely.
    Unitarity is expected but not enforced; see :meth:`is_unitary`.

    Parameters
    ----------
    matrix:
        Square matrix whose dimension is a power of two (>= 2).
    name:
        Optional label used in ``repr`` and log messages.

    Raises
    ------
    DimensionMismatch
        If the matrix is not square or its dimension is not a power of two.
    """

    __slots__ = ("_matrix", "_name", "_num_qubits")

    def __init__(self, matrix: ComplexMatrix, name: Optional[str] = None) -> None:
        if not matrix.is_square():
            raise DimensionMismatch(
                f"gate matrix must be square, got {matrix.rows}x{matrix.cols}"
            )
        dim = matrix.rows
        if dim < 2 or dim & (dim - 1):
            raise DimensionMismatch(
                f"gate dimension {dim} is not a power of 2 (>= 2)"
            )
        self._matrix = matrix.copy()
        self._name = name
        self._num_qubits = dim.bit_length() - 1

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[complex]], name: Optional[str] = None) -> Gate:
        """Build a gate from nested matrix rows."""
        return cls(ComplexMatrix.from_rows(rows), name=name)

    @property
    def matrix(self) -> ComplexMatrix:
        """A copy of the gate matrix."""
        return self._matrix.copy()

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def num_qubits(self) -> int:
        return self._num_qubits

    @property
    def dimension(self) -> int:
        return self._matrix.rows

    def is_unitary(self, atol: float = 1e-9) -> bool:
        return is_unitary(self._matrix, atol=atol)

    def dagger(self) -> Gate:
        """The adjoint gate ``U†``."""
        name = f"{self._name}†" if self._name else None
        return Gate(self._matrix.conjugate_transpose(), name=name)

    def apply(self, state: QuantumState, target: int | Sequence[int] = 0) -> QuantumState:
        """Apply this gate to ``state`` at ``target``; see :func:`qkron.engine.apply`."""
        from ..engine.apply import apply

        return apply(self, state, target)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Gate):
            return NotImplemented
        return self._matrix == other._matrix

    def __hash__(self) -> int:
        return hash((self._matrix.shape, tuple(self._matrix.data.tolist())))

    def __repr__(self) -> str:
        label = self._name or "custom"
        return f"Gate({label}, num_qubits={self._num_qubits})"
