"""Dense n-qubit state vectors.

Qubit ordering: qubit 0 is the most significant bit of the basis index,
so the basis state ``|q0 q1 ... q(n-1)>`` sits at index
``sum(q_i * 2**(n - 1 - i))``. For two qubits, ``|10>`` (qubit 0 set) is
index 2.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Union

import numpy as np
import torch

from ..config import resolve_dtype, tolerance_for
from ..diagnostics.core import assert_normalized, state_norm
from ..errors import IndexOutOfRange, InvalidStateVector
from ..linalg.matrix import ComplexMatrix

VectorData = Union[Sequence[complex], np.ndarray, torch.Tensor]


def _num_qubits_for(length: int) -> int:
    """Return ``n`` with ``2**n == length``, or raise InvalidStateVector."""
    if length < 2 or length & (length - 1):
        raise InvalidStateVector(
            f"state vector length {length} is not a power of 2 (>= 2)"
        )
    return length.bit_length() - 1


def _to_vector(data: VectorData, dtype: torch.dtype) -> torch.Tensor:
    if isinstance(data, torch.Tensor):
        vector = data.detach().to(dtype=dtype, device="cpu").clone()
    elif isinstance(data, np.ndarray):
        vector = torch.from_numpy(np.array(data, dtype=np.complex128)).to(dtype=dtype)
    else:
        vector = torch.tensor([complex(a) for a in data], dtype=dtype)
    if vector.dim() != 1:
        raise InvalidStateVector(
            f"state vector must be 1-D, got shape {tuple(vector.shape)}"
        )
    return vector


class QuantumState:
    """
    State of an n-qubit register as ``2**n`` complex amplitudes.

    Build one with :meth:`zero`, :meth:`from_vector` or
    :meth:`from_amplitudes`. The vector is owned by the state: queries
    return copies, and only the gate engine replaces it, always as a
    whole.

    Examples
    --------
    >>> state = QuantumState.zero(2)
    >>> state.probability_of(0)
    1.0
    """

    __slots__ = ("_num_qubits", "_vector")

    def __init__(self, num_qubits: int, vector: torch.Tensor) -> None:
        # Internal; validated by the classmethod constructors.
        self._num_qubits = num_qubits
        self._vector = vector

    @classmethod
    def zero(cls, num_qubits: int, dtype: torch.dtype | None = None) -> QuantumState:
        """
        Create the all-zero basis state ``|0...0>``.

        Raises
        ------
        ValueError
            If ``num_qubits < 1``.
        """
        if num_qubits < 1:
            raise ValueError(f"num_qubits must be >= 1, got {num_qubits}")
        vector = torch.zeros(1 << num_qubits, dtype=resolve_dtype(dtype))
        vector[0] = 1.0 + 0.0j
        return cls(num_qubits, vector)

    @classmethod
    def from_vector(
        cls,
        vector: VectorData,
        check_normalized: bool = True,
        dtype: torch.dtype | None = None,
    ) -> QuantumState:
        """
        Create a state from caller-supplied amplitudes.

        The amplitudes are copied and never re-normalized.

        Parameters
        ----------
        vector:
            ``2**n`` amplitudes, ``n >= 1``.
        check_normalized:
            Reject vectors whose total probability is not 1 within
            :func:`qkron.config.tolerance_for` for the vector's dtype.

        Raises
        ------
        InvalidStateVector
            If the length is not a power of two.
        UnnormalizedState
            If ``check_normalized`` and the vector is not normalized.
        """
        amplitudes = _to_vector(vector, resolve_dtype(dtype))
        num_qubits = _num_qubits_for(amplitudes.shape[0])
        if check_normalized:
            assert_normalized(amplitudes)
        return cls(num_qubits, amplitudes)

    @classmethod
    def from_amplitudes(
        cls,
        alpha: complex,
        beta: complex,
        dtype: torch.dtype | None = None,
    ) -> QuantumState:
        """Single-qubit state ``alpha|0> + beta|1>`` (must be normalized)."""
        return cls.from_vector([alpha, beta], dtype=dtype)

    @property
    def num_qubits(self) -> int:
        return self._num_qubits

    @property
    def dimension(self) -> int:
        return self._vector.shape[0]

    @property
    def dtype(self) -> torch.dtype:
        return self._vector.dtype

    def amplitude_vector(self) -> torch.Tensor:
        """A copy of the current amplitudes."""
        return self._vector.clone()

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.dimension:
            raise IndexOutOfRange(
                f"basis index {index} out of range [0, {self.dimension})"
            )

    def amplitude(self, index: int) -> complex:
        """Amplitude of basis state ``index``."""
        self._check_index(index)
        return complex(self._vector[index].item())

    def probability_of(self, index: int) -> float:
        """
        Probability ``|a_index|^2`` of basis state ``index``.

        Raises
        ------
        IndexOutOfRange
            If ``index`` is outside ``[0, 2**num_qubits)``.
        """
        self._check_index(index)
        return float(self._vector[index].abs().item() ** 2)

    def probabilities(self) -> torch.Tensor:
        """Real tensor of ``|a_i|^2`` for every basis state."""
        return self._vector.abs() ** 2

    def norm(self) -> float:
        return state_norm(self._vector)

    def is_normalized(self, atol: float | None = None) -> bool:
        atol = tolerance_for(self.dtype, self.dimension, atol)
        return abs(self.norm() ** 2 - 1.0) < atol

    def as_column(self) -> ComplexMatrix:
        """The amplitudes as a ``2**n x 1`` column matrix."""
        return ComplexMatrix(self.dimension, 1, self._vector, dtype=self.dtype)

    def copy(self) -> QuantumState:
        return QuantumState(self._num_qubits, self._vector.clone())

    def _adopt(self, vector: torch.Tensor) -> None:
        # Whole-vector replacement used by the gate engine. The new vector
        # is fully computed before this call; a bad length leaves the
        # state untouched.
        if vector.shape != self._vector.shape:
            raise InvalidStateVector(
                f"replacement vector shape {tuple(vector.shape)} does not match "
                f"state shape {tuple(self._vector.shape)}"
            )
        self._vector = vector

    def __repr__(self) -> str:
        width = self._num_qubits
        terms = [
            f"({complex(a):.4g})|{i:0{width}b}>"
            for i, a in enumerate(self._vector.tolist())
            if abs(a) > 0.0
        ]
        return f"QuantumState(num_qubits={width}, {' + '.join(terms) or '0'})"


def zero_state(num_qubits: int, dtype: torch.dtype | None = None) -> QuantumState:
    """Shorthand for :meth:`QuantumState.zero`."""
    return QuantumState.zero(num_qubits, dtype=dtype)


def custom_state(
    vector: VectorData,
    check_normalized: bool = True,
    dtype: torch.dtype | None = None,
) -> QuantumState:
    """Shorthand for :meth:`QuantumState.from_vector`."""
    return QuantumState.from_vector(vector, check_normalized=check_normalized, dtype=dtype)


__all__ = ["QuantumState", "zero_state", "custom_state"]
