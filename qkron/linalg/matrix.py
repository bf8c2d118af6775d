"""Dense complex matrices.

``ComplexMatrix`` is a small value type over a 2-D complex ``torch.Tensor``.
It has copy-by-value semantics: constructors copy their input, accessors
hand out copies, and every arithmetic operation allocates a fresh result.
No two matrices ever share storage.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Union

import numpy as np
import torch

from ..config import default_dtype, resolve_dtype
from ..errors import DimensionMismatch, IndexOutOfRange

Scalar = Union[complex, float, int]
MatrixData = Union[Sequence[Scalar], np.ndarray, torch.Tensor]


def _to_flat_tensor(data: MatrixData, dtype: torch.dtype) -> torch.Tensor:
    if isinstance(data, torch.Tensor):
        flat = data.detach().to(dtype=dtype, device="cpu").clone()
    elif isinstance(data, np.ndarray):
        flat = torch.from_numpy(np.array(data, dtype=np.complex128)).to(dtype=dtype)
    else:
        flat = torch.tensor([complex(x) for x in data], dtype=dtype)
    return flat.reshape(-1)


def _result_dtype(a: torch.Tensor, b: torch.Tensor) -> torch.dtype:
    return torch.promote_types(a.dtype, b.dtype)


class ComplexMatrix:
    """
    A ``rows x cols`` matrix of complex numbers stored row-major.

    Parameters
    ----------
    rows, cols:
        Matrix shape, both >= 1.
    data:
        ``rows * cols`` values in row-major order: a flat sequence of
        numbers, a NumPy array or a torch tensor (any shape, flattened).
    dtype:
        Complex dtype of the storage. Defaults to
        :func:`qkron.config.default_dtype`.

    Raises
    ------
    DimensionMismatch
        If ``len(data) != rows * cols`` or a dimension is < 1.
    ValueError
        If ``dtype`` is not a supported complex dtype.

    Examples
    --------
    >>> m = ComplexMatrix(2, 2, [0, 1, 1, 0])
    >>> m.at(0, 1)
    (1+0j)
    """

    __slots__ = ("_tensor",)
    __hash__ = None  # mutable through set()

    def __init__(
        self,
        rows: int,
        cols: int,
        data: MatrixData,
        dtype: torch.dtype | None = None,
    ) -> None:
        if rows < 1 or cols < 1:
            raise DimensionMismatch(
                f"matrix dimensions must be >= 1, got {rows}x{cols}"
            )
        flat = _to_flat_tensor(data, resolve_dtype(dtype))
        if flat.numel() != rows * cols:
            raise DimensionMismatch(
                f"data length {flat.numel()} does not match dimensions "
                f"{rows}x{cols} (expected {rows * cols})"
            )
        self._tensor = flat.reshape(rows, cols)

    @classmethod
    def _wrap(cls, tensor: torch.Tensor) -> ComplexMatrix:
        # Takes ownership of a freshly computed 2-D tensor without copying.
        obj = cls.__new__(cls)
        obj._tensor = tensor
        return obj

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Iterable[Scalar]] | np.ndarray | torch.Tensor,
        dtype: torch.dtype | None = None,
    ) -> ComplexMatrix:
        """
        Build a matrix from nested rows or a 2-D array.

        Raises
        ------
        DimensionMismatch
            If the rows are ragged, empty, or the array is not 2-D.
        """
        if isinstance(rows, (np.ndarray, torch.Tensor)):
            if rows.ndim != 2:
                raise DimensionMismatch(
                    f"expected a 2-D array, got shape {tuple(rows.shape)}"
                )
            n_rows, n_cols = rows.shape
            return cls(int(n_rows), int(n_cols), rows, dtype=dtype)

        materialized = [list(row) for row in rows]
        if not materialized or not materialized[0]:
            raise DimensionMismatch("matrix must have at least one row and column")
        n_cols = len(materialized[0])
        for i, row in enumerate(materialized):
            if len(row) != n_cols:
                raise DimensionMismatch(
                    f"row {i} has {len(row)} entries, expected {n_cols}"
                )
        flat = [value for row in materialized for value in row]
        return cls(len(materialized), n_cols, flat, dtype=dtype)

    @classmethod
    def from_tensor(cls, tensor: torch.Tensor) -> ComplexMatrix:
        """Copy a 2-D tensor into a matrix, promoting to a complex dtype."""
        if tensor.ndim != 2:
            raise DimensionMismatch(
                f"expected a 2-D tensor, got shape {tuple(tensor.shape)}"
            )
        dtype = tensor.dtype if tensor.is_complex() else default_dtype()
        return cls(tensor.shape[0], tensor.shape[1], tensor, dtype=dtype)

    @classmethod
    def identity(cls, size: int, dtype: torch.dtype | None = None) -> ComplexMatrix:
        """Return the ``size x size`` identity matrix."""
        if size < 1:
            raise DimensionMismatch(f"identity size must be >= 1, got {size}")
        return cls._wrap(torch.eye(size, dtype=resolve_dtype(dtype)))

    @property
    def rows(self) -> int:
        return self._tensor.shape[0]

    @property
    def cols(self) -> int:
        return self._tensor.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def dtype(self) -> torch.dtype:
        return self._tensor.dtype

    def dims(self) -> tuple[int, int]:
        """Return ``(rows, cols)``."""
        return self.shape

    def is_square(self) -> bool:
        return self.rows == self.cols

    @property
    def data(self) -> torch.Tensor:
        """A flat, row-major copy of the entries."""
        return self._tensor.reshape(-1).clone()

    def to_tensor(self) -> torch.Tensor:
        """A 2-D copy of the entries."""
        return self._tensor.clone()

    def to_numpy(self) -> np.ndarray:
        return self._tensor.numpy().copy()

    def tolist(self) -> list[list[complex]]:
        return self._tensor.tolist()

    def _check_index(self, row: int, col: int) -> None:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexOutOfRange(
                f"index ({row}, {col}) out of range for {self.rows}x{self.cols} matrix"
            )

    def at(self, row: int, col: int) -> complex:
        """
        Return the entry at ``(row, col)``.

        Raises
        ------
        IndexOutOfRange
            If either coordinate is outside the matrix. Negative indices
            are rejected rather than wrapped.
        """
        self._check_index(row, col)
        return complex(self._tensor[row, col].item())

    def set(self, row: int, col: int, value: Scalar) -> None:
        """Overwrite the entry at ``(row, col)``."""
        self._check_index(row, col)
        self._tensor[row, col] = complex(value)

    def multiply(self, other: ComplexMatrix) -> ComplexMatrix:
        """
        Matrix product ``self @ other``.

        Entry ``(i, j)`` of the result is ``sum_k self[i, k] * other[k, j]``.
        Neither operand is modified.

        Raises
        ------
        DimensionMismatch
            If ``self.cols != other.rows``.
        """
        if self.cols != other.rows:
            raise DimensionMismatch(
                f"cannot multiply {self.rows}x{self.cols} by "
                f"{other.rows}x{other.cols} matrix"
            )
        dtype = _result_dtype(self._tensor, other._tensor)
        product = torch.matmul(self._tensor.to(dtype), other._tensor.to(dtype))
        return ComplexMatrix._wrap(product)

    def __matmul__(self, other: ComplexMatrix) -> ComplexMatrix:
        if not isinstance(other, ComplexMatrix):
            return NotImplemented
        return self.multiply(other)

    def kron(self, other: ComplexMatrix) -> ComplexMatrix:
        """Kronecker product ``self ⊗ other``; see :func:`tensor_product`."""
        return tensor_product(self, other)

    def conjugate(self) -> ComplexMatrix:
        """Element-wise complex conjugate."""
        return ComplexMatrix._wrap(self._tensor.conj().resolve_conj())

    def conjugate_transpose(self) -> ComplexMatrix:
        """The adjoint ``M†``."""
        return ComplexMatrix._wrap(self._tensor.conj().T.resolve_conj().contiguous())

    def copy(self) -> ComplexMatrix:
        return ComplexMatrix._wrap(self._tensor.clone())

    def allclose(self, other: ComplexMatrix, atol: float = 1e-9) -> bool:
        """Shape-equal and entry-wise within ``atol``."""
        if self.shape != other.shape:
            return False
        dtype = _result_dtype(self._tensor, other._tensor)
        return bool(
            torch.allclose(
                self._tensor.to(dtype), other._tensor.to(dtype), atol=atol, rtol=0.0
            )
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComplexMatrix):
            return NotImplemented
        if self.shape != other.shape:
            return False
        dtype = _result_dtype(self._tensor, other._tensor)
        return bool(torch.equal(self._tensor.to(dtype), other._tensor.to(dtype)))

    def __repr__(self) -> str:
        body = "; ".join(
            ", ".join(f"{complex(v):.4g}" for v in row) for row in self._tensor.tolist()
        )
        return f"ComplexMatrix({self.rows}x{self.cols}, [{body}])"


def tensor_product(a: ComplexMatrix, b: ComplexMatrix) -> ComplexMatrix:
    """
    Kronecker product ``a ⊗ b``.

    The result has shape ``(a.rows * b.rows, a.cols * b.cols)`` and entry
    ``a[i, j] * b[k, l]`` at ``(i * b.rows + k, j * b.cols + l)``. The
    product is not commutative: ``a`` supplies the most significant index.
    """
    dtype = _result_dtype(a._tensor, b._tensor)
    return ComplexMatrix._wrap(torch.kron(a._tensor.to(dtype), b._tensor.to(dtype)))


def tensor_product_all(factors: Iterable[ComplexMatrix]) -> ComplexMatrix:
    """
    Left fold of :func:`tensor_product` over ``factors``.

    Raises
    ------
    ValueError
        If ``factors`` is empty.
    """
    result: ComplexMatrix | None = None
    for factor in factors:
        result = factor.copy() if result is None else tensor_product(result, factor)
    if result is None:
        raise ValueError("tensor_product_all needs at least one factor")
    return result


__all__ = ["ComplexMatrix", "tensor_product", "tensor_product_all"]
