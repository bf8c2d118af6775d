"""Core diagnostic functions for state vectors and gate matrices."""

from __future__ import annotations

import math
from typing import Optional

import torch

from ..config import tolerance_for
from ..errors import DimensionMismatch, UnnormalizedState
from ..linalg.matrix import ComplexMatrix


def state_norm(vector: torch.Tensor) -> float:
    """
    Compute the L2 norm ``sqrt(sum |a|^2)`` of a state vector.

    Parameters
    ----------
    vector:
        1-D complex tensor of amplitudes.

    Returns
    -------
    float
        The norm as a Python float.

    Raises
    ------
    ValueError
        If ``vector`` is not 1-D.
    """
    if vector.dim() != 1:
        raise ValueError(
            f"state_norm expects a 1-D tensor, got shape {tuple(vector.shape)}"
        )
    # Accumulate in double precision whatever the storage dtype.
    magnitudes = vector.to(torch.complex128).abs()
    return float(torch.sqrt((magnitudes * magnitudes).sum()).item())


def assert_normalized(
    vector: torch.Tensor,
    atol: Optional[float] = None,
) -> None:
    """
    Assert that ``sum |a|^2`` is 1 within ``atol``.

    Parameters
    ----------
    vector:
        1-D complex tensor of amplitudes.
    atol:
        Absolute tolerance on the total probability. Defaults to
        :func:`qkron.config.normalization_atol`. Either way it is raised
        to the rounding floor of the vector's dtype, see
        :func:`qkron.config.tolerance_for`.

    Raises
    ------
    UnnormalizedState
        If the total probability is non-finite or differs from 1 by
        ``atol`` or more.
    """
    atol = tolerance_for(vector.dtype, vector.numel(), atol)
    total = state_norm(vector) ** 2
    if not math.isfinite(total):
        raise UnnormalizedState("State norm contains non-finite values.")
    if not abs(total - 1.0) < atol:
        raise UnnormalizedState(
            f"State is not normalized within tolerance {atol}: "
            f"sum |a|^2 = {total!r}"
        )


def is_unitary(matrix: ComplexMatrix, atol: float = 1e-9) -> bool:
    """
    Check whether ``M†M == I`` within ``atol``.

    Non-square matrices are never unitary.
    """
    if not matrix.is_square():
        return False
    product = matrix.conjugate_transpose().multiply(matrix)
    return product.allclose(ComplexMatrix.identity(matrix.rows, dtype=product.dtype), atol=atol)


def fidelity(state_a: torch.Tensor, state_b: torch.Tensor) -> float:
    """
    Fidelity ``|<a|b>|^2`` between two pure state vectors.

    Raises
    ------
    DimensionMismatch
        If the vectors differ in shape.
    """
    if state_a.shape != state_b.shape:
        raise DimensionMismatch(
            f"fidelity expects vectors with the same shape, got "
            f"{tuple(state_a.shape)} and {tuple(state_b.shape)}"
        )
    dtype = torch.promote_types(state_a.dtype, state_b.dtype)
    inner = (state_a.to(dtype).conj() * state_b.to(dtype)).sum()
    return float(inner.abs().item() ** 2)
