"""Gate application engine.

A local gate is promoted to an operator on the whole register by taking
the Kronecker product of one factor per qubit position, left to right:
the gate matrix where it acts and a 2x2 identity everywhere else. Qubit 0
is the leftmost factor, i.e. the most significant bit of the basis index.
The full ``2**n x 2**n`` operator is then multiplied into the state
vector.

Cost is O(4**n) memory and O(8**n) work per application, which limits
this engine to small registers.

Every function here computes the complete new vector before the state
adopts it, so a failed call never leaves a half-updated state behind.
"""

from __future__ import annotations

import numbers
from collections.abc import Iterable, Sequence
from typing import Optional, Union

import torch

from ..diagnostics import assert_normalized, is_debug_enabled
from ..errors import DimensionMismatch, IndexOutOfRange
from ..gates.gate import Gate
from ..gates.standard import get_gate
from ..linalg.matrix import ComplexMatrix, tensor_product_all
from ..logging import get_logger
from ..state.statevector import QuantumState

logger = get_logger(__name__)

Target = Union[int, Sequence[int]]
GateLike = Union[Gate, str]


def _resolve(gate: GateLike) -> Gate:
    return get_gate(gate) if isinstance(gate, str) else gate


def _positions(gate: Gate, num_qubits: int, target: Target) -> list[int]:
    """Qubit positions covered by ``gate`` placed at ``target``."""
    if isinstance(target, numbers.Integral):
        target = int(target)
        last = target + gate.num_qubits - 1
        if target < 0 or last >= num_qubits:
            raise IndexOutOfRange(
                f"{gate.num_qubits}-qubit gate at qubit {target} does not fit "
                f"in a {num_qubits}-qubit register"
            )
        return list(range(target, last + 1))

    positions = [int(q) for q in target]
    if gate.num_qubits != 1:
        raise ValueError(
            f"a list of targets is only supported for single-qubit gates, "
            f"got a {gate.num_qubits}-qubit gate"
        )
    if not positions:
        raise ValueError("target list must not be empty")
    if len(set(positions)) != len(positions):
        raise ValueError(f"duplicate qubit positions in {positions}")
    for q in positions:
        if q < 0 or q >= num_qubits:
            raise IndexOutOfRange(
                f"qubit index {q} out of range [0, {num_qubits})"
            )
    return positions


def expand_gate(gate: GateLike, num_qubits: int, target: Target = 0) -> ComplexMatrix:
    """
    Build the full-register operator for ``gate`` acting at ``target``.

    Parameters
    ----------
    gate:
        A :class:`Gate` or the name of a standard gate.
    num_qubits:
        Register size ``n``.
    target:
        For a k-qubit gate, the first of the ``k`` consecutive positions it
        occupies. For a single-qubit gate, also a list of distinct
        positions; the gate is then placed at each of them.

    Returns
    -------
    ComplexMatrix
        ``2**n x 2**n`` operator.

    Raises
    ------
    IndexOutOfRange
        If any covered position lies outside ``[0, num_qubits)``.
    ValueError
        For duplicate or empty target lists, or a target list with a
        multi-qubit gate.
    """
    gate = _resolve(gate)
    if num_qubits < 1:
        raise ValueError(f"num_qubits must be >= 1, got {num_qubits}")
    positions = _positions(gate, num_qubits, target)

    local = gate.matrix
    identity = ComplexMatrix.identity(2, dtype=local.dtype)
    if isinstance(target, numbers.Integral):
        start = positions[0]
        trailing = num_qubits - start - gate.num_qubits
        factors = [identity] * start + [local] + [identity] * trailing
    else:
        covered = set(positions)
        factors = [local if q in covered else identity for q in range(num_qubits)]

    logger.debug(
        "expanding %r at %s into a %d-qubit operator", gate, positions, num_qubits
    )
    return tensor_product_all(factors)


def _multiply_into(operator: ComplexMatrix, state: QuantumState) -> torch.Tensor:
    column = operator.multiply(state.as_column())
    new_vector = column.data.to(state.dtype)
    if is_debug_enabled():
        assert_normalized(new_vector)
    return new_vector


def apply(gate: GateLike, state: QuantumState, target: Target = 0) -> QuantumState:
    """
    Apply ``gate`` to ``state`` at ``target``, replacing the state vector.

    A one-qubit register is multiplied by the 2x2 matrix directly. Larger
    registers go through :func:`expand_gate` first.

    Returns
    -------
    QuantumState
        The same ``state`` object, for chaining.

    Raises
    ------
    DimensionMismatch
        If a multi-qubit gate is applied to a one-qubit register.
    IndexOutOfRange
        If the target does not fit in the register.
    UnnormalizedState
        In debug mode, if the result is not normalized. The state is left
        unchanged.
    """
    gate = _resolve(gate)
    if state.num_qubits == 1:
        if gate.dimension != 2:
            raise DimensionMismatch(
                f"{gate.num_qubits}-qubit gate cannot act on a 1-qubit register"
            )
        _positions(gate, 1, target)
        operator = gate.matrix
    else:
        operator = expand_gate(gate, state.num_qubits, target)

    state._adopt(_multiply_into(operator, state))
    return state


def apply_multi_qubit_gate(gate: GateLike, state: QuantumState) -> QuantumState:
    """
    Apply a gate that already spans the whole register.

    Raises
    ------
    DimensionMismatch
        If the gate is not ``2**n x 2**n`` for the state's ``n``.
    """
    gate = _resolve(gate)
    if gate.dimension != state.dimension:
        raise DimensionMismatch(
            f"gate dimension {gate.dimension} does not match state dimension "
            f"{state.dimension}"
        )
    logger.debug("applying %r to the full register", gate)
    state._adopt(_multiply_into(gate.matrix, state))
    return state


def apply_sequence(
    state: QuantumState,
    operations: Iterable[tuple[GateLike, Optional[Target]]],
) -> QuantumState:
    """
    Apply ``(gate, target)`` pairs in order.

    A ``None`` target applies the gate to the whole register with
    :func:`apply_multi_qubit_gate`. Stops at the first failing operation;
    operations before it remain applied.
    """
    for gate, target in operations:
        if target is None:
            apply_multi_qubit_gate(gate, state)
        else:
            apply(gate, state, target)
    return state


__all__ = ["expand_gate", "apply", "apply_multi_qubit_gate", "apply_sequence"]
