"""Standard quantum gates.

Every gate here is built once at import time and never modified
afterwards, so the constants can be shared across threads. Two-qubit
matrices are ordered ``|00>, |01>, |10>, |11>`` with the first qubit as
the most significant bit; for ``CNOT`` the first qubit is the control.
"""

from __future__ import annotations

import cmath
import math
from types import MappingProxyType
from typing import Mapping

from .gate import Gate

_SQRT2_INV = 1.0 / math.sqrt(2.0)

IDENTITY = Gate.from_rows(
    [[1, 0],
     [0, 1]],
    name="I",
)

PAULI_X = Gate.from_rows(
    [[0, 1],
     [1, 0]],
    name="X",
)

PAULI_Y = Gate.from_rows(
    [[0, -1j],
     [1j, 0]],
    name="Y",
)

PAULI_Z = Gate.from_rows(
    [[1, 0],
     [0, -1]],
    name="Z",
)

HADAMARD = Gate.from_rows(
    [[_SQRT2_INV, _SQRT2_INV],
     [_SQRT2_INV, -_SQRT2_INV]],
    name="H",
)

# Phase gate, √Z.
S = Gate.from_rows(
    [[1, 0],
     [0, 1j]],
    name="S",
)

# π/8 gate, √S.
T = Gate.from_rows(
    [[1, 0],
     [0, cmath.exp(1j * math.pi / 4.0)]],
    name="T",
)

CNOT = Gate.from_rows(
    [[1, 0, 0, 0],
     [0, 1, 0, 0],
     [0, 0, 0, 1],
     [0, 0, 1, 0]],
    name="CNOT",
)

SWAP = Gate.from_rows(
    [[1, 0, 0, 0],
     [0, 0, 1, 0],
     [0, 1, 0, 0],
     [0, 0, 0, 1]],
    name="SWAP",
)

STANDARD_GATES: Mapping[str, Gate] = MappingProxyType(
    {
        "I": IDENTITY,
        "IDENTITY": IDENTITY,
        "X": PAULI_X,
        "PAULI_X": PAULI_X,
        "Y": PAULI_Y,
        "PAULI_Y": PAULI_Y,
        "Z": PAULI_Z,
        "PAULI_Z": PAULI_Z,
        "H": HADAMARD,
        "HADAMARD": HADAMARD,
        "S": S,
        "T": T,
        "CNOT": CNOT,
        "CX": CNOT,
        "SWAP": SWAP,
    }
)


def get_gate(name: str) -> Gate:
    """
    Look up a standard gate by name (case-insensitive).

    Raises
    ------
    KeyError
        If the name is unknown.
    """
    key = name.strip().upper()
    try:
        return STANDARD_GATES[key]
    except KeyError:
        raise KeyError(
            f"Unknown gate {name!r}. Known gates: {sorted(STANDARD_GATES)}"
        ) from None


# Short aliases
I = IDENTITY
X = PAULI_X
Y = PAULI_Y
Z = PAULI_Z
H = HADAMARD
CX = CNOT

__all__ = [
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
