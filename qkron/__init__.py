"""qkron - a dense, Kronecker-product state-vector simulator for small qubit registers."""

__version__ = "0.1.0"

from . import config
from .diagnostics import (
    assert_normalized,
    debug_context,
    fidelity,
    is_debug_enabled,
    is_unitary,
    set_debug_enabled,
    state_norm,
)
from .engine import apply, apply_multi_qubit_gate, apply_sequence, expand_gate
from .errors import (
    DimensionMismatch,
    IndexOutOfRange,
    InvalidStateVector,
    QuantumError,
    UnnormalizedState,
)
from .gates import (
    CNOT,
    CX,
    HADAMARD,
    IDENTITY,
    PAULI_X,
    PAULI_Y,
    PAULI_Z,
    STANDARD_GATES,
    SWAP,
    Gate,
    H,
    I,
    S,
    T,
    X,
    Y,
    Z,
    get_gate,
)
from .linalg import ComplexMatrix, tensor_product, tensor_product_all
from .logging import configure_logging, get_logger, set_log_level
from .state import QuantumState, custom_state, zero_state

__all__ = [
    "__version__",
    "config",
    # Matrices
    "ComplexMatrix",
    "tensor_product",
    "tensor_product_all",
    # State
    "QuantumState",
    "zero_state",
    "custom_state",
    # Gates
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
    # Engine
    "expand_gate",
    "apply",
    "apply_multi_qubit_gate",
    "apply_sequence",
    # Errors
    "QuantumError",
    "DimensionMismatch",
    "IndexOutOfRange",
    "InvalidStateVector",
    "UnnormalizedState",
    # Diagnostics
    "state_norm",
    "assert_normalized",
    "is_unitary",
    "fidelity",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
]
