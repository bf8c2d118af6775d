"""Diagnostics and debugging utilities for qkron.

The debug-mode switches live in :mod:`qkron.config` next to the other
runtime settings and are re-exported here.
"""

from ..config import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)
from .core import (
    assert_normalized,
    fidelity,
    is_unitary,
    state_norm,
)

__all__ = [
    "state_norm",
    "assert_normalized",
    "is_unitary",
    "fidelity",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
