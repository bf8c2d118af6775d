"""Gate application engine."""

from .apply import apply, apply_multi_qubit_gate, apply_sequence, expand_gate

__all__ = ["expand_gate", "apply", "apply_multi_qubit_gate", "apply_sequence"]
