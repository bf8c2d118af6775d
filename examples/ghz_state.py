"""GHZ example: entangle three qubits and print the basis probabilities.

Prepares (|000> + |111>)/sqrt(2) with one Hadamard and two CNOTs, then
undoes the preparation to show the register returns to |000>.
"""

from __future__ import annotations

import qkron as qk


def main() -> None:
    """Prepare a GHZ state and print its distribution."""
    n_qubits = 3
    state = qk.QuantumState.zero(n_qubits)

    preparation = [(qk.HADAMARD, 0), (qk.CNOT, 0), (qk.CNOT, 1)]
    with qk.debug_context(True):
        qk.apply_sequence(state, preparation)

    print("GHZ state probabilities:")
    for index, prob in enumerate(state.probabilities().tolist()):
        print(f"  |{index:0{n_qubits}b}>: {prob:.4f}")

    # Every gate used here is its own inverse
    qk.apply_sequence(state, reversed(preparation))
    print(f"Probability of |000> after uncompute: {state.probability_of(0):.4f}")


if __name__ == "__main__":
    main()
