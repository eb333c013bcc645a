"""
Circuit simulator with shot sampling.

Example
-------
>>> from tiny_qsim import Circuit, Simulator
>>> qc = Circuit(2).h(0).cnot(0, 1)
>>> result = Simulator(seed=42).with_circuit(qc).run(1000)
>>> sorted(result.counts)
['00', '11']
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

import numpy as np
from numpy import ndarray

from tiny_qsim.backends.statevector import execute
from tiny_qsim.circuit import Circuit
from tiny_qsim.exceptions import EmptyCircuitError, InvalidStateError
from tiny_qsim.logging import get_logger

logger = get_logger(__name__)


class Backend(enum.Enum):
    """Available simulation backends."""

    STATEVECTOR = "statevector"


@dataclass
class SimulationResult:
    """
    Result of a sampled simulation.

    Attributes
    ----------
    shots : int
        Number of samples drawn.
    final_state : ndarray
        Final amplitude vector (complex128, length 2^n).
    counts : dict[str, int]
        Bitstring -> occurrences. Bitstrings are zero-padded to the qubit
        count with the highest qubit leftmost. Counts sum to ``shots``.
    """

    shots: int
    final_state: ndarray
    counts: dict[str, int] = field(default_factory=dict)

    def probabilities(self) -> ndarray:
        """Probability of every basis state, from the final state."""
        return np.abs(self.final_state) ** 2

    def most_frequent(self) -> str:
        """Return the most frequently sampled bitstring."""
        return max(self.counts, key=self.counts.get)

    def probability(self, bitstring: str) -> float:
        """Observed frequency of ``bitstring``."""
        if not self.shots:
            return 0.0
        return self.counts.get(bitstring, 0) / self.shots


def format_bitstring(index: int, n_qubits: int) -> str:
    """Zero-padded binary of ``index``; qubit n-1 is the leftmost character."""
    if n_qubits == 0:
        return ""
    return format(index, f"0{n_qubits}b")


class Simulator:
    """
    Builder-style simulator that executes an attached circuit.

    Parameters
    ----------
    name : str
        Simulator name.
    backend : Backend
        Simulation backend. Only :attr:`Backend.STATEVECTOR` exists.
    circuit : Circuit, optional
        Circuit to run. Can be attached later with :meth:`with_circuit`.
    seed : int, optional
        Seed for the sampling generator.
    rng : numpy.random.Generator, optional
        Generator to sample with. Takes precedence over ``seed``.

    Example
    -------
    >>> sim = Simulator().with_name("bell").with_circuit(qc)
    >>> sim.run(1024).counts
    {'00': 515, '11': 509}
    """

    def __init__(
        self,
        name: str = "Simulator",
        backend: Backend = Backend.STATEVECTOR,
        circuit: Circuit | None = None,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.name = name
        self.backend = Backend(backend)
        self.circuit = circuit
        self._rng = rng if rng is not None else np.random.default_rng(seed)

    # -- Builder ------------------------------------------------------------

    def with_name(self, name: str) -> Simulator:
        self.name = name
        return self

    def with_backend(self, backend: Backend) -> Simulator:
        self.backend = Backend(backend)
        return self

    def with_circuit(self, circuit: Circuit) -> Simulator:
        self.circuit = circuit
        return self

    def set_name(self, name: str) -> None:
        self.name = name

    def set_circuit(self, circuit: Circuit) -> None:
        self.circuit = circuit

    # -- Execution ----------------------------------------------------------

    def run(self, shots: int = 1024) -> SimulationResult:
        """
        Execute the attached circuit and sample ``shots`` outcomes.

        Raises
        ------
        EmptyCircuitError
            If no circuit has been attached.
        ValueError
            If ``shots`` is not a non-negative integer.
        InvalidStateError
            If the final state has zero norm and cannot be sampled.
        """
        if self.circuit is None:
            raise EmptyCircuitError()
        if isinstance(shots, bool) or not isinstance(shots, (int, np.integer)):
            raise ValueError(f"shots must be an integer, got {shots!r}")
        if shots < 0:
            raise ValueError(f"shots must be non-negative, got {shots}")

        circuit = self.circuit
        final_state = execute(circuit)
        counts = self._sample(final_state, circuit.n_qubits, shots)
        logger.debug(
            "%s: %d shot(s) on %d qubit(s), %d distinct outcome(s)",
            self.name, shots, circuit.n_qubits, len(counts),
        )
        return SimulationResult(shots=shots, final_state=final_state, counts=counts)

    def _sample(self, state: ndarray, n: int, shots: int) -> dict[str, int]:
        """Sample bitstring counts from a statevector."""
        if shots == 0:
            return {}
        probs = np.abs(state) ** 2
        total = probs.sum()
        if not np.isfinite(total) or total <= 0.0:
            raise InvalidStateError(
                f"Cannot sample a state with total probability {total:.3g}; "
                "check custom gates for non-unitary matrices"
            )
        # Normalize to absorb amplitude rounding
        probs /= total
        outcomes = self._rng.choice(probs.size, size=int(shots), p=probs)
        unique, counts_arr = np.unique(outcomes, return_counts=True)
        return {
            format_bitstring(int(k), n): int(v)
            for k, v in zip(unique.tolist(), counts_arr.tolist())
        }

    def __repr__(self) -> str:
        return (
            f"Simulator(name={self.name!r}, backend={self.backend.value}, "
            f"circuit={self.circuit!r})"
        )
