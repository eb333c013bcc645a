"""A single qubit held as a two-amplitude state."""

from __future__ import annotations

import numpy as np
from numpy import ndarray

from tiny_qsim.gates import Gate

_NORM_TOL = 1e-10


class Qubit:
    """
    One qubit, |psi> = alpha|0> + beta|1>.

    Parameters
    ----------
    alpha, beta : complex
        Amplitudes of |0> and |1>. Must satisfy |alpha|^2 + |beta|^2 = 1.

    Example
    -------
    >>> q = Qubit.zero()
    >>> q.apply(Gate.h())
    >>> round(q.probability_one(), 3)
    0.5
    """

    def __init__(self, alpha: complex, beta: complex) -> None:
        norm = abs(alpha) ** 2 + abs(beta) ** 2
        if abs(norm - 1.0) > _NORM_TOL:
            raise ValueError(f"State vector must be normalized, got norm {norm:.6g}")
        self._state = np.array([alpha, beta], dtype=np.complex128)

    @classmethod
    def zero(cls) -> Qubit:
        """|0> state."""
        return cls(1.0, 0.0)

    @classmethod
    def one(cls) -> Qubit:
        """|1> state."""
        return cls(0.0, 1.0)

    def probability_zero(self) -> float:
        return float(abs(self._state[0]) ** 2)

    def probability_one(self) -> float:
        return float(abs(self._state[1]) ** 2)

    def state_vector(self) -> ndarray:
        return self._state.copy()

    def apply(self, gate: Gate) -> Qubit:
        """Left-multiply the state by a single-qubit gate matrix."""
        if gate.is_measurement or gate.arity != 1:
            raise ValueError(f"Cannot apply '{gate.name}' to a single qubit")
        self._state = gate.matrix() @ self._state
        return self

    def is_basis_state(self) -> bool:
        """True for exactly |0> or |1>."""
        return bool(
            np.array_equal(self._state, [1, 0]) or np.array_equal(self._state, [0, 1])
        )

    def __str__(self) -> str:
        if self.probability_zero() == 1.0:
            return "|ψ⟩ = |0⟩"
        if self.probability_one() == 1.0:
            return "|ψ⟩ = |1⟩"
        alpha, beta = self._state
        return f"|ψ⟩ = {alpha:.4f}|0⟩ + {beta:.4f}|1⟩"

    def __repr__(self) -> str:
        alpha, beta = self._state
        return f"Qubit(alpha={alpha!r}, beta={beta!r})"
