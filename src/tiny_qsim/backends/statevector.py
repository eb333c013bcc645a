"""
Statevector execution engine.

Gates are applied in place by pairing (or grouping) amplitudes whose basis
indices differ only in the bits of the qubits the gate acts on. The full
2^n x 2^n operator is never built, so each gate costs O(2^n).

Bit convention: bit k of a basis index is qubit k. Index 1 (binary ``01``
for two qubits) is qubit 0 in |1>, qubit 1 in |0>.

Memory: ~16 bytes * 2^n (complex128) per state.
    20 qubits = 16 MB, 25 qubits = 512 MB.
"""

from __future__ import annotations

import numpy as np
from numpy import ndarray

from tiny_qsim.circuit import Circuit, Operation
from tiny_qsim.exceptions import DimensionMismatchError, MalformedGateError
from tiny_qsim.gates import GateKind, is_unitary
from tiny_qsim.logging import get_logger

logger = get_logger(__name__)

ROUNDING_TOLERANCE = 1e-10
"""Distance within which an amplitude part snaps to a canonical value."""

ROUNDING_DECIMALS = 8
"""Decimal places kept for amplitude parts that do not snap."""

NORM_TOLERANCE = 1e-9
"""Allowed deviation of the squared norm from 1 for a valid state."""

_CANONICAL_VALUES = (0.0, 0.5, -0.5, 1.0, -1.0)


# ---------------------------------------------------------------------------
# State preparation
# ---------------------------------------------------------------------------

def zero_state(n_qubits: int) -> ndarray:
    """|0...0> as a complex128 vector of length 2^n."""
    state = np.zeros(2**n_qubits, dtype=np.complex128)
    state[0] = 1.0
    return state


def _basis_indices(n_qubits: int) -> ndarray:
    return np.arange(2**n_qubits, dtype=np.int64)


# ---------------------------------------------------------------------------
# Gate application
# ---------------------------------------------------------------------------

def apply_single_qubit_gate(state: ndarray, gate: ndarray, target: int) -> ndarray:
    """
    Apply a 2x2 gate to ``target`` in place.

    Every index i with bit ``target`` clear is paired with
    j = i | (1 << target); (state[i], state[j]) is left-multiplied by
    ``gate`` and written back.
    """
    n = state.size.bit_length() - 1
    bit = 1 << target
    idx = _basis_indices(n)
    i0 = idx[(idx & bit) == 0]
    i1 = i0 | bit

    a0 = state[i0]
    a1 = state[i1]
    state[i0] = gate[0, 0] * a0 + gate[0, 1] * a1
    state[i1] = gate[1, 0] * a0 + gate[1, 1] * a1
    return state


def apply_cnot(state: ndarray, control: int, target: int) -> ndarray:
    """
    Apply CNOT in place by permutation.

    Only indices with the control bit set and the target bit clear are
    enumerated, so every swapped pair is visited exactly once.
    """
    n = state.size.bit_length() - 1
    c_bit = 1 << control
    t_bit = 1 << target
    idx = _basis_indices(n)
    i0 = idx[((idx & c_bit) != 0) & ((idx & t_bit) == 0)]
    i1 = i0 | t_bit
    state[i0], state[i1] = state[i1], state[i0]
    return state


def apply_two_qubit_gate(
    state: ndarray, gate: ndarray, control: int, target: int
) -> ndarray:
    """
    Apply a 4x4 gate to (control, target) in place.

    Indices are grouped in fours that share every bit except the two gate
    bits. Each group is reached once through its base index (both gate bits
    clear). Within a group the local index is ``2 * control_bit +
    target_bit``, matching the row order of :data:`tiny_qsim.gates.CNOT`.
    """
    n = state.size.bit_length() - 1
    c_bit = 1 << control
    t_bit = 1 << target
    idx = _basis_indices(n)
    base = idx[(idx & (c_bit | t_bit)) == 0]
    group = np.stack([base, base | t_bit, base | c_bit, base | c_bit | t_bit])

    amplitudes = state[group]  # shape (4, 2^(n-2))
    state[group] = gate @ amplitudes
    return state


# ---------------------------------------------------------------------------
# Numerical cleanup
# ---------------------------------------------------------------------------

def round_if_close(values: ndarray, tol: float = ROUNDING_TOLERANCE) -> ndarray:
    """
    Snap real values near 0, ±0.5 or ±1 to them; round the rest.

    Values within ``tol`` of a canonical value become exactly that value,
    everything else is rounded to :data:`ROUNDING_DECIMALS` places.
    """
    values = np.asarray(values, dtype=np.float64)
    out = np.round(values, ROUNDING_DECIMALS)
    for candidate in _CANONICAL_VALUES:
        out = np.where(np.abs(values - candidate) < tol, candidate, out)
    return out


def clean_state(state: ndarray, tol: float = ROUNDING_TOLERANCE) -> ndarray:
    """Apply :func:`round_if_close` to real and imaginary parts separately."""
    return (round_if_close(state.real, tol) + 1j * round_if_close(state.imag, tol)).astype(
        np.complex128
    )


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------

def _checked_matrix(op: Operation) -> ndarray:
    matrix = op.gate.matrix()
    dim = 2 ** len(op.qubits)
    if matrix.shape != (dim, dim):
        raise MalformedGateError(op.gate.name, matrix.shape, dim)
    return matrix


def apply_operation(state: ndarray, op: Operation) -> ndarray:
    """Apply one circuit operation to ``state`` in place."""
    if op.is_measurement:
        return state

    matrix = _checked_matrix(op)
    if len(op.qubits) == 1:
        return apply_single_qubit_gate(state, matrix, op.target)
    control, target = op.qubits
    if op.gate.kind is GateKind.CNOT:
        return apply_cnot(state, control, target)
    return apply_two_qubit_gate(state, matrix, control, target)


def execute(
    circuit: Circuit,
    initial_state: ndarray | None = None,
    clean: bool = True,
) -> ndarray:
    """
    Run a circuit and return the final amplitude vector.

    Parameters
    ----------
    circuit : Circuit
        Circuit to execute. It is only read.
    initial_state : ndarray, optional
        Starting amplitudes of length 2^n. Defaults to |0...0>. Copied,
        never modified.
    clean : bool
        Snap/round amplitudes afterwards (see :func:`round_if_close`).

    Returns
    -------
    ndarray
        complex128 vector of length 2^n, indexed with bit k = qubit k.

    Raises
    ------
    DimensionMismatchError
        If ``initial_state`` has the wrong length.
    MalformedGateError
        If a custom gate matrix has the wrong shape.
    """
    n = circuit.n_qubits
    dim = 2**n

    if initial_state is None:
        state = zero_state(n)
    else:
        state = np.array(initial_state, dtype=np.complex128).reshape(-1)
        if state.size != dim:
            raise DimensionMismatchError(dim, state.size)

    operations = circuit.operations
    logger.debug("Executing %d operation(s) on %d qubit(s)", len(operations), n)

    warned: set[int] = set()
    for op in operations:
        if op.gate.kind is GateKind.CUSTOM and id(op.gate) not in warned:
            warned.add(id(op.gate))
            if not is_unitary(op.gate.matrix()):
                logger.warning(
                    "Custom gate '%s' is not unitary; the state will not stay normalised",
                    op.gate.name,
                )
        apply_operation(state, op)

    if clean:
        state = clean_state(state)
    return state


def norm_squared(state: ndarray) -> float:
    """Sum of squared amplitude magnitudes."""
    return float(np.sum(np.abs(state) ** 2))


def is_normalized(state: ndarray, tol: float = NORM_TOLERANCE) -> bool:
    """True if ``state`` has unit norm within ``tol``."""
    return abs(norm_squared(state) - 1.0) <= tol
