"""
Quantum circuit representation.

Provides a builder-style API for constructing circuits as an append-only
list of operations. Execution order is insertion order; each operation also
carries a per-qubit step number used only to lay the circuit out in
diagrams.

Example
-------
>>> from tiny_qsim import Circuit
>>> qc = Circuit(2)
>>> qc.h(0).cnot(0, 1).measure_all()
>>> qc.num_operations()
4
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from tiny_qsim.exceptions import IndexOutOfRangeError
from tiny_qsim.gates import Gate


# ---------------------------------------------------------------------------
# Operation: a gate bound to qubits
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Operation:
    """A gate applied to specific qubits. The last qubit is the target."""
    gate: Gate
    qubits: tuple[int, ...]
    step: int = 0
    clbit: int | None = None  # measurements only

    @property
    def target(self) -> int:
        return self.qubits[-1]

    @property
    def controls(self) -> tuple[int, ...]:
        return self.qubits[:-1]

    @property
    def is_measurement(self) -> bool:
        return self.gate.is_measurement


# ---------------------------------------------------------------------------
# Step bookkeeping
# ---------------------------------------------------------------------------

class StepTracker:
    """
    Per-qubit layer counters for diagram layout.

    Each qubit holds the next free step. A multi-qubit operation takes the
    largest next step among its qubits, and afterwards every one of its
    qubits continues from there, so later gates on any of them are drawn to
    its right.
    """

    def __init__(self, n_qubits: int) -> None:
        self._next = [0] * n_qubits

    def assign(self, qubits: Sequence[int]) -> int:
        step = max(self._next[q] for q in qubits)
        for q in qubits:
            self._next[q] = step + 1
        return step

    def next_step(self, qubit: int) -> int:
        return self._next[qubit]

    @property
    def depth(self) -> int:
        return max(self._next, default=0)


# ---------------------------------------------------------------------------
# Circuit
# ---------------------------------------------------------------------------

class Circuit:
    """
    Quantum circuit over a fixed number of qubits.

    Parameters
    ----------
    n_qubits : int
        Number of quantum bits. Fixed for the life of the circuit.
    name : str, optional
        Circuit name for display.
    """

    def __init__(self, n_qubits: int, name: str = "circuit") -> None:
        if n_qubits < 0:
            raise ValueError(f"Qubit count must be non-negative, got {n_qubits}")
        self.n_qubits = n_qubits
        self.n_clbits = 0
        self.name = name
        self._operations: list[Operation] = []
        self._steps = StepTracker(n_qubits)

    # -- Properties ---------------------------------------------------------

    @property
    def operations(self) -> list[Operation]:
        """Operations in execution order."""
        return list(self._operations)

    @property
    def depth(self) -> int:
        """Number of step layers the circuit occupies."""
        return self._steps.depth

    def num_qubits(self) -> int:
        return self.n_qubits

    def num_operations(self) -> int:
        return len(self._operations)

    # -- Internal helpers ---------------------------------------------------

    def _validate_qubits(self, qubits: Sequence[int]) -> None:
        for q in qubits:
            if not 0 <= q < self.n_qubits:
                raise IndexOutOfRangeError("qubit", q, self.n_qubits)
        if len(set(qubits)) != len(qubits):
            raise ValueError(f"Duplicate qubits in {tuple(qubits)}")

    def _add(self, gate: Gate, qubits: tuple[int, ...], clbit: int | None = None) -> Circuit:
        """Validate, assign a step and append. Returns self for chaining."""
        self._validate_qubits(qubits)
        step = self._steps.assign(qubits)
        self._operations.append(Operation(gate=gate, qubits=qubits, step=step, clbit=clbit))
        return self

    # -- Generic append -----------------------------------------------------

    def append(self, gate: Gate, target: int) -> Circuit:
        """Append a single-qubit gate."""
        if gate.is_measurement:
            raise ValueError("Use measure() to add measurements")
        if gate.arity != 1:
            raise ValueError(
                f"Gate '{gate.name}' acts on {gate.arity} qubits; "
                "use append_controlled()"
            )
        return self._add(gate, (target,))

    def add_gate(self, gate: Gate, qubit: int) -> Circuit:
        """Alias for append."""
        return self.append(gate, qubit)

    def append_controlled(self, gate: Gate, control: int, target: int) -> Circuit:
        """Append a two-qubit gate acting on (control, target)."""
        if gate.arity != 2:
            raise ValueError(
                f"Gate '{gate.name}' acts on {gate.arity} qubit; use append()"
            )
        return self._add(gate, (control, target))

    # -- Single-qubit gates -------------------------------------------------

    def x(self, qubit: int) -> Circuit:
        """Pauli-X gate."""
        return self.append(Gate.x(), qubit)

    def y(self, qubit: int) -> Circuit:
        """Pauli-Y gate."""
        return self.append(Gate.y(), qubit)

    def z(self, qubit: int) -> Circuit:
        """Pauli-Z gate."""
        return self.append(Gate.z(), qubit)

    def h(self, qubit: int) -> Circuit:
        """Hadamard gate."""
        return self.append(Gate.h(), qubit)

    def s(self, qubit: int) -> Circuit:
        """S gate."""
        return self.append(Gate.s(), qubit)

    def t(self, qubit: int) -> Circuit:
        """T gate."""
        return self.append(Gate.t(), qubit)

    # -- Rotations ----------------------------------------------------------

    def rx(self, qubit: int, theta: float) -> Circuit:
        """Rotation around X-axis."""
        return self.append(Gate.rx(theta), qubit)

    def ry(self, qubit: int, theta: float) -> Circuit:
        """Rotation around Y-axis."""
        return self.append(Gate.ry(theta), qubit)

    def rz(self, qubit: int, theta: float) -> Circuit:
        """Rotation around Z-axis."""
        return self.append(Gate.rz(theta), qubit)

    # -- Two-qubit gates ----------------------------------------------------

    def cnot(self, control: int, target: int) -> Circuit:
        """Controlled-NOT gate."""
        return self.append_controlled(Gate.cnot(), control, target)

    def cx(self, control: int, target: int) -> Circuit:
        """Alias for cnot."""
        return self.cnot(control, target)

    def cz(self, control: int, target: int) -> Circuit:
        """Controlled-Z gate."""
        return self.append_controlled(Gate.cz(), control, target)

    def swap(self, q0: int, q1: int) -> Circuit:
        """SWAP gate."""
        return self.append_controlled(Gate.swap(), q0, q1)

    # -- Measurement --------------------------------------------------------

    def measure(self, qubit: int, clbit: int | None = None) -> Circuit:
        """
        Record a measurement of a qubit into a classical bit.

        The classical register grows to fit ``clbit``. Measurements do not
        collapse the simulated state; outcomes are sampled from the final
        state.

        Parameters
        ----------
        qubit : int
            Qubit to measure.
        clbit : int, optional
            Classical bit to store the result. Defaults to ``qubit``.
        """
        if clbit is None:
            clbit = qubit
        if clbit < 0:
            raise IndexOutOfRangeError("classical bit", clbit)
        self._add(Gate.measurement(), (qubit,), clbit=clbit)
        self.n_clbits = max(self.n_clbits, clbit + 1)
        return self

    def measure_all(self) -> Circuit:
        """Measure every qubit into the classical bit of the same index."""
        for q in range(self.n_qubits):
            self.measure(q, q)
        return self

    # -- Utility ------------------------------------------------------------

    def draw(self) -> str:
        """ASCII diagram of the circuit."""
        from tiny_qsim.visualization import draw_circuit

        return draw_circuit(self)

    def __len__(self) -> int:
        return len(self._operations)

    def __iter__(self):
        return iter(self._operations)

    def __str__(self) -> str:
        from tiny_qsim.visualization import describe_circuit

        return describe_circuit(self)

    def __repr__(self) -> str:
        return f"Circuit(n_qubits={self.n_qubits}, ops={len(self._operations)})"
