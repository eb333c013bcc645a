"""
Text rendering of circuits.

Example output for ``Circuit(2).h(0).cnot(0, 1).measure_all()``::

    q0: ─H──●──M─
            │
    q1: ────⊕──M─
"""

from __future__ import annotations

from tiny_qsim.circuit import Circuit
from tiny_qsim.gates import GateKind

WIRE = "───"
BLANK = "   "
VERTICAL = " │ "
CROSSING = "─┼─"
CONTROL = "─●─"


class CircuitDrawer:
    """
    Lay a circuit out on a grid of 3-character cells.

    Qubit q is drawn on row 2q, with spacer rows between qubits for the
    vertical connectors of two-qubit gates. Each operation goes in the
    column given by its step number.
    """

    def __init__(self, circuit: Circuit) -> None:
        self.circuit = circuit
        self.n_rows = max(2 * circuit.n_qubits - 1, 0)
        self.n_cols = circuit.depth
        self.grid = [
            [WIRE if r % 2 == 0 else BLANK for _ in range(self.n_cols)]
            for r in range(self.n_rows)
        ]

    def _place_connector(self, col: int, q0: int, q1: int) -> None:
        # Gates drawn in the same column on a middle qubit stay visible
        for r in range(2 * min(q0, q1) + 1, 2 * max(q0, q1)):
            if r % 2 == 0:
                if self.grid[r][col] == WIRE:
                    self.grid[r][col] = CROSSING
            elif self.grid[r][col] == BLANK:
                self.grid[r][col] = VERTICAL

    def _place_gate_cell(self, row: int, col: int, cell: str) -> None:
        if self.grid[row][col] in (WIRE, CROSSING):
            self.grid[row][col] = cell

    def _place(self, op) -> None:
        col = op.step
        target_row = 2 * op.target
        if len(op.qubits) == 2:
            control = op.qubits[0]
            self._place_connector(col, control, op.target)
            if op.gate.kind is GateKind.SWAP:
                self._place_gate_cell(2 * control, col, op.gate.display_symbol)
            else:
                self._place_gate_cell(2 * control, col, CONTROL)
        self._place_gate_cell(target_row, col, op.gate.display_symbol)

    def draw(self) -> str:
        """Generate the ASCII diagram."""
        n = self.circuit.n_qubits
        if n == 0:
            return ""
        width = len(f"q{n - 1}: ")
        if self.n_cols == 0:
            return "\n".join(f"q{q}: ".ljust(width) + WIRE for q in range(n))

        for op in self.circuit.operations:
            self._place(op)

        lines = []
        for r, row in enumerate(self.grid):
            if r % 2 == 0:
                lines.append(f"q{r // 2}: ".ljust(width) + "".join(row))
            else:
                lines.append((" " * width + "".join(row)).rstrip())
        return "\n".join(lines)


def draw_circuit(circuit: Circuit) -> str:
    """ASCII circuit diagram."""
    return CircuitDrawer(circuit).draw()


def describe_circuit(circuit: Circuit) -> str:
    """Numbered listing of the circuit's operations with their steps."""
    lines = [
        f"Quantum Circuit ({circuit.n_qubits} qubits, "
        f"{circuit.num_operations()} operations):"
    ]
    for i, op in enumerate(circuit.operations, start=1):
        if op.is_measurement:
            detail = f"on qubit {op.target} into bit {op.clbit}"
        elif op.controls:
            detail = f"on qubit {op.target} by {op.controls[0]}"
        else:
            detail = f"on qubit {op.target}"
        lines.append(f"  {i}. {op.gate} {detail} (Step: {op.step})")
    return "\n".join(lines)
