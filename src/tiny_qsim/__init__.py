"""
tiny-qsim: a small statevector simulator for quantum circuits.

Features:
- Fluent API: Circuit(2).h(0).cnot(0, 1).measure_all()
- O(2^n) per-gate statevector engine, no full operator matrices
- Seedable shot sampling with bitstring histograms
- Custom gates from arbitrary 2x2 / 4x4 matrices
- ASCII circuit diagrams

Quick Start:
    >>> from tiny_qsim import Circuit, Simulator, execute
    >>> qc = Circuit(2).h(0).cnot(0, 1)
    >>> execute(qc)  # [0.70710678, 0, 0, 0.70710678]
    >>> result = Simulator(seed=7).with_circuit(qc).run(1000)
    >>> print(result.counts)  # {'00': ~500, '11': ~500}
"""
__version__ = "0.1.0"

from tiny_qsim import gates
from tiny_qsim.backends.statevector import execute
from tiny_qsim.circuit import Circuit, Operation
from tiny_qsim.exceptions import (
    DimensionMismatchError,
    EmptyCircuitError,
    IndexOutOfRangeError,
    InvalidStateError,
    MalformedGateError,
    QSimError,
)
from tiny_qsim.gates import Gate, GateKind
from tiny_qsim.qubit import Qubit
from tiny_qsim.simulator import Backend, SimulationResult, Simulator
from tiny_qsim.visualization import draw_circuit

__all__ = [
    # Core
    "Circuit",
    "Operation",
    "Gate",
    "GateKind",
    "Qubit",
    "gates",
    # Execution
    "execute",
    "Simulator",
    "Backend",
    "SimulationResult",
    # Display
    "draw_circuit",
    # Errors
    "QSimError",
    "IndexOutOfRangeError",
    "DimensionMismatchError",
    "EmptyCircuitError",
    "MalformedGateError",
    "InvalidStateError",
]
