"""Tests for Circuit class."""

import numpy as np
import pytest

from tiny_qsim.circuit import Circuit, Operation, StepTracker
from tiny_qsim.exceptions import IndexOutOfRangeError, QSimError
from tiny_qsim.gates import Gate, GateKind


# ---------------------------------------------------------------------------
# Basic construction
# ---------------------------------------------------------------------------

def test_empty_circuit():
    qc = Circuit(3)
    assert qc.num_qubits() == 3
    assert qc.n_clbits == 0
    assert qc.num_operations() == 0
    assert qc.depth == 0
    assert len(qc) == 0


def test_zero_qubit_circuit_allowed():
    qc = Circuit(0)
    assert qc.num_qubits() == 0


def test_negative_qubit_count():
    with pytest.raises(ValueError):
        Circuit(-1)


def test_method_chaining():
    qc = Circuit(2)
    result = qc.h(0).cnot(0, 1).measure_all()
    assert result is qc
    assert qc.num_operations() == 4


def test_all_named_gates():
    qc = Circuit(2)
    qc.h(0).x(0).y(0).z(0).s(0).t(0)
    qc.rx(1, 0.1).ry(1, 0.2).rz(1, 0.3)
    qc.cnot(0, 1).cx(1, 0).cz(0, 1).swap(0, 1)
    kinds = [op.gate.kind for op in qc.operations]
    assert kinds == [
        GateKind.H, GateKind.X, GateKind.Y, GateKind.Z, GateKind.S, GateKind.T,
        GateKind.RX, GateKind.RY, GateKind.RZ,
        GateKind.CNOT, GateKind.CNOT, GateKind.CZ, GateKind.SWAP,
    ]


def test_rotation_stores_angle_and_qubit():
    qc = Circuit(2)
    qc.ry(1, 0.25)
    op = qc.operations[0]
    assert op.qubits == (1,)
    assert op.gate.angle == 0.25


def test_add_gate_with_custom_gate():
    qc = Circuit(1)
    qc.add_gate(Gate.custom([[0, 1], [1, 0]], "X-Gate", "G"), 0)
    assert qc.num_operations() == 1
    assert qc.operations[0].gate.name == "X-Gate"


def test_operations_returns_copy():
    qc = Circuit(1).h(0)
    ops = qc.operations
    ops.clear()
    assert qc.num_operations() == 1


# ---------------------------------------------------------------------------
# Operation layout
# ---------------------------------------------------------------------------

def test_controlled_operation_qubit_order():
    qc = Circuit(3).cnot(2, 0)
    op = qc.operations[0]
    assert op.qubits == (2, 0)
    assert op.controls == (2,)
    assert op.target == 0


def test_operation_is_immutable():
    op = Operation(Gate.h(), (0,))
    with pytest.raises(AttributeError):
        op.step = 3


def test_execution_order_is_insertion_order():
    qc = Circuit(2)
    qc.h(0).h(0).x(1)
    # x(1) has a lower step than the second h(0) but stays last
    steps = [op.step for op in qc.operations]
    assert steps == [0, 1, 0]
    assert qc.operations[-1].gate.kind is GateKind.X


# ---------------------------------------------------------------------------
# Step assignment
# ---------------------------------------------------------------------------

def test_steps_per_qubit():
    qc = Circuit(2)
    qc.h(0).x(0).y(1)
    assert [op.step for op in qc.operations] == [0, 1, 0]


def test_two_qubit_gate_uses_max_step():
    qc = Circuit(3)
    qc.h(0).h(0).h(1)       # q0 next=2, q1 next=1
    qc.cnot(1, 0)           # step max(1, 2) = 2
    qc.x(1)                 # after the cnot on q1
    qc.x(2)                 # untouched qubit starts at 0
    steps = [op.step for op in qc.operations]
    assert steps == [0, 1, 0, 2, 3, 0]
    assert qc.depth == 4


def test_measure_advances_step():
    qc = Circuit(1)
    qc.h(0).measure(0, 0).x(0)
    assert [op.step for op in qc.operations] == [0, 1, 2]


def test_step_tracker_directly():
    tracker = StepTracker(3)
    assert tracker.assign([0]) == 0
    assert tracker.assign([0, 2]) == 1
    assert tracker.next_step(2) == 2
    assert tracker.next_step(1) == 0
    assert tracker.depth == 2


# ---------------------------------------------------------------------------
# Measurement
# ---------------------------------------------------------------------------

def test_measure_records_clbit():
    qc = Circuit(2)
    qc.measure(1, 0)
    op = qc.operations[0]
    assert op.is_measurement
    assert op.clbit == 0
    assert op.qubits == (1,)


def test_measure_grows_classical_register():
    qc = Circuit(1)
    qc.measure(0, 5)
    assert qc.n_clbits == 6
    qc.measure(0, 2)
    assert qc.n_clbits == 6


def test_measure_default_clbit():
    qc = Circuit(3)
    qc.measure(2)
    assert qc.operations[0].clbit == 2
    assert qc.n_clbits == 3


def test_measure_all():
    qc = Circuit(3).measure_all()
    assert [(op.qubits[0], op.clbit) for op in qc.operations] == [(0, 0), (1, 1), (2, 2)]


def test_measure_negative_clbit():
    qc = Circuit(1)
    with pytest.raises(IndexOutOfRangeError):
        qc.measure(0, -1)
    assert qc.num_operations() == 0


def test_append_rejects_measurement_gate():
    with pytest.raises(ValueError):
        Circuit(1).append(Gate.measurement(), 0)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("build", [
    lambda qc: qc.h(2),
    lambda qc: qc.x(-1),
    lambda qc: qc.rx(5, 0.1),
    lambda qc: qc.cnot(0, 2),
    lambda qc: qc.cnot(2, 0),
    lambda qc: qc.measure(2, 0),
    lambda qc: qc.add_gate(Gate.t(), 3),
])
def test_out_of_range_leaves_circuit_unchanged(build):
    qc = Circuit(2).h(0)
    with pytest.raises(IndexOutOfRangeError):
        build(qc)
    assert qc.num_operations() == 1


def test_out_of_range_error_is_index_error():
    qc = Circuit(1)
    with pytest.raises(IndexError) as excinfo:
        qc.h(1)
    assert isinstance(excinfo.value, QSimError)
    assert excinfo.value.index == 1
    assert excinfo.value.size == 1


def test_duplicate_qubits():
    qc = Circuit(2)
    with pytest.raises(ValueError):
        qc.cnot(0, 0)


def test_arity_mismatch():
    qc = Circuit(2)
    with pytest.raises(ValueError):
        qc.append(Gate.cnot(), 0)
    with pytest.raises(ValueError):
        qc.append_controlled(Gate.h(), 0, 1)
    assert qc.num_operations() == 0


def test_custom_two_qubit_gate_via_append_controlled():
    qc = Circuit(2)
    qc.append_controlled(Gate.custom(np.eye(4), "Id2", "I"), 0, 1)
    assert qc.operations[0].qubits == (0, 1)


# ---------------------------------------------------------------------------
# Text output
# ---------------------------------------------------------------------------

def test_repr():
    assert repr(Circuit(2).h(0)) == "Circuit(n_qubits=2, ops=1)"


def test_str_lists_operations():
    qc = Circuit(2).h(0).cnot(0, 1)
    text = str(qc)
    assert text.splitlines()[0] == "Quantum Circuit (2 qubits, 2 operations):"
    assert "1. H on qubit 0 (Step: 0)" in text
    assert "2. CX on qubit 1 by 0 (Step: 1)" in text
