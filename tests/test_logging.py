"""Tests for tiny-qsim logging."""

import io
import logging

import numpy as np
import pytest

from tiny_qsim import Circuit, Gate, Simulator, execute
from tiny_qsim.logging import configure_logging, get_logger, set_log_level


@pytest.fixture
def log_stream():
    stream = io.StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)
    yield stream
    configure_logging(level=logging.WARNING)


def test_logger_namespace():
    assert get_logger("engine").name == "tiny_qsim.engine"
    assert get_logger("tiny_qsim.circuit").name == "tiny_qsim.circuit"
    assert get_logger().name == "tiny_qsim"


def test_logger_cached():
    assert get_logger("cached") is get_logger("cached")


def test_logger_does_not_propagate():
    assert get_logger("isolated").propagate is False


def test_default_level_is_warning():
    configure_logging()
    assert get_logger("quiet").level == logging.WARNING


def test_set_log_level_by_name():
    logger = get_logger("levels")
    try:
        set_log_level("DEBUG")
        assert logger.level == logging.DEBUG
    finally:
        set_log_level(logging.WARNING)
    assert logger.level == logging.WARNING


def test_execute_logs_debug(log_stream):
    execute(Circuit(2).h(0).cnot(0, 1))
    output = log_stream.getvalue()
    assert "[DEBUG] tiny_qsim.backends.statevector" in output
    assert "2 operation(s) on 2 qubit(s)" in output


def test_simulator_logs_debug(log_stream):
    Simulator(name="bell", seed=0).with_circuit(Circuit(2).h(0).cnot(0, 1)).run(10)
    assert "bell: 10 shot(s)" in log_stream.getvalue()


def test_non_unitary_custom_gate_warns(log_stream):
    gate = Gate.custom(np.array([[1, 1], [0, 1]]), "Shear", "K")
    execute(Circuit(1).add_gate(gate, 0).add_gate(gate, 0))
    output = log_stream.getvalue()
    assert "[WARNING]" in output
    assert output.count("Custom gate 'Shear' is not unitary") == 1


def test_unitary_custom_gate_does_not_warn(log_stream):
    gate = Gate.custom([[0, 1], [1, 0]], "Flip", "F")
    execute(Circuit(1).add_gate(gate, 0))
    assert "[WARNING]" not in log_stream.getvalue()


def test_custom_format(log_stream):
    stream = io.StringIO()
    configure_logging(level="INFO", format_string="%(levelname)s|%(message)s", stream=stream)
    get_logger("fmt").info("hello")
    assert stream.getvalue() == "INFO|hello\n"
