"""
Error types raised by tiny-qsim.

Every error derives from :class:`QSimError` and from the builtin exception
closest to its meaning, so ``except IndexError`` and ``except QSimError``
both catch an out-of-range qubit.
"""

from __future__ import annotations


class QSimError(Exception):
    """Base class for all tiny-qsim errors."""


class IndexOutOfRangeError(QSimError, IndexError):
    """A qubit or classical-bit index lies outside its register."""

    def __init__(self, kind: str, index: int, size: int | None = None) -> None:
        if size is None:
            message = f"{kind.capitalize()} index {index} is out of range"
        else:
            message = (
                f"{kind.capitalize()} index {index} is out of range "
                f"for a register of {size} {kind}(s)"
            )
        super().__init__(message)
        self.kind = kind
        self.index = index
        self.size = size


class DimensionMismatchError(QSimError, ValueError):
    """A supplied state or register does not match the circuit size."""

    def __init__(self, expected: int, actual: int, what: str = "state") -> None:
        super().__init__(f"Expected {what} of dimension {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class EmptyCircuitError(QSimError, RuntimeError):
    """The simulator was run with no circuit attached."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "No circuit provided to simulator. "
            "Use with_circuit() or set_circuit() to add a circuit."
        )


class MalformedGateError(QSimError, ValueError):
    """A gate matrix has the wrong shape for the qubits it acts on."""

    def __init__(self, gate_name: str, shape: tuple[int, ...], expected: int) -> None:
        super().__init__(
            f"Gate '{gate_name}' has matrix of shape {shape}, "
            f"expected ({expected}, {expected})"
        )
        self.gate_name = gate_name
        self.shape = shape


class InvalidStateError(QSimError, ValueError):
    """A final state cannot be turned into a probability distribution."""
