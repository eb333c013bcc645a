"""
Quantum gate catalog.

Each gate is a :class:`Gate`: a :class:`GateKind` plus the data that kind
needs (a rotation angle, or a caller-supplied matrix for custom gates).
Matrices are numpy ``complex128`` arrays.

Gate kinds:
    - Single-qubit: X, Y, Z, H, S, T
    - Rotations: Rx, Ry, Rz
    - Two-qubit: CNOT, CZ, SWAP
    - Measurement marker (no matrix)
    - Custom (arbitrary 2x2 or 4x4 matrix, not checked for unitarity)
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

import numpy as np
from numpy import ndarray

# Type alias
Matrix = ndarray

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
_SQRT2_INV = 1.0 / np.sqrt(2.0)

# ---------------------------------------------------------------------------
# Single-qubit fixed gates
# ---------------------------------------------------------------------------

I = np.eye(2, dtype=np.complex128)
"""Identity."""

X = np.array([[0, 1], [1, 0]], dtype=np.complex128)
"""Pauli-X (NOT) gate."""

Y = np.array([[0, -1j], [1j, 0]], dtype=np.complex128)
"""Pauli-Y gate."""

Z = np.array([[1, 0], [0, -1]], dtype=np.complex128)
"""Pauli-Z gate."""

H = np.array([[1, 1], [1, -1]], dtype=np.complex128) * _SQRT2_INV
"""Hadamard gate."""

S = np.array([[1, 0], [0, 1j]], dtype=np.complex128)
"""S (phase) gate: sqrt(Z)."""

T = np.array([[1, 0], [0, np.exp(1j * np.pi / 4)]], dtype=np.complex128)
"""T gate: sqrt(S)."""

# ---------------------------------------------------------------------------
# Single-qubit rotations
# ---------------------------------------------------------------------------

def Rx(theta: float) -> Matrix:
    """Rotation around X-axis by angle theta."""
    c = np.cos(theta / 2)
    s = np.sin(theta / 2)
    return np.array([[c, -1j * s], [-1j * s, c]], dtype=np.complex128)


def Ry(theta: float) -> Matrix:
    """Rotation around Y-axis by angle theta."""
    c = np.cos(theta / 2)
    s = np.sin(theta / 2)
    return np.array([[c, -s], [s, c]], dtype=np.complex128)


def Rz(theta: float) -> Matrix:
    """Rotation around Z-axis by angle theta."""
    return np.array(
        [[np.exp(-1j * theta / 2), 0], [0, np.exp(1j * theta / 2)]],
        dtype=np.complex128,
    )


# ---------------------------------------------------------------------------
# Two-qubit fixed gates (4x4, control is the high-order bit)
# ---------------------------------------------------------------------------

CNOT = np.array(
    [[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 0, 1], [0, 0, 1, 0]],
    dtype=np.complex128,
)
"""Controlled-NOT (CX) gate."""

CZ = np.diag([1, 1, 1, -1]).astype(np.complex128)
"""Controlled-Z gate."""

SWAP = np.array(
    [[1, 0, 0, 0], [0, 0, 1, 0], [0, 1, 0, 0], [0, 0, 0, 1]],
    dtype=np.complex128,
)
"""SWAP gate."""


# ---------------------------------------------------------------------------
# Gate kinds
# ---------------------------------------------------------------------------

class GateKind(enum.Enum):
    """The closed set of gate variants the simulator understands."""

    X = "x"
    Y = "y"
    Z = "z"
    H = "h"
    S = "s"
    T = "t"
    RX = "rx"
    RY = "ry"
    RZ = "rz"
    CNOT = "cnot"
    CZ = "cz"
    SWAP = "swap"
    MEASURE = "measure"
    CUSTOM = "custom"


# kind -> (name, symbol, display symbol, arity, matrix or rotation factory)
_CATALOG: dict[GateKind, tuple] = {
    GateKind.X: ("Pauli-X", "X", "─X─", 1, X),
    GateKind.Y: ("Pauli-Y", "Y", "─Y─", 1, Y),
    GateKind.Z: ("Pauli-Z", "Z", "─Z─", 1, Z),
    GateKind.H: ("Hadamard", "H", "─H─", 1, H),
    GateKind.S: ("S", "S", "─S─", 1, S),
    GateKind.T: ("T", "T", "─T─", 1, T),
    GateKind.RX: ("Rx", "Rx", "Rx─", 1, Rx),
    GateKind.RY: ("Ry", "Ry", "Ry─", 1, Ry),
    GateKind.RZ: ("Rz", "Rz", "Rz─", 1, Rz),
    GateKind.CNOT: ("CNOT", "CX", "─⊕─", 2, CNOT),
    GateKind.CZ: ("CZ", "CZ", "─●─", 2, CZ),
    GateKind.SWAP: ("SWAP", "SW", "─✕─", 2, SWAP),
    GateKind.MEASURE: ("Measurement", "M", "─M─", 1, None),
}

_ROTATIONS = frozenset({GateKind.RX, GateKind.RY, GateKind.RZ})


@dataclass(frozen=True, eq=False)
class Gate:
    """
    A gate kind together with its data.

    Prefer the constructors (``Gate.x()``, ``Gate.rx(theta)``,
    ``Gate.custom(matrix, name, symbol)``...) or the module-level instances
    (``gates.HADAMARD``...) to building one directly.

    Attributes
    ----------
    kind : GateKind
        Which variant this is.
    angle : float | None
        Rotation angle in radians (Rx, Ry, Rz only).
    custom_matrix : ndarray | None
        Caller-supplied matrix (custom gates only). Part of equality and
        hashing, compared by shape and exact values.
    label : str | None
        Display name of a custom gate.
    glyph : str | None
        Diagram symbol of a custom gate.
    """

    kind: GateKind
    angle: float | None = None
    custom_matrix: ndarray | None = field(default=None, repr=False)
    label: str | None = None
    glyph: str | None = None

    def __post_init__(self) -> None:
        if self.kind in _ROTATIONS and self.angle is None:
            raise ValueError(f"Gate '{self.kind.value}' requires an angle")
        if self.kind not in _ROTATIONS and self.angle is not None:
            raise ValueError(f"Gate '{self.kind.value}' takes no angle")
        if self.kind is GateKind.CUSTOM:
            if self.custom_matrix is None:
                raise ValueError("Custom gate requires a matrix")
            object.__setattr__(
                self, "custom_matrix", np.array(self.custom_matrix, dtype=np.complex128)
            )
        elif self.custom_matrix is not None:
            raise ValueError(f"Only custom gates carry a matrix, got '{self.kind.value}'")

    def _key(self) -> tuple:
        if self.custom_matrix is None:
            matrix_key = None
        else:
            matrix_key = (self.custom_matrix.shape, self.custom_matrix.tobytes())
        return (self.kind, self.angle, self.label, self.glyph, matrix_key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Gate):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    # -- Constructors -------------------------------------------------------

    @classmethod
    def x(cls) -> Gate:
        return cls(GateKind.X)

    @classmethod
    def y(cls) -> Gate:
        return cls(GateKind.Y)

    @classmethod
    def z(cls) -> Gate:
        return cls(GateKind.Z)

    @classmethod
    def h(cls) -> Gate:
        return cls(GateKind.H)

    @classmethod
    def s(cls) -> Gate:
        return cls(GateKind.S)

    @classmethod
    def t(cls) -> Gate:
        return cls(GateKind.T)

    @classmethod
    def rx(cls, theta: float) -> Gate:
        return cls(GateKind.RX, angle=float(theta))

    @classmethod
    def ry(cls, theta: float) -> Gate:
        return cls(GateKind.RY, angle=float(theta))

    @classmethod
    def rz(cls, theta: float) -> Gate:
        return cls(GateKind.RZ, angle=float(theta))

    @classmethod
    def cnot(cls) -> Gate:
        return cls(GateKind.CNOT)

    @classmethod
    def cz(cls) -> Gate:
        return cls(GateKind.CZ)

    @classmethod
    def swap(cls) -> Gate:
        return cls(GateKind.SWAP)

    @classmethod
    def measurement(cls) -> Gate:
        return cls(GateKind.MEASURE)

    @classmethod
    def custom(cls, matrix, name: str, symbol: str) -> Gate:
        """
        Gate with an arbitrary matrix.

        A 4x4 matrix makes a two-qubit gate; anything else is treated as a
        single-qubit gate and rejected by the engine if it is not 2x2.
        The matrix is not checked for unitarity.
        """
        return cls(GateKind.CUSTOM, custom_matrix=matrix, label=name, glyph=symbol)

    # -- Properties ---------------------------------------------------------

    @property
    def is_measurement(self) -> bool:
        return self.kind is GateKind.MEASURE

    @property
    def arity(self) -> int:
        """Number of qubits the gate acts on (1 or 2)."""
        if self.kind is GateKind.CUSTOM:
            return 2 if self.custom_matrix.shape == (4, 4) else 1
        return _CATALOG[self.kind][3]

    @property
    def name(self) -> str:
        if self.kind is GateKind.CUSTOM:
            return self.label
        return _CATALOG[self.kind][0]

    @property
    def symbol(self) -> str:
        if self.kind is GateKind.CUSTOM:
            return self.glyph
        return _CATALOG[self.kind][1]

    @property
    def display_symbol(self) -> str:
        """Symbol padded with wire characters to a 3-character cell."""
        if self.kind is GateKind.CUSTOM:
            return self.glyph.center(3, "─")
        return _CATALOG[self.kind][2]

    def matrix(self) -> Matrix:
        """
        Unitary matrix of the gate.

        Raises
        ------
        ValueError
            For measurements, which have no matrix.
        """
        if self.kind is GateKind.CUSTOM:
            return self.custom_matrix
        if self.kind is GateKind.MEASURE:
            raise ValueError("Measurement has no unitary matrix.")
        entry = _CATALOG[self.kind][4]
        if self.kind in _ROTATIONS:
            return entry(self.angle)
        return entry

    def __str__(self) -> str:
        if self.kind in _ROTATIONS:
            return f"{self.symbol}({self.angle:.4g})"
        return self.symbol


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------

PAULI_X = Gate.x()
PAULI_Y = Gate.y()
PAULI_Z = Gate.z()
HADAMARD = Gate.h()
PHASE_S = Gate.s()
PHASE_T = Gate.t()
CONTROLLED_NOT = Gate.cnot()
CONTROLLED_Z = Gate.cz()
SWAP_GATE = Gate.swap()
MEASUREMENT = Gate.measurement()


def matrix(gate: Gate) -> Matrix:
    """Matrix of ``gate``; see :meth:`Gate.matrix`."""
    return gate.matrix()


def arity(gate: Gate) -> int:
    """Number of qubits ``gate`` acts on."""
    return gate.arity


def is_unitary(m: ndarray, tol: float = 1e-9) -> bool:
    """Check whether a square matrix satisfies U U† = I."""
    m = np.asarray(m)
    if m.ndim != 2 or m.shape[0] != m.shape[1]:
        return False
    product = m @ m.conj().T
    return bool(np.allclose(product, np.eye(len(m)), atol=tol))
