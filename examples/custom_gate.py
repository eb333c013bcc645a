"""Example: build gates from raw matrices."""
import numpy as np

from tiny_qsim import Circuit, Gate, Simulator, execute

print("=" * 50)
print("tiny-qsim: Custom Gate Example")
print("=" * 50)

# sqrt(X): two applications make a NOT
sqrt_x = Gate.custom(
    0.5 * np.array([[1 + 1j, 1 - 1j], [1 - 1j, 1 + 1j]]),
    name="sqrt-X",
    symbol="V",
)

qc = Circuit(1).add_gate(sqrt_x, 0).add_gate(sqrt_x, 0)
print("\nsqrt(X) applied twice:")
print(qc.draw())
print(f"  state = {execute(qc)}")

# Controlled-Y from a 4x4 matrix; the control is the first qubit argument
cy = np.eye(4, dtype=np.complex128)
cy[2:, 2:] = [[0, -1j], [1j, 0]]
controlled_y = Gate.custom(cy, name="CY", symbol="Y")

qc = Circuit(2).h(0).append_controlled(controlled_y, 0, 1)
print("\nControlled-Y after H:")
print(qc.draw())

result = Simulator(seed=1).with_circuit(qc).run(1000)
for state, count in sorted(result.counts.items()):
    print(f"  |{state}⟩: {count}")
