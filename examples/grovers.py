"""Example: two-qubit Grover search for |11⟩."""
from tiny_qsim import Circuit, Simulator

print("=" * 50)
print("tiny-qsim: Grover Search Example")
print("=" * 50)

qc = Circuit(2)

# Uniform superposition
qc.h(0).h(1)

# Oracle: phase-flip |11⟩
qc.cz(0, 1)

# Diffuser
qc.h(0).h(1)
qc.x(0).x(1)
qc.cz(0, 1)
qc.x(0).x(1)
qc.h(0).h(1)

qc.measure_all()

print("\nCircuit:")
print(qc.draw())
print()
print(qc)

shots = 1000
result = Simulator(name="grover", seed=7).with_circuit(qc).run(shots)

print("\nMeasurement Results:")
for state, count in sorted(result.counts.items()):
    print(f"  |{state}⟩: {count:4d} ({100*count/shots:5.1f}%)")

print(f"\nMost frequent: |{result.most_frequent()}⟩ (expected |11⟩)")
