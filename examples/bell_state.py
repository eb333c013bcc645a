"""Example: prepare and sample a Bell state."""
from tiny_qsim import Circuit, Simulator, execute

print("=" * 50)
print("tiny-qsim: Bell State Example")
print("=" * 50)

qc = Circuit(2).h(0).cnot(0, 1)

print("\nCircuit:")
print(qc.draw())

print("\nFinal state:")
for index, amplitude in enumerate(execute(qc)):
    print(f"  |{index:02b}⟩: {amplitude.real:+.4f}{amplitude.imag:+.4f}j")

shots = 1000
result = Simulator(seed=42).with_circuit(qc).run(shots)

print("\nMeasurement Results:")
for state, count in sorted(result.counts.items()):
    print(f"  |{state}⟩: {count:4d} ({100*count/shots:5.1f}%)")

print("\nExpected: ~50% |00⟩ and ~50% |11⟩ (entangled!)")
