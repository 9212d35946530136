"""Bell and GHZ example: build, run and export small entangling circuits.

Builds a Bell pair and a 4-qubit GHZ state, samples both, and prints the
measurement histograms, circuit statistics and the exported text program.
"""

from __future__ import annotations

import math

import torch

import qcircuit as qc
from qcircuit.presets import bell_state, ghz_state


def show(circuit: qc.Circuit, shots: int, generator: torch.Generator) -> None:
    result = circuit.execute(shots=shots, generator=generator)
    stats = circuit.stats()

    print(f"== {circuit.name} ==")
    print(circuit.to_text_diagram())
    print(f"depth={stats.depth} gates={stats.gate_count} by kind={stats.gates_by_kind}")
    for bitstring, count in sorted(result.counts.items()):
        print(f"  {bitstring}: {count}")
    print(f"Most likely outcome: {result.most_likely}")
    print(f"Execution time: {result.execution_time_ms:.3f} ms\n")


def main() -> None:
    """Run the Bell and GHZ circuits and print their results."""
    generator = torch.Generator().manual_seed(0)

    show(bell_state(), shots=1000, generator=generator)
    show(ghz_state(4), shots=1000, generator=generator)

    # Hand-built variant with a phase kick before measurement
    custom = qc.Circuit(2, name="bell_phase").h(0).cx(0, 1).rz(1, math.pi / 2).measure_all()
    show(custom, shots=500, generator=generator)

    print("Text program:")
    print(custom.to_text_program())


if __name__ == "__main__":
    main()
