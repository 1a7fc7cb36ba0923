#!/usr/bin/env python3
"""
Example 1: Metropolis Loop

Drives a SimulationBox loaded from box.yaml with a toy Lennard-Jones
energy between molecules. Each step picks a molecule, proposes a rigid
move, and accepts it or rolls it back with the Metropolis criterion.

Physics:
    P(accept) = min(1, exp(-beta * dU))

Usage:
    python examples/01_metropolis_loop.py [steps]
"""
import logging
import math
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np
from mcbox.builder import load_box
from mcbox.sampling import UniformRandomSource


def lj_energy(box) -> float:
    """Intermolecular LJ energy with minimum-image distances."""
    dims = box.environment.box
    molecules = box.molecules
    energy = 0.0
    for i in range(len(molecules)):
        for j in range(i + 1, len(molecules)):
            for a in molecules[i].active_atoms():
                for b in molecules[j].active_atoms():
                    if a.epsilon == 0.0 or b.epsilon == 0.0:
                        continue
                    d = np.array(a.position) - np.array(b.position)
                    d -= dims * np.round(d / dims)
                    r = float(np.linalg.norm(d))
                    sigma = 0.5 * (a.sigma + b.sigma)
                    eps = math.sqrt(a.epsilon * b.epsilon)
                    sr6 = (sigma / r) ** 6
                    energy += 4.0 * eps * (sr6 * sr6 - sr6)
    return energy


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    steps = int(sys.argv[1]) if len(sys.argv) > 1 else 2000
    beta = 1.0 / 0.596  # 1 / kT in kcal/mol at 300 K

    print("=" * 60)
    print("Metropolis Monte Carlo on a periodic box")
    print("=" * 60)

    acceptance = UniformRandomSource(seed=7)
    with load_box(Path(__file__).parent / "box.yaml") as box:
        print(f"\n{box}")
        energy = lj_energy(box)
        print(f"Initial energy: {energy:.4f} kcal/mol")

        accepted = 0
        for step in range(1, steps + 1):
            index = box.propose_move(box.choose_molecule())
            trial = lj_energy(box)
            delta = trial - energy
            if delta <= 0.0 or acceptance.draw(0.0, 1.0) < math.exp(-beta * delta):
                box.accept(index)
                energy = trial
                accepted += 1
            else:
                box.rollback(index)

            if step % (steps // 10 or 1) == 0:
                print(f"  step {step:6d}  E = {energy:10.4f}  "
                      f"acceptance = {accepted / step:.2%}")

        print(f"\nFinal energy: {energy:.4f} kcal/mol")
        print(f"Acceptance ratio: {accepted / steps:.2%}")


if __name__ == "__main__":
    main()
