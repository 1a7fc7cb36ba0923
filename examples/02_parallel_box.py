#!/usr/bin/env python3
"""
Example 2: Serial vs Parallel Box

Builds one large molecule with BoxBuilder and runs the same seeded
propose/rollback sequence on a SerialBox and a ParallelBox. With a
single driver thread both strategies draw the same numbers, so the
final coordinates agree.

Usage:
    python examples/02_parallel_box.py
"""
import sys
import time
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np
from mcbox.builder import BoxBuilder


def build(strategy: str, coords, **options):
    return (BoxBuilder()
            .box(50.0, 50.0, 50.0)
            .max_translation(1.0)
            .max_rotation(30.0)
            .molecule(coords)
            .molecule(coords[:10])
            .strategy(strategy, **options)
            .seed(2024)
            .build())


def run(box, steps: int):
    start = time.perf_counter()
    for step in range(steps):
        index = box.propose_move(box.choose_molecule())
        if step % 2:
            box.rollback(index)
        else:
            box.accept(index)
    return time.perf_counter() - start


def main():
    rng = np.random.default_rng(0)
    coords = [tuple(p) for p in rng.uniform(0.0, 50.0, size=(20000, 3))]
    steps = 200

    print("=" * 60)
    print("SerialBox vs ParallelBox")
    print("=" * 60)

    with build("serial", coords) as serial, \
            build("parallel", coords, max_workers=4, min_chunk_size=2048) as parallel:
        t_serial = run(serial, steps)
        t_parallel = run(parallel, steps)
        print(f"\nSerial:   {t_serial:.3f} s for {steps} moves")
        print(f"Parallel: {t_parallel:.3f} s for {steps} moves")

        diff = max(
            float(np.max(np.abs(a.positions() - b.positions())))
            for a, b in zip(serial.molecules, parallel.molecules)
        )
        print(f"Max coordinate difference: {diff:.2e}")


if __name__ == "__main__":
    main()
