"""
mcbox - Metropolis Monte Carlo box state core.

Holds the configuration of atoms and molecules for a Metropolis Monte
Carlo simulation, proposes random rigid-body moves, keeps every atom
inside a periodic box and restores rejected moves exactly.

Main features:
- Rigid moves: rotation about a random pivot atom plus translation
- Periodic boundary wrapping per atom
- Bit-exact checkpoint/rollback of a single molecule
- Serial and thread-parallel execution strategies
- YAML configuration for complete box setup
"""

__version__ = "0.1.0"
__author__ = "mcbox Team"
