"""
Core module for Monte Carlo box simulations.

This module provides the fundamental data model:
- Atom: A single atom with its position and per-atom parameters
- Bond, Angle, Dihedral, Hop: Topology records inside a molecule
- Molecule: Atoms plus topology in fixed-capacity containers
- Environment: Box dimensions, move limits and counts
- ConfigurationBundle: Loaded configuration handed to a box
- MolecularSystem: Owner of all molecules
"""

from .atom import Atom
from .bundle import ConfigurationBundle
from .environment import Environment
from .molecule import Molecule, MoleculeCounts
from .system import MolecularSystem, check_index
from .topology import Angle, Bond, Dihedral, Hop

__all__ = [
    "Atom",
    "Bond",
    "Angle",
    "Dihedral",
    "Hop",
    "Molecule",
    "MoleculeCounts",
    "Environment",
    "ConfigurationBundle",
    "MolecularSystem",
    "check_index",
]
