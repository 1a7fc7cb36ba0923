"""
Topology records for molecules.

Bonds, angles, dihedrals and hops describe relationships between atoms
inside one molecule. Atoms are referenced by atom_id. The records are
immutable; a molecule's topology only changes through a restore.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class Bond:
    """Bond between two atoms.

    Attributes:
        atom1, atom2: Atom ids.
        distance: Equilibrium bond length.
        variable: Whether the length may change during a move.
    """
    atom1: int
    atom2: int
    distance: float = 0.0
    variable: bool = False


@dataclass(frozen=True)
class Angle:
    """Angle defined by its two end atoms.

    Attributes:
        atom1, atom2: Atom ids of the end atoms.
        value: Equilibrium angle in degrees.
        variable: Whether the angle may change during a move.
    """
    atom1: int
    atom2: int
    value: float = 0.0
    variable: bool = False


@dataclass(frozen=True)
class Dihedral:
    """Dihedral defined by its two end atoms.

    Attributes:
        atom1, atom2: Atom ids of the end atoms.
        value: Equilibrium dihedral in degrees.
        variable: Whether the dihedral may change during a move.
    """
    atom1: int
    atom2: int
    value: float = 0.0
    variable: bool = False


@dataclass(frozen=True)
class Hop:
    """Number of bonds separating two atoms (connectivity distance)."""
    atom1: int
    atom2: int
    hop: int = 0
