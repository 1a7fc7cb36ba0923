"""
Atom class for Monte Carlo simulations.

This module provides the Atom dataclass representing a single atom
in a molecule.
"""
from dataclasses import dataclass


@dataclass
class Atom:
    """
    Represents a single atom in the simulation.

    Unlike the static atoms of an MD system, a Monte Carlo atom carries
    its own position, which move proposals mutate in place. The remaining
    fields identify the atom and hold per-atom parameters that the box
    copies verbatim but never interprets.

    Attributes:
        x, y, z: Cartesian position.
        atom_id: Identifier used by topology records (default: -1).
        atom_type: Chemical symbol or type identifier (default: 'X').
        sigma: Lennard-Jones sigma (default: 0.0).
        epsilon: Lennard-Jones epsilon (default: 0.0).
        charge: Partial charge in elementary charge units (default: 0.0).

    Example:
        >>> from mcbox.core import Atom
        >>> carbon = Atom(1.0, 2.0, 3.0, atom_id=0, atom_type='C')
        >>> carbon.x = 4.0
    """
    x: float
    y: float
    z: float
    atom_id: int = -1
    atom_type: str = "X"
    sigma: float = 0.0
    epsilon: float = 0.0
    charge: float = 0.0

    @property
    def position(self) -> tuple:
        """Return (x, y, z) as a tuple."""
        return (self.x, self.y, self.z)

    def move_to(self, x: float, y: float, z: float) -> None:
        """Set all three coordinates at once."""
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
