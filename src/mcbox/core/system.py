"""
MolecularSystem: owner of all molecules in a simulation box.

This module provides the passive data container that the box strategies
operate on.
"""
import logging
from typing import List

import numpy as np

from mcbox.exceptions import IndexOutOfRange

from .atom import Atom
from .bundle import ConfigurationBundle, flat_pool
from .environment import Environment
from .molecule import Molecule
from .topology import Angle, Bond, Dihedral, Hop

logger = logging.getLogger(__name__)


class MolecularSystem:
    """
    Central container for molecules and the environment.

    The system has no behavior beyond ownership and checked access.
    Molecule indices are stable for the lifetime of the system.

    Attributes:
        molecules: Molecules in index order.
        environment: Shared, read-only Environment.

    Example:
        >>> system = MolecularSystem.from_bundle(bundle)
        >>> first = system.molecule(0)
    """

    def __init__(self, molecules: List[Molecule], environment: Environment) -> None:
        """
        Initialize a MolecularSystem.

        Args:
            molecules: Molecules in index order. The list is copied; the
                Molecule objects are taken over, not duplicated.
            environment: Global parameters.
        """
        self.molecules: List[Molecule] = list(molecules)
        self.environment = environment

        n_atoms = sum(m.num_of_atoms for m in self.molecules)
        if len(self.molecules) != environment.num_of_molecules:
            logger.warning(
                "Environment reports %d molecules but %d were supplied",
                environment.num_of_molecules, len(self.molecules),
            )
        if n_atoms != environment.num_of_atoms:
            logger.warning(
                "Environment reports %d atoms but molecules hold %d",
                environment.num_of_atoms, n_atoms,
            )

    @classmethod
    def from_bundle(cls, bundle: ConfigurationBundle) -> "MolecularSystem":
        """Take ownership of the molecules and environment of a bundle."""
        return cls(bundle.molecules, bundle.environment)

    def molecule(self, index: int) -> Molecule:
        """
        Return the molecule at index.

        Raises:
            IndexOutOfRange: If index is outside [0, number of molecules).
        """
        check_index(index, len(self.molecules))
        return self.molecules[index]

    @property
    def atoms(self) -> List[Atom]:
        """Flat pool of all valid atoms, molecule by molecule."""
        return flat_pool(self.molecules, "atoms")

    @property
    def bonds(self) -> List[Bond]:
        return flat_pool(self.molecules, "bonds")

    @property
    def angles(self) -> List[Angle]:
        return flat_pool(self.molecules, "angles")

    @property
    def dihedrals(self) -> List[Dihedral]:
        return flat_pool(self.molecules, "dihedrals")

    @property
    def hops(self) -> List[Hop]:
        return flat_pool(self.molecules, "hops")

    def get_num_molecules(self) -> int:
        return len(self.molecules)

    def get_num_atoms(self) -> int:
        return sum(m.num_of_atoms for m in self.molecules)

    def clear(self) -> None:
        """Drop all molecules."""
        self.molecules.clear()

    def __repr__(self) -> str:
        """Return string representation of the system."""
        return (
            f"MolecularSystem(n_molecules={len(self.molecules)}, "
            f"n_atoms={self.get_num_atoms()}, "
            f"box={self.environment.box})"
        )


def check_index(index: int, count: int, what: str = "molecule") -> int:
    """
    Validate an index against [0, count).

    Negative indices are rejected rather than counted from the end.

    Raises:
        IndexOutOfRange: If the index is out of range or not an integer.
    """
    if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
        raise IndexOutOfRange(index, count, what)
    if not 0 <= index < count:
        raise IndexOutOfRange(index, count, what)
    return int(index)
