"""
Molecule container for Monte Carlo simulations.

This module provides the Molecule class: an ordered set of atoms plus the
bonds, angles, dihedrals and hops between them, stored in containers whose
capacity is fixed when the molecule is created.
"""
from typing import Iterable, List, NamedTuple, Optional

import numpy as np
from numpy.typing import NDArray

from .atom import Atom
from .topology import Angle, Bond, Dihedral, Hop


class MoleculeCounts(NamedTuple):
    """Sizes of the five sub-collections of a molecule."""
    atoms: int = 0
    bonds: int = 0
    angles: int = 0
    dihedrals: int = 0
    hops: int = 0

    def fits_within(self, capacity: "MoleculeCounts") -> bool:
        """Return True if every count is <= the matching capacity."""
        return all(count <= cap for count, cap in zip(self, capacity))


class Molecule:
    """
    A molecule with fixed-capacity sub-collections.

    Each sub-collection (atoms, bonds, angles, dihedrals, hops) is a list
    whose length is the molecule's capacity for that collection. Only the
    first ``num_of_*`` entries are valid; slots past the count hold None
    until a copy fills them. Containers never grow after construction, so
    a count can never exceed its capacity.

    Attributes:
        molecule_id: Integer id of the molecule.
        atoms, bonds, angles, dihedrals, hops: Fixed-length containers.
        capacity: MoleculeCounts with the container lengths.

    Example:
        >>> from mcbox.core import Atom, Bond, Molecule
        >>> water = Molecule(
        ...     molecule_id=0,
        ...     atoms=[Atom(0.0, 0.0, 0.0, atom_id=0, atom_type='O'),
        ...            Atom(0.96, 0.0, 0.0, atom_id=1, atom_type='H'),
        ...            Atom(-0.24, 0.93, 0.0, atom_id=2, atom_type='H')],
        ...     bonds=[Bond(0, 1, 0.96), Bond(0, 2, 0.96)],
        ... )
        >>> water.num_of_atoms
        3
    """

    def __init__(
        self,
        molecule_id: int,
        atoms: Iterable[Optional[Atom]] = (),
        bonds: Iterable[Optional[Bond]] = (),
        angles: Iterable[Optional[Angle]] = (),
        dihedrals: Iterable[Optional[Dihedral]] = (),
        hops: Iterable[Optional[Hop]] = (),
        counts: Optional[MoleculeCounts] = None,
    ) -> None:
        """
        Initialize a Molecule.

        Args:
            molecule_id: Integer id.
            atoms, bonds, angles, dihedrals, hops: Initial contents. Their
                lengths become the capacity of each container.
            counts: Number of valid entries per container. Defaults to the
                full capacity.

        Raises:
            ValueError: If counts exceed the capacity.
        """
        self.molecule_id = int(molecule_id)
        self.atoms: List[Optional[Atom]] = list(atoms)
        self.bonds: List[Optional[Bond]] = list(bonds)
        self.angles: List[Optional[Angle]] = list(angles)
        self.dihedrals: List[Optional[Dihedral]] = list(dihedrals)
        self.hops: List[Optional[Hop]] = list(hops)
        self.capacity = MoleculeCounts(
            len(self.atoms),
            len(self.bonds),
            len(self.angles),
            len(self.dihedrals),
            len(self.hops),
        )
        self._counts = self.capacity
        if counts is not None:
            self.set_counts(counts)

    @classmethod
    def allocate(cls, capacity: MoleculeCounts, molecule_id: int = -1) -> "Molecule":
        """
        Create an empty molecule with the given capacity.

        All slots hold None and all counts are zero; fill it with
        mcbox.checkpoint.copy_molecule.
        """
        return cls(
            molecule_id,
            atoms=[None] * capacity.atoms,
            bonds=[None] * capacity.bonds,
            angles=[None] * capacity.angles,
            dihedrals=[None] * capacity.dihedrals,
            hops=[None] * capacity.hops,
            counts=MoleculeCounts(),
        )

    @property
    def counts(self) -> MoleculeCounts:
        """Number of valid entries in each container."""
        return self._counts

    def set_counts(self, counts: MoleculeCounts) -> None:
        """
        Update the number of valid entries per container.

        Raises:
            ValueError: If any count is negative or above its capacity.
        """
        counts = MoleculeCounts(*(int(c) for c in counts))
        if any(c < 0 for c in counts):
            raise ValueError(f"Counts must be non-negative, got {counts}")
        if not counts.fits_within(self.capacity):
            raise ValueError(
                f"Counts {tuple(counts)} exceed capacity {tuple(self.capacity)}"
            )
        self._counts = counts

    @property
    def num_of_atoms(self) -> int:
        return self._counts.atoms

    @property
    def num_of_bonds(self) -> int:
        return self._counts.bonds

    @property
    def num_of_angles(self) -> int:
        return self._counts.angles

    @property
    def num_of_dihedrals(self) -> int:
        return self._counts.dihedrals

    @property
    def num_of_hops(self) -> int:
        return self._counts.hops

    def active_atoms(self) -> List[Atom]:
        """Return the valid atoms (a new list; the Atom objects are shared)."""
        return self.atoms[: self._counts.atoms]

    def positions(self) -> NDArray[np.floating]:
        """
        Return atomic positions as an array.

        Returns:
            (num_of_atoms, 3) float64 array. A copy; edits do not affect
            the atoms.
        """
        coords = [(a.x, a.y, a.z) for a in self.active_atoms()]
        return np.array(coords, dtype=np.float64).reshape(-1, 3)

    def set_positions(self, positions: NDArray[np.floating]) -> None:
        """
        Write positions back into the atoms in place.

        Args:
            positions: (num_of_atoms, 3) array.

        Raises:
            ValueError: If the shape does not match.
        """
        positions = np.asarray(positions, dtype=np.float64)
        if positions.shape != (self.num_of_atoms, 3):
            raise ValueError(
                f"Positions must be ({self.num_of_atoms}, 3) array, "
                f"got shape {positions.shape}"
            )
        for atom, (x, y, z) in zip(self.active_atoms(), positions):
            atom.move_to(x, y, z)

    def _active(self, name: str) -> list:
        return getattr(self, name)[: getattr(self._counts, name)]

    def __eq__(self, other: object) -> bool:
        """Field-for-field equality over id, counts and valid entries."""
        if not isinstance(other, Molecule):
            return NotImplemented
        return (
            self.molecule_id == other.molecule_id
            and self._counts == other._counts
            and all(
                self._active(name) == other._active(name)
                for name in MoleculeCounts._fields
            )
        )

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        """Return string representation of the molecule."""
        return (
            f"Molecule(id={self.molecule_id}, "
            f"atoms={self.num_of_atoms}, bonds={self.num_of_bonds}, "
            f"angles={self.num_of_angles}, dihedrals={self.num_of_dihedrals}, "
            f"hops={self.num_of_hops})"
        )
