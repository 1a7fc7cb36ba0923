"""
BoxBuilder for constructing simulation boxes.

Provides the Builder pattern for creating a ConfigurationBundle and the
SimulationBox that owns it.
"""
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from mcbox.box import SimulationBox, create_box
from mcbox.core import (
    Angle,
    Atom,
    Bond,
    ConfigurationBundle,
    Dihedral,
    Environment,
    Hop,
    Molecule,
)
from mcbox.sampling import RandomSource, UniformRandomSource

AtomLike = Union[Atom, Sequence[float]]


class BoxBuilder:
    """
    Builder for constructing SimulationBox objects.

    Fluent interface for:
    - Box dimensions and move limits
    - Molecules (from Atom objects or plain coordinates)
    - Execution strategy and random source

    Environment counts are derived from the molecules added.

    Example:
        >>> box = (BoxBuilder()
        ...     .box(10.0, 10.0, 10.0)
        ...     .max_translation(0.5)
        ...     .max_rotation(15.0)
        ...     .molecule([(1.0, 1.0, 1.0), (2.0, 1.0, 1.0)], bonds=[Bond(0, 1, 1.0)])
        ...     .seed(42)
        ...     .build())
    """

    def __init__(self) -> None:
        """Initialize builder with default values."""
        self._dims: Optional[tuple] = None
        self._max_translation: float = 0.0
        self._max_rotation: float = 0.0
        self._molecules: List[Molecule] = []
        self._next_atom_id: int = 0
        self._strategy: str = "serial"
        self._options: Dict[str, Any] = {}
        self._random_source: Optional[RandomSource] = None
        self._strict_rollback: bool = True

    def box(self, lx: float, ly: float, lz: float) -> "BoxBuilder":
        """
        Set box dimensions.

        Args:
            lx, ly, lz: Box dimensions in each direction.

        Returns:
            Self for chaining.
        """
        self._dims = (lx, ly, lz)
        return self

    def max_translation(self, value: float) -> "BoxBuilder":
        """Set the largest per-axis translation of a move."""
        self._max_translation = value
        return self

    def max_rotation(self, degrees: float) -> "BoxBuilder":
        """Set the largest per-axis rotation of a move, in degrees."""
        self._max_rotation = degrees
        return self

    def molecule(
        self,
        atoms: Iterable[AtomLike],
        bonds: Iterable[Bond] = (),
        angles: Iterable[Angle] = (),
        dihedrals: Iterable[Dihedral] = (),
        hops: Iterable[Hop] = (),
        molecule_id: Optional[int] = None,
    ) -> "BoxBuilder":
        """
        Add a molecule.

        Atoms given as (x, y, z) get consecutive atom ids across the
        whole box, in the order they are added.

        Args:
            atoms: Atom objects or (x, y, z) sequences.
            bonds, angles, dihedrals, hops: Topology records.
            molecule_id: Defaults to the molecule's index.

        Returns:
            Self for chaining.
        """
        built = []
        for atom in atoms:
            if not isinstance(atom, Atom):
                x, y, z = atom
                atom = Atom(float(x), float(y), float(z), atom_id=self._next_atom_id)
            built.append(atom)
            self._next_atom_id += 1

        if molecule_id is None:
            molecule_id = len(self._molecules)
        return self.add_molecule(
            Molecule(molecule_id, built, bonds, angles, dihedrals, hops)
        )

    def add_molecule(self, molecule: Molecule) -> "BoxBuilder":
        """Add a ready-made Molecule."""
        self._molecules.append(molecule)
        return self

    def strategy(self, name: str, **options: Any) -> "BoxBuilder":
        """
        Select the execution strategy.

        Args:
            name: "serial" or "parallel".
            **options: Strategy options (max_workers, min_chunk_size).

        Returns:
            Self for chaining.
        """
        self._strategy = name
        self._options = dict(options)
        return self

    def random_source(self, source: RandomSource) -> "BoxBuilder":
        """Use a specific random source."""
        self._random_source = source
        return self

    def seed(self, seed: int) -> "BoxBuilder":
        """Use a UniformRandomSource seeded with seed."""
        self._random_source = UniformRandomSource(seed)
        return self

    def strict_rollback(self, enabled: bool = True) -> "BoxBuilder":
        """Enable or disable rollback identity checks."""
        self._strict_rollback = enabled
        return self

    def build_bundle(self) -> ConfigurationBundle:
        """
        Build the ConfigurationBundle.

        Raises:
            ValueError: If box dimensions were not set.
        """
        if self._dims is None:
            raise ValueError("Box dimensions must be set with box()")

        environment = Environment(
            *self._dims,
            max_translation=self._max_translation,
            max_rotation=self._max_rotation,
            num_of_atoms=sum(m.num_of_atoms for m in self._molecules),
            num_of_molecules=len(self._molecules),
        )
        return ConfigurationBundle(environment, list(self._molecules))

    def build(self) -> SimulationBox:
        """
        Build the SimulationBox.

        Returns:
            Box with the selected strategy, owning the built bundle.
        """
        return create_box(
            self.build_bundle(),
            strategy=self._strategy,
            random_source=self._random_source,
            strict_rollback=self._strict_rollback,
            **self._options,
        )
