"""
Configuration bundle consumed by the simulation box.

The bundle is the hand-off between whatever loads a configuration and the
box that owns it afterwards.
"""
from dataclasses import dataclass, field
from itertools import chain
from typing import Iterable, List

from .atom import Atom
from .environment import Environment
from .molecule import Molecule
from .topology import Angle, Bond, Dihedral, Hop


@dataclass
class ConfigurationBundle:
    """
    Fully loaded configuration: environment plus molecules.

    The flat atom and topology pools are derived from the molecules so
    that they can never disagree with them. Consistency between the
    Environment counts and the molecules is the loader's responsibility.

    Attributes:
        environment: Global simulation parameters.
        molecules: Molecules in index order.
    """
    environment: Environment
    molecules: List[Molecule] = field(default_factory=list)

    @property
    def atoms(self) -> List[Atom]:
        """All valid atoms, molecule by molecule."""
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


def flat_pool(molecules: Iterable[Molecule], kind: str) -> list:
    """
    Concatenate the valid entries of one sub-collection across molecules.

    Args:
        molecules: Molecules in index order.
        kind: One of 'atoms', 'bonds', 'angles', 'dihedrals', 'hops'.

    Returns:
        New list holding the molecules' own objects (no copies).
    """
    return list(
        chain.from_iterable(
            getattr(m, kind)[: getattr(m, f"num_of_{kind}")] for m in molecules
        )
    )
