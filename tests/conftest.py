"""
Shared fixtures for mcbox tests.
"""
from typing import Callable, List, Sequence, Tuple

import pytest

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


class ScriptedRandomSource:
    """Random source that returns queued values and records every call."""

    def __init__(self, values: Sequence[float]) -> None:
        self.values: List[float] = list(values)
        self.calls: List[Tuple[float, float]] = []

    def draw(self, low: float, high: float) -> float:
        self.calls.append((low, high))
        if not self.values:
            raise AssertionError("scripted random source exhausted")
        return self.values.pop(0)


def build_molecule(
    molecule_id: int,
    coords: Sequence[Sequence[float]],
    first_atom_id: int = 0,
) -> Molecule:
    """Molecule with a chain topology over the given coordinates."""
    atoms = [
        Atom(x, y, z, atom_id=first_atom_id + i, atom_type="C",
             sigma=3.4, epsilon=0.1, charge=-0.1 * i)
        for i, (x, y, z) in enumerate(coords)
    ]
    ids = [a.atom_id for a in atoms]
    bonds = [Bond(a, b, 1.5, False) for a, b in zip(ids, ids[1:])]
    angles = [Angle(a, b, 109.5, True) for a, b in zip(ids, ids[2:])]
    dihedrals = [Dihedral(a, b, 180.0, True) for a, b in zip(ids, ids[3:])]
    hops = [Hop(a, b, 2) for a, b in zip(ids, ids[2:])]
    return Molecule(molecule_id, atoms, bonds, angles, dihedrals, hops)


def build_bundle(
    molecule_coords: Sequence[Sequence[Sequence[float]]],
    box: float = 10.0,
    max_translation: float = 0.5,
    max_rotation: float = 15.0,
) -> ConfigurationBundle:
    """Bundle with one molecule per entry of molecule_coords."""
    molecules = []
    next_id = 0
    for index, coords in enumerate(molecule_coords):
        molecules.append(build_molecule(index, coords, next_id))
        next_id += len(coords)
    environment = Environment(
        box, box, box,
        max_translation=max_translation,
        max_rotation=max_rotation,
        num_of_atoms=next_id,
        num_of_molecules=len(molecules),
    )
    return ConfigurationBundle(environment, molecules)


@pytest.fixture
def scripted_source() -> Callable[[Sequence[float]], ScriptedRandomSource]:
    """Factory for ScriptedRandomSource instances."""
    return ScriptedRandomSource


@pytest.fixture
def make_molecule() -> Callable[..., Molecule]:
    """Factory for chain molecules."""
    return build_molecule


@pytest.fixture
def make_bundle() -> Callable[..., ConfigurationBundle]:
    """Factory for configuration bundles."""
    return build_bundle


@pytest.fixture
def triatomic() -> Molecule:
    """Three-atom molecule well inside a 10x10x10 box."""
    return build_molecule(0, [(1.0, 1.0, 1.0), (2.0, 1.0, 1.0), (1.0, 2.0, 1.0)])


@pytest.fixture
def two_molecule_bundle() -> ConfigurationBundle:
    """Two small molecules in a 10x10x10 box."""
    return build_bundle(
        [
            [(1.0, 1.0, 1.0), (2.0, 1.0, 1.0), (2.0, 2.0, 1.0), (3.0, 2.0, 1.0)],
            [(5.0, 5.0, 5.0), (5.0, 6.0, 5.0), (5.0, 6.0, 6.0)],
        ],
        max_translation=2.0,
        max_rotation=45.0,
    )
