"""
Configuration loader for YAML-based box setup.

Provides functions to load a simulation box from YAML files or from the
equivalent dictionaries.

Example config:
    strategy: parallel
    strict_rollback: true
    seed: 42
    parallel:
      max_workers: 4
      min_chunk_size: 64
    environment:
      x: 20.0
      y: 20.0
      z: 20.0
      max_translation: 0.5
      max_rotation: 15.0
    molecules:
      - id: 0
        atoms:
          - {x: 1.0, y: 1.0, z: 1.0, type: C, sigma: 3.4, epsilon: 0.1}
          - {x: 2.5, y: 1.0, z: 1.0, type: C, sigma: 3.4, epsilon: 0.1}
        bonds:
          - {atom1: 0, atom2: 1, distance: 1.5}
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from mcbox.box import STRATEGIES, SimulationBox, create_box
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


@dataclass
class BoxConfig:
    """Top-level keys of a box configuration."""

    strategy: str = "serial"
    strict_rollback: bool = True
    seed: Optional[int] = None
    parallel: Dict[str, Any] = field(default_factory=dict)
    environment: Dict[str, Any] = field(default_factory=dict)
    molecules: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "BoxConfig":
        return cls(
            strategy=str(d.get("strategy", "serial")),
            strict_rollback=bool(d.get("strict_rollback", True)),
            seed=d.get("seed"),
            parallel=dict(d.get("parallel") or {}),
            environment=dict(d.get("environment") or {}),
            molecules=list(d.get("molecules") or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "strategy": self.strategy,
            "strict_rollback": self.strict_rollback,
            "seed": self.seed,
            "parallel": self.parallel,
            "environment": self.environment,
            "molecules": self.molecules,
        }


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load YAML configuration file.

    Args:
        path: Path to YAML file.

    Returns:
        Dictionary with configuration.
    """
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def _parse_atom(d: Dict[str, Any], default_id: int) -> Atom:
    """Parse one atom from config."""
    try:
        x, y, z = float(d["x"]), float(d["y"]), float(d["z"])
    except KeyError as exc:
        raise ValueError(f"Atom is missing coordinate {exc.args[0]!r}: {d}") from None
    return Atom(
        x, y, z,
        atom_id=int(d.get("id", default_id)),
        atom_type=str(d.get("type", "X")),
        sigma=float(d.get("sigma", 0.0)),
        epsilon=float(d.get("epsilon", 0.0)),
        charge=float(d.get("charge", 0.0)),
    )


def _parse_molecule(d: Dict[str, Any], index: int, first_atom_id: int) -> Molecule:
    """Parse one molecule from config."""
    atoms = [
        _parse_atom(a, first_atom_id + i) for i, a in enumerate(d.get("atoms", []))
    ]
    bonds = [
        Bond(int(b["atom1"]), int(b["atom2"]),
             float(b.get("distance", 0.0)), bool(b.get("variable", False)))
        for b in d.get("bonds", [])
    ]
    angles = [
        Angle(int(a["atom1"]), int(a["atom2"]),
              float(a.get("value", 0.0)), bool(a.get("variable", False)))
        for a in d.get("angles", [])
    ]
    dihedrals = [
        Dihedral(int(a["atom1"]), int(a["atom2"]),
                 float(a.get("value", 0.0)), bool(a.get("variable", False)))
        for a in d.get("dihedrals", [])
    ]
    hops = [
        Hop(int(h["atom1"]), int(h["atom2"]), int(h.get("hop", 0)))
        for h in d.get("hops", [])
    ]
    return Molecule(int(d.get("id", index)), atoms, bonds, angles, dihedrals, hops)


def _parse_environment(
    env_config: Dict[str, Any], molecules: List[Molecule]
) -> Environment:
    """Parse environment from config; counts default to the molecule totals."""
    try:
        dims = [float(env_config[axis]) for axis in ("x", "y", "z")]
    except KeyError as exc:
        raise ValueError(f"Environment is missing box dimension {exc.args[0]!r}") from None
    return Environment(
        *dims,
        max_translation=float(env_config.get("max_translation", 0.0)),
        max_rotation=float(env_config.get("max_rotation", 0.0)),
        num_of_atoms=int(
            env_config.get("num_of_atoms", sum(m.num_of_atoms for m in molecules))
        ),
        num_of_molecules=int(env_config.get("num_of_molecules", len(molecules))),
    )


def build_bundle_from_config(config: Dict[str, Any]) -> ConfigurationBundle:
    """
    Build a ConfigurationBundle from a configuration dictionary.

    Raises:
        ValueError: If a required value is missing or invalid.
    """
    cfg = BoxConfig.from_dict(config)
    molecules = []
    next_atom_id = 0
    for index, mol_config in enumerate(cfg.molecules):
        molecule = _parse_molecule(mol_config, index, next_atom_id)
        next_atom_id += molecule.num_of_atoms
        molecules.append(molecule)
    return ConfigurationBundle(_parse_environment(cfg.environment, molecules), molecules)


def build_box_from_config(
    config: Dict[str, Any],
    random_source: Optional[RandomSource] = None,
) -> SimulationBox:
    """
    Build a complete SimulationBox from a configuration dictionary.

    Args:
        config: Configuration dictionary (typically from YAML).
        random_source: Overrides the seeded source built from ``seed``.

    Returns:
        Configured SimulationBox ready for a Monte Carlo driver.

    Raises:
        ValueError: For an unknown strategy or invalid values.
    """
    cfg = BoxConfig.from_dict(config)
    strategy = cfg.strategy.lower()
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown box strategy: {cfg.strategy}")

    options: Dict[str, Any] = {}
    if strategy == "parallel":
        if "max_workers" in cfg.parallel:
            options["max_workers"] = int(cfg.parallel["max_workers"])
        if "min_chunk_size" in cfg.parallel:
            options["min_chunk_size"] = int(cfg.parallel["min_chunk_size"])

    if random_source is None:
        random_source = UniformRandomSource(cfg.seed)

    return create_box(
        build_bundle_from_config(config),
        strategy=strategy,
        random_source=random_source,
        strict_rollback=cfg.strict_rollback,
        **options,
    )


def load_box(
    path: Union[str, Path],
    random_source: Optional[RandomSource] = None,
) -> SimulationBox:
    """Load a YAML file and build the SimulationBox it describes."""
    return build_box_from_config(load_yaml(path), random_source=random_source)
