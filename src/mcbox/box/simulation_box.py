"""
Abstract contract for simulation boxes.

This module provides the SimulationBox ABC consumed by a Monte Carlo
driver, and BoxEngine, the component both execution strategies compose
to implement it.
"""
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional

from mcbox.boundary import BoundaryCondition, PeriodicBoundaryCondition
from mcbox.checkpoint import Snapshot, restore
from mcbox.core import MolecularSystem
from mcbox.exceptions import BoxClosedError, SnapshotIdentityMismatch, SnapshotMissing
from mcbox.move import MoveProposer, transform_positions

if TYPE_CHECKING:
    from mcbox.checkpoint import SnapshotStorage
    from mcbox.core import ConfigurationBundle, Environment, Molecule
    from mcbox.move import TransformKernel
    from mcbox.sampling import RandomSource

logger = logging.getLogger(__name__)


class SimulationBox(ABC):
    """
    Abstract simulation box (Strategy Pattern).

    A driver runs the Metropolis loop against this contract:

        >>> index = box.propose_move(box.choose_molecule())
        >>> if not accepted(energy_change):
        ...     box.rollback(index)
        ... else:
        ...     box.accept(index)

    Implementations differ only in how they execute the work; they share
    no state and are chosen at construction time (see create_box).
    """

    @property
    @abstractmethod
    def environment(self) -> "Environment":
        """Global, read-only simulation parameters."""
        pass

    @property
    @abstractmethod
    def molecules(self) -> List["Molecule"]:
        """Molecules in index order."""
        pass

    @property
    def atom_count(self) -> int:
        """Total number of atoms, as reported by the Environment."""
        return self.environment.num_of_atoms

    @property
    def molecule_count(self) -> int:
        """Total number of molecules, as reported by the Environment."""
        return self.environment.num_of_molecules

    @abstractmethod
    def choose_molecule(self) -> int:
        """Return a uniformly chosen molecule index in [0, molecule_count)."""
        pass

    @abstractmethod
    def propose_move(self, index: int) -> int:
        """
        Checkpoint molecule index, move it randomly and wrap it.

        Returns:
            The same index, now referring to the moved molecule.
        """
        pass

    @abstractmethod
    def rollback(self, index: int, snapshot: Optional[Snapshot] = None) -> int:
        """
        Restore molecule index to its state before the last proposal.

        Args:
            index: Molecule to restore.
            snapshot: Explicit snapshot to restore from. Defaults to the
                live snapshot held by the box, which is then discarded.

        Returns:
            The restored index.
        """
        pass

    @abstractmethod
    def accept(self, index: int) -> bool:
        """Keep the moved molecule and drop its snapshot."""
        pass

    @abstractmethod
    def snapshot_for(self, index: int) -> Optional[Snapshot]:
        """Return the live snapshot of index (shared, read-only), or None."""
        pass

    @abstractmethod
    def boundary_wrap(self, coordinate: float, dimension: float) -> float:
        """Wrap one coordinate into [0, dimension)."""
        pass

    @abstractmethod
    def boundary_enforce(self, index: int) -> None:
        """Wrap every atom of molecule index back into the box."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release every owned collection, including pending snapshots."""
        pass

    def __enter__(self) -> "SimulationBox":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class BoxEngine:
    """
    Shared machinery behind the box strategies.

    Owns the MolecularSystem and drives the MoveProposer and snapshot
    storage it is given. The storage, transform kernel and draw lock are
    what make a strategy serial or parallel.

    Attributes:
        system: MolecularSystem built from the bundle.
        proposer: MoveProposer bound to the storage and kernel.
        storage: Snapshot storage strategy.
        strict_rollback: Reject rollbacks into a molecule other than the
            one the snapshot was captured from.
    """

    def __init__(
        self,
        bundle: "ConfigurationBundle",
        random_source: "RandomSource",
        storage: "SnapshotStorage",
        kernel: "TransformKernel" = transform_positions,
        draw_lock=None,
        boundary_condition: Optional[BoundaryCondition] = None,
        strict_rollback: bool = True,
    ) -> None:
        self.system = MolecularSystem.from_bundle(bundle)
        self.storage = storage
        self.strict_rollback = strict_rollback
        self.boundary_condition = boundary_condition or PeriodicBoundaryCondition()
        self.proposer = MoveProposer(
            self.system.environment,
            random_source,
            storage,
            boundary_condition=self.boundary_condition,
            kernel=kernel,
            draw_lock=draw_lock,
        )
        self._closed = False

        logger.info("# of atoms: %d", self.system.environment.num_of_atoms)
        logger.info("# of molecules: %d", self.system.environment.num_of_molecules)

    @property
    def closed(self) -> bool:
        return self._closed

    def check_open(self) -> None:
        if self._closed:
            raise BoxClosedError("simulation box has been closed")

    def choose_molecule(self) -> int:
        self.check_open()
        return self.proposer.choose_molecule()

    def propose_move(self, index: int) -> int:
        self.check_open()
        molecule = self.system.molecule(index)
        self.proposer.propose_move(molecule, index)
        return index

    def rollback(self, index: int, snapshot: Optional[Snapshot] = None) -> int:
        self.check_open()
        molecule = self.system.molecule(index)
        if snapshot is None:
            snapshot = self.storage.get(index, strict=self.strict_rollback)
            restore(snapshot, molecule)
            self.storage.discard(snapshot.molecule_index)
        else:
            if self.strict_rollback and snapshot.molecule_index != index:
                raise SnapshotIdentityMismatch(index, snapshot.molecule_index)
            restore(snapshot, molecule)
        logger.debug("Rolled back molecule %d", index)
        return index

    def accept(self, index: int) -> bool:
        self.check_open()
        self.system.molecule(index)
        return self.storage.discard(index)

    def snapshot_for(self, index: int) -> Optional[Snapshot]:
        self.check_open()
        try:
            return self.storage.get(index, strict=True)
        except (SnapshotMissing, SnapshotIdentityMismatch):
            return None

    def boundary_wrap(self, coordinate: float, dimension: float) -> float:
        return self.boundary_condition.wrap(coordinate, dimension)

    def boundary_enforce(self, index: int) -> None:
        self.check_open()
        self.boundary_condition.enforce(
            self.system.molecule(index), self.system.environment
        )

    def close(self) -> None:
        if self._closed:
            return
        self.storage.clear()
        self.system.clear()
        self._closed = True
        logger.debug("Simulation box closed")
