"""
Sequential simulation box.

One move-propose/evaluate/accept-or-reject cycle at a time on the calling
thread, with a single snapshot slot for the whole box.
"""
from typing import TYPE_CHECKING, List, Optional

from mcbox.checkpoint import CheckpointSlot, Snapshot

from .simulation_box import BoxEngine, SimulationBox

if TYPE_CHECKING:
    from mcbox.boundary import BoundaryCondition
    from mcbox.core import ConfigurationBundle, Environment, Molecule
    from mcbox.sampling import RandomSource


class SerialBox(SimulationBox):
    """
    Strictly sequential SimulationBox.

    Only one proposal may be in flight: proposing a move on any molecule
    releases the snapshot of the previous proposal. With strict_rollback
    (the default) a rollback into any molecule other than the last one
    proposed raises SnapshotIdentityMismatch; without it the last snapshot
    is restored into whatever index is given.

    Example:
        >>> box = SerialBox(bundle, UniformRandomSource(seed=7))
        >>> index = box.propose_move(box.choose_molecule())
        >>> box.rollback(index)
    """

    def __init__(
        self,
        bundle: "ConfigurationBundle",
        random_source: "RandomSource",
        strict_rollback: bool = True,
        boundary_condition: Optional["BoundaryCondition"] = None,
    ) -> None:
        """
        Initialize a serial box.

        Args:
            bundle: Loaded configuration; the box takes ownership.
            random_source: Uniform sampler used for every draw.
            strict_rollback: Check rollback targets against the snapshot.
            boundary_condition: Defaults to PeriodicBoundaryCondition.
        """
        self._slot = CheckpointSlot()
        self._engine = BoxEngine(
            bundle,
            random_source,
            self._slot,
            boundary_condition=boundary_condition,
            strict_rollback=strict_rollback,
        )

    @property
    def environment(self) -> "Environment":
        return self._engine.system.environment

    @property
    def molecules(self) -> List["Molecule"]:
        return self._engine.system.molecules

    @property
    def live_snapshot(self) -> Optional[Snapshot]:
        """The single live snapshot, of any molecule. Shared; treat as read-only."""
        return self._slot.snapshot

    def choose_molecule(self) -> int:
        return self._engine.choose_molecule()

    def propose_move(self, index: int) -> int:
        return self._engine.propose_move(index)

    def rollback(self, index: int, snapshot: Optional[Snapshot] = None) -> int:
        return self._engine.rollback(index, snapshot)

    def accept(self, index: int) -> bool:
        return self._engine.accept(index)

    def snapshot_for(self, index: int) -> Optional[Snapshot]:
        return self._engine.snapshot_for(index)

    def boundary_wrap(self, coordinate: float, dimension: float) -> float:
        return self._engine.boundary_wrap(coordinate, dimension)

    def boundary_enforce(self, index: int) -> None:
        self._engine.boundary_enforce(index)

    def close(self) -> None:
        self._engine.close()

    def __repr__(self) -> str:
        return (
            f"SerialBox(n_molecules={self.molecule_count}, "
            f"n_atoms={self.atom_count}, closed={self._engine.closed})"
        )
