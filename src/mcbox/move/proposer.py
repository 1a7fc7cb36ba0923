"""
Move proposer for Metropolis Monte Carlo.

Selects molecules and applies random rigid moves to them, checkpointing
each molecule before touching it.
"""
import logging
from contextlib import nullcontext
from typing import TYPE_CHECKING, Callable, NamedTuple, Optional

import numpy as np
from numpy.typing import NDArray

from mcbox.boundary import BoundaryCondition, PeriodicBoundaryCondition
from mcbox.checkpoint import Snapshot, save
from mcbox.core import check_index
from mcbox.exceptions import IndexOutOfRange

from .transform import MoveParameters, transform_positions

if TYPE_CHECKING:
    from mcbox.checkpoint import SnapshotStorage
    from mcbox.core import Environment, Molecule
    from mcbox.sampling import RandomSource

logger = logging.getLogger(__name__)

TransformKernel = Callable[
    [NDArray[np.floating], NDArray[np.floating], MoveParameters],
    NDArray[np.floating],
]


class Proposal(NamedTuple):
    """Outcome of one proposed move.

    parameters is None when the molecule had no atoms to move.
    """
    snapshot: Snapshot
    parameters: Optional[MoveParameters]


class MoveProposer:
    """
    Proposes random rigid moves.

    One proposal:
    1. Release the storage slot and save a snapshot of the molecule
    2. Draw a pivot atom uniformly from the molecule
    3. Draw dx, dy, dz in [-max_translation, max_translation], then
       ax, ay, az in [-max_rotation, max_rotation] degrees
    4. Rotate about the pivot (X, Y, Z order) and translate
    5. Wrap every atom back into the box

    The transform kernel is pluggable so an execution strategy can decide
    how the per-atom math is run.

    Attributes:
        environment: Box dimensions and move limits.
        random_source: Supplies draw(low, high).
        boundary_condition: Applied after every move.
        storage: Where live snapshots are kept.

    Example:
        >>> proposer = MoveProposer(env, UniformRandomSource(1), CheckpointSlot())
        >>> index = proposer.choose_molecule()
        >>> proposal = proposer.propose_move(molecules[index], index)
    """

    def __init__(
        self,
        environment: "Environment",
        random_source: "RandomSource",
        storage: "SnapshotStorage",
        boundary_condition: Optional[BoundaryCondition] = None,
        kernel: TransformKernel = transform_positions,
        draw_lock=None,
    ) -> None:
        """
        Initialize the proposer.

        Args:
            environment: Global parameters.
            random_source: Uniform sampler.
            storage: Snapshot storage strategy.
            boundary_condition: Defaults to PeriodicBoundaryCondition.
            kernel: Function (positions, pivot, params) -> moved positions.
            draw_lock: Context manager held while drawing one move's
                parameters. Defaults to no locking.
        """
        self.environment = environment
        self.random_source = random_source
        self.storage = storage
        self.boundary_condition = boundary_condition or PeriodicBoundaryCondition()
        self.kernel = kernel
        self._draw_lock = draw_lock if draw_lock is not None else nullcontext()

    def choose_molecule(self) -> int:
        """
        Pick a molecule index uniformly from [0, num_of_molecules).

        Raises:
            IndexOutOfRange: If the box has no molecules, or the random
                source returned a value outside the requested range.
        """
        count = self.environment.num_of_molecules
        if count == 0:
            raise IndexOutOfRange(0, 0)
        return check_index(int(self.random_source.draw(0, count)), count)

    def draw_parameters(self, molecule: "Molecule") -> MoveParameters:
        """
        Draw pivot, translation and rotation for one move.

        Raises:
            IndexOutOfRange: If the molecule has no atoms.
        """
        n_atoms = molecule.num_of_atoms
        max_translation = self.environment.max_translation
        max_rotation = self.environment.max_rotation
        draw = self.random_source.draw

        with self._draw_lock:
            pivot = check_index(int(draw(0, n_atoms)), n_atoms, what="atom")
            delta = tuple(draw(-max_translation, max_translation) for _ in range(3))
            degrees = tuple(draw(-max_rotation, max_rotation) for _ in range(3))

        return MoveParameters(pivot_index=pivot, delta=delta, degrees=degrees)

    def apply(self, molecule: "Molecule", params: MoveParameters) -> None:
        """Move the molecule rigidly and wrap it back into the box."""
        positions = molecule.positions()
        pivot = positions[params.pivot_index].copy()
        molecule.set_positions(self.kernel(positions, pivot, params))
        self.boundary_condition.enforce(molecule, self.environment)

    def propose_move(self, molecule: "Molecule", molecule_index: int) -> Proposal:
        """
        Checkpoint and perturb one molecule.

        A molecule without atoms is checkpointed and left untouched; no
        values are drawn for it.

        Args:
            molecule: The molecule at molecule_index.
            molecule_index: Its index, recorded in the snapshot.

        Returns:
            Proposal with the live snapshot and the applied parameters.
        """
        self.storage.release(molecule_index)
        snapshot = save(molecule, molecule_index)
        self.storage.hold(snapshot)

        if molecule.num_of_atoms == 0:
            logger.debug("Molecule %d has no atoms; nothing to move", molecule_index)
            return Proposal(snapshot, None)

        params = self.draw_parameters(molecule)
        self.apply(molecule, params)
        logger.debug(
            "Moved molecule %d: pivot=%d delta=%s degrees=%s",
            molecule_index, params.pivot_index, params.delta, params.degrees,
        )
        return Proposal(snapshot, params)
