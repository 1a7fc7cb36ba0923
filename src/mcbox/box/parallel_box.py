"""
Thread-parallel simulation box.

Splits the per-atom rotation/translation of a move over a thread pool and
keeps one snapshot slot per molecule, so proposals on different molecules
may run concurrently from several driver threads.

Random numbers come from one stream shared by every thread. Each move
draws its seven values atomically under the stream's lock, so the values
of any single move are consecutive draws, as in the serial box. With
several driver threads the interleaving of whole moves is not
reproducible; with one driver thread a seeded ParallelBox draws exactly
what a seeded SerialBox draws.
"""
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, List, Optional

import numpy as np
from numpy.typing import NDArray

from mcbox.checkpoint import CheckpointStore, Snapshot
from mcbox.move import MoveParameters, transform_positions
from mcbox.sampling import SynchronizedRandomSource

from .simulation_box import BoxEngine, SimulationBox

if TYPE_CHECKING:
    from mcbox.boundary import BoundaryCondition
    from mcbox.core import ConfigurationBundle, Environment, Molecule
    from mcbox.sampling import RandomSource

logger = logging.getLogger(__name__)


class ParallelBox(SimulationBox):
    """
    SimulationBox that runs per-atom work on a thread pool.

    Molecules with fewer than 2 * min_chunk_size atoms are moved on the
    calling thread; larger ones are split into at most max_workers
    contiguous chunks. Wrapping runs as one vectorized pass afterwards.

    Rollback always targets the molecule's own snapshot, since snapshots
    are keyed by index. A driver thread must not propose on a molecule
    another thread is currently proposing on.

    The box owns a thread pool that only close() shuts down. Use it as a
    context manager or call close() explicitly; an unclosed box keeps its
    worker threads until the interpreter exits.

    Example:
        >>> with ParallelBox(bundle, UniformRandomSource(3), max_workers=4) as box:
        ...     index = box.propose_move(5)
        ...     box.rollback(index)
    """

    def __init__(
        self,
        bundle: "ConfigurationBundle",
        random_source: "RandomSource",
        strict_rollback: bool = True,
        boundary_condition: Optional["BoundaryCondition"] = None,
        max_workers: Optional[int] = None,
        min_chunk_size: int = 64,
    ) -> None:
        """
        Initialize a parallel box.

        Args:
            bundle: Loaded configuration; the box takes ownership.
            random_source: Uniform sampler. Wrapped in a
                SynchronizedRandomSource unless it already is one.
            strict_rollback: Check explicit snapshots against the index.
            boundary_condition: Defaults to PeriodicBoundaryCondition.
            max_workers: Thread pool size. Defaults to min(32, cpu + 4).
            min_chunk_size: Smallest number of atoms per chunk.

        Raises:
            ValueError: If max_workers or min_chunk_size is below 1.
        """
        if max_workers is None:
            max_workers = min(32, (os.cpu_count() or 1) + 4)
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        if min_chunk_size < 1:
            raise ValueError(f"min_chunk_size must be >= 1, got {min_chunk_size}")

        self.max_workers = int(max_workers)
        self.min_chunk_size = int(min_chunk_size)

        if not isinstance(random_source, SynchronizedRandomSource):
            random_source = SynchronizedRandomSource(random_source)
        self.random_source = random_source

        self._store = CheckpointStore()
        self._engine = BoxEngine(
            bundle,
            random_source,
            self._store,
            kernel=self._transform,
            draw_lock=random_source.lock,
            boundary_condition=boundary_condition,
            strict_rollback=strict_rollback,
        )
        self._executor = ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="mcbox"
        )
        logger.debug(
            "ParallelBox using %d workers, min chunk %d atoms",
            self.max_workers, self.min_chunk_size,
        )

    def _transform(
        self,
        positions: NDArray[np.floating],
        pivot: NDArray[np.floating],
        params: MoveParameters,
    ) -> NDArray[np.floating]:
        n_atoms = len(positions)
        n_chunks = min(self.max_workers, n_atoms // self.min_chunk_size)
        if n_chunks < 2:
            return transform_positions(positions, pivot, params)

        futures = [
            self._executor.submit(transform_positions, block, pivot, params)
            for block in np.array_split(positions, n_chunks)
        ]
        return np.concatenate([future.result() for future in futures])

    @property
    def environment(self) -> "Environment":
        return self._engine.system.environment

    @property
    def molecules(self) -> List["Molecule"]:
        return self._engine.system.molecules

    @property
    def pending_count(self) -> int:
        """Number of molecules with a live snapshot."""
        return len(self._store)

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
        self._executor.shutdown(wait=True)

    def __repr__(self) -> str:
        return (
            f"ParallelBox(n_molecules={self.molecule_count}, "
            f"n_atoms={self.atom_count}, max_workers={self.max_workers}, "
            f"closed={self._engine.closed})"
        )
