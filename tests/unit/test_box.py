"""
Unit tests for box module.

Contract tests run against both execution strategies; strategy-specific
behavior is tested per class.
"""
import copy
import gc
import logging
import threading
import weakref

import numpy as np
import pytest

from mcbox.box import ParallelBox, SerialBox, SimulationBox, create_box
from mcbox.core import Atom, ConfigurationBundle, Environment, Molecule
from mcbox.exceptions import (
    BoxClosedError,
    IndexOutOfRange,
    SnapshotCapacityMismatch,
    SnapshotIdentityMismatch,
    SnapshotMissing,
)
from mcbox.sampling import SynchronizedRandomSource, UniformRandomSource

STRATEGY_NAMES = ["serial", "parallel"]


@pytest.fixture(params=STRATEGY_NAMES)
def box(request, two_molecule_bundle: ConfigurationBundle):
    """A box of each strategy over the two-molecule bundle."""
    box = create_box(two_molecule_bundle, request.param, UniformRandomSource(17))
    yield box
    box.close()


class TestBoxContract:
    """Tests every strategy must pass."""

    def test_is_simulation_box(self, box: SimulationBox) -> None:
        """Both strategies implement the contract."""
        assert isinstance(box, SimulationBox)

    def test_counts_from_environment(self, box: SimulationBox) -> None:
        """atom_count and molecule_count mirror the Environment."""
        assert box.atom_count == box.environment.num_of_atoms == 7
        assert box.molecule_count == box.environment.num_of_molecules == 2

    def test_choose_molecule_in_range(self, box: SimulationBox) -> None:
        """choose_molecule always returns a valid index."""
        for _ in range(100):
            assert 0 <= box.choose_molecule() < box.molecule_count

    def test_propose_move_returns_index(self, box: SimulationBox) -> None:
        """propose_move returns the index it was given."""
        assert box.propose_move(1) == 1

    def test_propose_move_keeps_atoms_in_box(self, box: SimulationBox) -> None:
        """After any move every coordinate lies inside the box."""
        dims = box.environment.box
        for _ in range(200):
            index = box.propose_move(box.choose_molecule())
            positions = box.molecules[index].positions()
            assert np.all(positions >= 0.0)
            assert np.all(positions < dims)

    def test_snapshot_for_is_rollback_target(self, box: SimulationBox) -> None:
        """snapshot_for returns the stored snapshot, which restore never aliases."""
        before = copy.deepcopy(box.molecules[0])
        box.propose_move(0)
        snapshot = box.snapshot_for(0)
        assert snapshot is box.snapshot_for(0)
        assert snapshot.molecule == before

        box.rollback(0, snapshot)
        assert box.molecules[0] == before
        assert box.molecules[0].atoms[0] is not snapshot.molecule.atoms[0]

        box.molecules[0].atoms[0].move_to(9.5, 9.5, 9.5)
        assert snapshot.molecule == before
        box.rollback(0)
        assert box.molecules[0] == before

    def test_rollback_restores_exactly(self, box: SimulationBox) -> None:
        """Rollback right after a proposal restores every field."""
        for index in (0, 1, 1, 0):
            before = copy.deepcopy(box.molecules[index])
            box.propose_move(index)
            assert box.molecules[index] != before
            assert box.rollback(index) == index
            assert box.molecules[index] == before

    def test_rollback_consumes_snapshot(self, box: SimulationBox) -> None:
        """A second rollback without a new proposal has nothing to restore."""
        box.propose_move(0)
        box.rollback(0)
        assert box.snapshot_for(0) is None
        with pytest.raises(SnapshotMissing):
            box.rollback(0)

    def test_accept_discards_snapshot(self, box: SimulationBox) -> None:
        """accept keeps the moved state and drops the snapshot."""
        box.propose_move(1)
        moved = copy.deepcopy(box.molecules[1])
        assert box.accept(1) is True
        assert box.accept(1) is False
        assert box.molecules[1] == moved
        with pytest.raises(SnapshotMissing):
            box.rollback(1)

    def test_rollback_with_explicit_snapshot(self, box: SimulationBox) -> None:
        """A snapshot value can be passed back into rollback."""
        before = copy.deepcopy(box.molecules[0])
        box.propose_move(0)
        snapshot = box.snapshot_for(0)
        box.accept(0)
        box.rollback(0, snapshot=snapshot)
        assert box.molecules[0] == before

    def test_explicit_snapshot_identity_checked(self, box: SimulationBox) -> None:
        """An explicit snapshot of another molecule is refused."""
        box.propose_move(0)
        snapshot = box.snapshot_for(0)
        with pytest.raises(SnapshotIdentityMismatch):
            box.rollback(1, snapshot=snapshot)

    @pytest.mark.parametrize("index", [-1, 2])
    def test_index_out_of_range(self, box: SimulationBox, index: int) -> None:
        """Invalid indices are reported, not ignored."""
        with pytest.raises(IndexOutOfRange):
            box.propose_move(index)
        with pytest.raises(IndexOutOfRange):
            box.rollback(index)
        with pytest.raises(IndexOutOfRange):
            box.boundary_enforce(index)

    def test_boundary_wrap(self, box: SimulationBox) -> None:
        """boundary_wrap exposes periodic wrapping."""
        assert box.boundary_wrap(11.0, 10.0) == 1.0
        assert box.boundary_wrap(-1.0, 10.0) == 9.0

    def test_boundary_enforce(self, box: SimulationBox) -> None:
        """boundary_enforce wraps an externally displaced molecule."""
        box.molecules[1].atoms[0].move_to(11.0, 5.0, 5.0)
        box.boundary_enforce(1)
        assert box.molecules[1].atoms[0].position == (1.0, 5.0, 5.0)

    def test_close_releases_everything(self, box: SimulationBox) -> None:
        """close drops molecules and snapshots; later calls fail."""
        box.propose_move(0)
        snapshot_ref = weakref.ref(box.snapshot_for(0))
        box.close()
        gc.collect()
        assert snapshot_ref() is None
        assert box.molecules == []
        with pytest.raises(BoxClosedError):
            box.propose_move(0)
        with pytest.raises(BoxClosedError):
            box.choose_molecule()
        box.close()

    def test_context_manager(self, two_molecule_bundle: ConfigurationBundle) -> None:
        """Leaving the with block closes the box."""
        with create_box(two_molecule_bundle, random_source=UniformRandomSource(1)) as box:
            box.propose_move(0)
        with pytest.raises(BoxClosedError):
            box.rollback(0)

    def test_construction_reports_counts(
        self, two_molecule_bundle: ConfigurationBundle, caplog
    ) -> None:
        """Construction logs the atom and molecule counts."""
        with caplog.at_level(logging.INFO, logger="mcbox"):
            box = create_box(two_molecule_bundle, random_source=UniformRandomSource(1))
        box.close()
        assert "# of atoms: 7" in caplog.text
        assert "# of molecules: 2" in caplog.text


class TestSerialBox:
    """Tests specific to the single-slot serial strategy."""

    @pytest.fixture
    def serial(self, two_molecule_bundle: ConfigurationBundle) -> SerialBox:
        """Serial box with a seeded source."""
        return SerialBox(two_molecule_bundle, UniformRandomSource(3))

    def test_single_slot_scenario(self, serial: SerialBox) -> None:
        """propose(0), propose(1), rollback(1): only molecule 1 is restored."""
        mol1_before = copy.deepcopy(serial.molecules[1])
        serial.propose_move(0)
        mol0_moved = copy.deepcopy(serial.molecules[0])
        serial.propose_move(1)
        serial.rollback(1)
        assert serial.molecules[0] == mol0_moved
        assert serial.molecules[1] == mol1_before

    def test_rollback_of_overwritten_snapshot(self, serial: SerialBox) -> None:
        """The first molecule's snapshot is gone after the second proposal."""
        serial.propose_move(0)
        serial.propose_move(1)
        with pytest.raises(SnapshotIdentityMismatch):
            serial.rollback(0)

    def test_non_strict_rollback(self, two_molecule_bundle: ConfigurationBundle) -> None:
        """Without the identity check the live snapshot is restored anyway."""
        box = SerialBox(two_molecule_bundle, UniformRandomSource(3), strict_rollback=False)
        mol1_before = copy.deepcopy(box.molecules[1])
        box.propose_move(1)
        assert box.rollback(0) == 0
        # Molecule 0 has room for molecule 1's contents, so it now holds them.
        assert box.molecules[0] == mol1_before
        assert box.live_snapshot is None

    def test_non_strict_capacity_still_checked(
        self, two_molecule_bundle: ConfigurationBundle
    ) -> None:
        """A snapshot too large for the target is refused even when lenient."""
        box = SerialBox(two_molecule_bundle, UniformRandomSource(3), strict_rollback=False)
        box.propose_move(0)
        with pytest.raises(SnapshotCapacityMismatch):
            box.rollback(1)

    def test_single_live_snapshot(self, serial: SerialBox) -> None:
        """Repeated proposals never accumulate snapshots."""
        serial.propose_move(0)
        first = weakref.ref(serial.live_snapshot)
        for index in (1, 0, 1, 1):
            serial.propose_move(index)
        gc.collect()
        assert first() is None
        assert serial.live_snapshot.molecule_index == 1

    def test_snapshot_for_other_index(self, serial: SerialBox) -> None:
        """snapshot_for only returns the snapshot of its own index."""
        serial.propose_move(1)
        assert serial.snapshot_for(0) is None
        assert serial.snapshot_for(1) is serial.live_snapshot

    def test_zero_limit_scenario(self) -> None:
        """With zero move limits an atom outside the box only gets wrapped."""
        env = Environment(10.0, 10.0, 10.0, num_of_atoms=1, num_of_molecules=1)
        bundle = ConfigurationBundle(env, [Molecule(0, [Atom(11.0, 5.0, 5.0)])])
        box = SerialBox(bundle, UniformRandomSource(0))
        box.propose_move(0)
        assert box.molecules[0].atoms[0].position == (1.0, 5.0, 5.0)
        box.rollback(0)
        assert box.molecules[0].atoms[0].position == (11.0, 5.0, 5.0)


class TestParallelBoxBasics:
    """Construction-level tests for ParallelBox."""

    def test_wraps_random_source(self, two_molecule_bundle: ConfigurationBundle) -> None:
        """A plain source is wrapped in a SynchronizedRandomSource."""
        source = UniformRandomSource(1)
        with ParallelBox(two_molecule_bundle, source, max_workers=2) as box:
            assert isinstance(box.random_source, SynchronizedRandomSource)
            assert box.random_source.source is source

    def test_keeps_synchronized_source(self, two_molecule_bundle: ConfigurationBundle) -> None:
        """An already synchronized source is used as is."""
        source = SynchronizedRandomSource(UniformRandomSource(1))
        with ParallelBox(two_molecule_bundle, source, max_workers=2) as box:
            assert box.random_source is source

    @pytest.mark.parametrize("kwargs", [{"max_workers": 0}, {"min_chunk_size": 0}])
    def test_invalid_options(self, two_molecule_bundle: ConfigurationBundle, kwargs) -> None:
        """Worker and chunk settings must be positive."""
        with pytest.raises(ValueError):
            ParallelBox(two_molecule_bundle, UniformRandomSource(1), **kwargs)

    def test_snapshot_per_molecule(self, two_molecule_bundle: ConfigurationBundle) -> None:
        """Both molecules can be in flight and rolled back in any order."""
        with ParallelBox(two_molecule_bundle, UniformRandomSource(2), max_workers=2) as box:
            before = [copy.deepcopy(m) for m in box.molecules]
            box.propose_move(0)
            box.propose_move(1)
            assert box.pending_count == 2
            box.rollback(0)
            box.rollback(1)
            assert box.pending_count == 0
            assert box.molecules == before

    def test_reproposal_replaces_snapshot(self, two_molecule_bundle: ConfigurationBundle) -> None:
        """Proposing twice on one molecule keeps one snapshot for it."""
        with ParallelBox(two_molecule_bundle, UniformRandomSource(2), max_workers=2) as box:
            box.propose_move(0)
            first = weakref.ref(box.snapshot_for(0))
            box.propose_move(0)
            gc.collect()
            assert first() is None
            assert box.pending_count == 1

    def test_close_stops_worker_threads(self, make_bundle) -> None:
        """Closing the box shuts its thread pool down and joins the workers."""
        coords = [(0.25 * i, 1.0, 1.0) for i in range(40)]
        bundle = make_bundle([coords], box=20.0)
        existing = set(threading.enumerate())
        box = ParallelBox(bundle, UniformRandomSource(4), max_workers=2, min_chunk_size=4)
        box.propose_move(0)
        workers = [t for t in threading.enumerate()
                   if t not in existing and t.name.startswith("mcbox")]
        assert workers

        box.close()
        assert not any(t.is_alive() for t in workers)
        with pytest.raises(RuntimeError):
            box._executor.submit(int)


class TestCreateBox:
    """Tests for strategy selection."""

    @pytest.mark.parametrize("name,cls", [
        ("serial", SerialBox),
        ("parallel", ParallelBox),
        ("PARALLEL", ParallelBox),
    ])
    def test_strategy_selection(
        self, two_molecule_bundle: ConfigurationBundle, name: str, cls: type
    ) -> None:
        """The strategy name picks the implementation."""
        with create_box(two_molecule_bundle, name, UniformRandomSource(0)) as box:
            assert type(box) is cls

    def test_unknown_strategy(self, two_molecule_bundle: ConfigurationBundle) -> None:
        """Unknown strategy names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown box strategy"):
            create_box(two_molecule_bundle, "gpu")

    def test_parallel_options(self, two_molecule_bundle: ConfigurationBundle) -> None:
        """Strategy options are forwarded."""
        with create_box(two_molecule_bundle, "parallel", max_workers=3,
                        min_chunk_size=8) as box:
            assert box.max_workers == 3
            assert box.min_chunk_size == 8
