"""
Checkpoint and restore of a single molecule.

A snapshot is a standalone deep copy of one molecule, sized exactly to the
molecule's counts at capture time and tagged with the index it came from.
save() captures a snapshot, restore() writes one back. Both go through
copy_molecule(), the one copy primitive.
"""
import copy
import logging
from dataclasses import dataclass

from mcbox.core import Molecule, MoleculeCounts
from mcbox.exceptions import AllocationFailure, SnapshotCapacityMismatch

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Snapshot:
    """
    Pre-move copy of one molecule.

    Attributes:
        molecule_index: Index of the molecule the snapshot was taken from.
            A snapshot is only meaningful for that index.
        molecule: The captured copy. Snapshots returned by a box
            (snapshot_for, live_snapshot, Proposal.snapshot) are the live
            rollback targets, not copies: treat them as read-only, since
            editing them changes what a later rollback restores.
            restore() copies out of it, so one snapshot can be restored
            more than once.
    """
    molecule_index: int
    molecule: Molecule

    @property
    def counts(self) -> MoleculeCounts:
        """Counts recorded at capture time."""
        return self.molecule.counts

    @property
    def molecule_id(self) -> int:
        return self.molecule.molecule_id


def copy_molecule(dst: Molecule, src: Molecule) -> Molecule:
    """
    Copy counts, id and every valid entry of src into dst.

    Entries are copied into fresh objects, so dst and src share nothing
    afterwards. Slots of dst past src's counts are left as they are.

    Args:
        dst: Destination; its capacity must hold src's counts.
        src: Source molecule.

    Returns:
        dst, for chaining.

    Raises:
        SnapshotCapacityMismatch: If any dst capacity is below the matching
            src count. dst is not modified in that case.
    """
    counts = src.counts
    if not counts.fits_within(dst.capacity):
        raise SnapshotCapacityMismatch(
            f"destination capacity {tuple(dst.capacity)} cannot hold "
            f"counts {tuple(counts)} of molecule {src.molecule_id}"
        )

    for name, count in zip(MoleculeCounts._fields, counts):
        src_items = getattr(src, name)
        dst_items = getattr(dst, name)
        for i in range(count):
            dst_items[i] = copy.copy(src_items[i])

    dst.set_counts(counts)
    dst.molecule_id = src.molecule_id
    return dst


def save(molecule: Molecule, molecule_index: int) -> Snapshot:
    """
    Capture a snapshot of molecule.

    Args:
        molecule: Molecule to copy.
        molecule_index: Index of the molecule in its system.

    Returns:
        New Snapshot whose capacity equals the molecule's current counts.

    Raises:
        AllocationFailure: If memory for the copy cannot be obtained.
    """
    try:
        shell = Molecule.allocate(molecule.counts)
        copy_molecule(shell, molecule)
    except MemoryError as exc:
        raise AllocationFailure(
            f"could not allocate snapshot of molecule {molecule_index} "
            f"with counts {tuple(molecule.counts)}"
        ) from exc
    return Snapshot(molecule_index=molecule_index, molecule=shell)


def restore(snapshot: Snapshot, destination: Molecule) -> Molecule:
    """
    Overwrite destination with the contents of snapshot.

    The caller is responsible for passing the molecule the snapshot was
    captured from; see SnapshotStorage.get for the checked path.

    Raises:
        SnapshotCapacityMismatch: If destination is too small.
    """
    logger.debug(
        "Restoring molecule %d from snapshot (counts=%s)",
        snapshot.molecule_index, tuple(snapshot.counts),
    )
    return copy_molecule(destination, snapshot.molecule)
