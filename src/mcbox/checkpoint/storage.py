"""
Storage strategies for live snapshots.

- CheckpointSlot: one slot for the whole box (sequential strategy)
- CheckpointStore: one slot per molecule index (parallel strategy)

Callers release the slot a new snapshot will occupy before saving, so at
most one snapshot per slot is alive at any time.
"""
import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional

from mcbox.exceptions import SnapshotIdentityMismatch, SnapshotMissing

from .snapshot import Snapshot


class SnapshotStorage(ABC):
    """
    Abstract holder of live snapshots (Strategy Pattern).

    Example:
        >>> storage = CheckpointSlot()
        >>> storage.release(3)
        >>> storage.hold(save(molecule, 3))
        >>> snapshot = storage.get(3)
        >>> restore(snapshot, molecule)
        >>> storage.discard(3)
    """

    @abstractmethod
    def release(self, index: int) -> None:
        """Drop the snapshot a new checkpoint of index would replace."""
        pass

    @abstractmethod
    def hold(self, snapshot: Snapshot) -> None:
        """Keep snapshot as the live checkpoint of its molecule index."""
        pass

    @abstractmethod
    def get(self, index: int, strict: bool = True) -> Snapshot:
        """
        Return the live snapshot for index without removing it.

        Args:
            index: Molecule index the caller wants to restore.
            strict: Refuse a snapshot captured from a different index.

        Raises:
            SnapshotMissing: If no snapshot is available.
            SnapshotIdentityMismatch: If strict and the live snapshot
                belongs to another index.
        """
        pass

    @abstractmethod
    def discard(self, index: int) -> bool:
        """Drop the snapshot of index. Returns True if one was dropped."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Drop every snapshot."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass


class CheckpointSlot(SnapshotStorage):
    """
    A single snapshot slot shared by all molecules.

    Only one proposal can be in flight: checkpointing any molecule
    releases whatever the slot held before.
    """

    def __init__(self) -> None:
        self._snapshot: Optional[Snapshot] = None

    @property
    def snapshot(self) -> Optional[Snapshot]:
        """The live snapshot, if any."""
        return self._snapshot

    def release(self, index: int) -> None:
        self._snapshot = None

    def hold(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot

    def get(self, index: int, strict: bool = True) -> Snapshot:
        snapshot = self._snapshot
        if snapshot is None:
            raise SnapshotMissing(f"no live snapshot to restore molecule {index}")
        if strict and snapshot.molecule_index != index:
            raise SnapshotIdentityMismatch(index, snapshot.molecule_index)
        return snapshot

    def discard(self, index: int) -> bool:
        if self._snapshot is not None and self._snapshot.molecule_index == index:
            self._snapshot = None
            return True
        return False

    def clear(self) -> None:
        self._snapshot = None

    def __len__(self) -> int:
        return 0 if self._snapshot is None else 1


class CheckpointStore(SnapshotStorage):
    """
    Snapshot slots keyed by molecule index.

    Lets several proposals on different molecules be in flight at once.
    All access is serialized by an internal lock; a snapshot for index i
    can only ever be restored into molecule i.
    """

    def __init__(self) -> None:
        self._snapshots: Dict[int, Snapshot] = {}
        self._lock = threading.Lock()

    def release(self, index: int) -> None:
        with self._lock:
            self._snapshots.pop(index, None)

    def hold(self, snapshot: Snapshot) -> None:
        with self._lock:
            self._snapshots[snapshot.molecule_index] = snapshot

    def get(self, index: int, strict: bool = True) -> Snapshot:
        with self._lock:
            snapshot = self._snapshots.get(index)
        if snapshot is None:
            raise SnapshotMissing(f"no live snapshot for molecule {index}")
        return snapshot

    def discard(self, index: int) -> bool:
        with self._lock:
            return self._snapshots.pop(index, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._snapshots.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._snapshots)
