"""
Checkpoint module: capture and restore of single molecules.

Provides:
- Snapshot: Pre-move copy of one molecule
- copy_molecule, save, restore: Copy primitive and its two uses
- CheckpointSlot, CheckpointStore: Live snapshot storage strategies
"""

from .snapshot import Snapshot, copy_molecule, restore, save
from .storage import CheckpointSlot, CheckpointStore, SnapshotStorage

__all__ = [
    "Snapshot",
    "copy_molecule",
    "save",
    "restore",
    "SnapshotStorage",
    "CheckpointSlot",
    "CheckpointStore",
]
