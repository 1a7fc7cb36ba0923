"""
Exception hierarchy for the box state core.

Every error raised on purpose by mcbox derives from MCBoxError and also
from the builtin exception it specializes, so callers may catch either.
"""


class MCBoxError(Exception):
    """Base class for all mcbox errors."""


class IndexOutOfRange(MCBoxError, IndexError):
    """Molecule (or atom) index outside the valid range."""

    def __init__(self, index: int, count: int, what: str = "molecule") -> None:
        self.index = index
        self.count = count
        super().__init__(f"{what} index {index} outside [0, {count})")


class AllocationFailure(MCBoxError, MemoryError):
    """A snapshot or collection could not be allocated.

    Fatal for the run: without a snapshot a rejected move cannot be undone.
    """


class SnapshotCapacityMismatch(MCBoxError, ValueError):
    """Restore target is too small for the snapshot's recorded counts."""


class SnapshotIdentityMismatch(MCBoxError, ValueError):
    """Rollback requested for a molecule other than the one checkpointed."""

    def __init__(self, requested: int, captured: int) -> None:
        self.requested = requested
        self.captured = captured
        super().__init__(
            f"snapshot was captured from molecule {captured}, "
            f"rollback requested for molecule {requested}"
        )


class SnapshotMissing(MCBoxError, LookupError):
    """No live snapshot exists for the requested rollback."""


class BoxClosedError(MCBoxError, RuntimeError):
    """Operation attempted on a box that has already been closed."""
