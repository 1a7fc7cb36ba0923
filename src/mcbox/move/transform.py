"""
Rigid-body transform of one molecule.

A move rotates every atom about a pivot atom, X axis first, then Y, then
Z, and then translates every atom by the same delta:

    p' = Rz(az) @ Ry(ay) @ Rx(ax) @ (p - pivot) + pivot + delta

Each atom's new position depends only on its own old position and the
move parameters, so the transform can be split over atoms freely.
"""
from dataclasses import dataclass
from typing import Tuple

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class MoveParameters:
    """
    Parameters of one rigid move.

    Attributes:
        pivot_index: Index (within the molecule) of the atom rotated about.
        delta: (dx, dy, dz) translation.
        degrees: (ax, ay, az) rotation angles in degrees about X, Y, Z.
    """
    pivot_index: int
    delta: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    degrees: Tuple[float, float, float] = (0.0, 0.0, 0.0)

    @property
    def has_rotation(self) -> bool:
        return any(angle != 0.0 for angle in self.degrees)


def rotation_matrix(
    degrees_x: float, degrees_y: float, degrees_z: float
) -> NDArray[np.floating]:
    """
    Build the combined rotation matrix Rz @ Ry @ Rx.

    Args:
        degrees_x, degrees_y, degrees_z: Right-handed rotation angles in
            degrees about the X, Y and Z axes.

    Returns:
        (3, 3) rotation matrix that applies X first, then Y, then Z.

    Example:
        >>> R = rotation_matrix(0.0, 0.0, 90.0)
        >>> np.round(R @ np.array([1.0, 0.0, 0.0]), 12)
        array([0., 1., 0.])
    """
    ax, ay, az = np.radians([degrees_x, degrees_y, degrees_z])
    cx, sx = np.cos(ax), np.sin(ax)
    cy, sy = np.cos(ay), np.sin(ay)
    cz, sz = np.cos(az), np.sin(az)

    rx = np.array([[1.0, 0.0, 0.0], [0.0, cx, -sx], [0.0, sx, cx]])
    ry = np.array([[cy, 0.0, sy], [0.0, 1.0, 0.0], [-sy, 0.0, cy]])
    rz = np.array([[cz, -sz, 0.0], [sz, cz, 0.0], [0.0, 0.0, 1.0]])
    return rz @ ry @ rx


def transform_positions(
    positions: NDArray[np.floating],
    pivot: NDArray[np.floating],
    params: MoveParameters,
) -> NDArray[np.floating]:
    """
    Apply a rigid move to a block of positions.

    Args:
        positions: (N, 3) positions; any subset of a molecule's atoms.
        pivot: (3,) position of the pivot atom before the move.
        params: Move parameters.

    Returns:
        New (N, 3) array of moved positions. Not wrapped into the box.
    """
    positions = np.asarray(positions, dtype=np.float64)
    moved = positions
    if params.has_rotation:
        R = rotation_matrix(*params.degrees)
        # Row vectors: (R @ v.T).T == v @ R.T
        moved = (positions - pivot) @ R.T + pivot
    return moved + np.asarray(params.delta, dtype=np.float64)
