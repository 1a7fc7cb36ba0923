"""
Periodic boundary condition implementation.

This module provides fully periodic boundaries in all three dimensions,
the standard setting for bulk Monte Carlo simulations.
"""
import numpy as np
from numpy.typing import NDArray

from .boundary_condition import BoundaryCondition


def _wrap_array(
    values: NDArray[np.floating],
    dims: NDArray[np.floating],
) -> NDArray[np.floating]:
    # np.mod is exact (fmod based) for any magnitude. A tiny negative
    # remainder shifted by dims can round up to dims itself; fold it to 0.
    wrapped = np.mod(values, dims)
    return np.where(wrapped >= dims, 0.0, wrapped)


class PeriodicBoundaryCondition(BoundaryCondition):
    """
    Fully periodic boundaries in all dimensions.

    Atoms that exit one side of the box re-enter from the opposite side.
    Coordinates are mapped, not clamped: wrap(c, d) is congruent to c
    modulo d and lies in [0, d). Coordinates already inside the box come
    back bit-for-bit unchanged.

    Design Note:
        This class is STATELESS - no box is stored here.
        The box is passed as a parameter from the Environment.

    Example:
        >>> import numpy as np
        >>> from mcbox.boundary import PeriodicBoundaryCondition
        >>> bc = PeriodicBoundaryCondition()
        >>> bc.wrap(-1.0, 10.0)
        9.0
        >>> bc.wrap_positions(np.array([[11.0, 5.0, 5.0]]), np.array([10.0] * 3))
        array([[1., 5., 5.]])
    """

    def wrap(self, coordinate: float, dimension: float) -> float:
        """
        Wrap one coordinate into [0, dimension).

        Args:
            coordinate: Any finite real.
            dimension: Box length (> 0).

        Returns:
            Wrapped coordinate as a float.

        Raises:
            ValueError: If dimension is not positive or coordinate is not finite.
        """
        dimension = float(dimension)
        if not np.isfinite(dimension) or dimension <= 0:
            raise ValueError(f"Box dimension must be positive, got {dimension}")
        coordinate = float(coordinate)
        if not np.isfinite(coordinate):
            raise ValueError(f"Coordinate must be finite, got {coordinate}")
        return float(_wrap_array(np.float64(coordinate), np.float64(dimension)))

    def wrap_positions(
        self,
        positions: NDArray[np.floating],
        box: NDArray[np.floating],
    ) -> NDArray[np.floating]:
        """
        Wrap positions back into [0, box).

        Args:
            positions: (N, 3) atomic positions.
            box: (3,) box dimensions.

        Returns:
            Wrapped positions in [0, box).

        Raises:
            ValueError: If box is not positive or positions are not finite.
        """
        # Ensure inputs are arrays
        positions = np.asarray(positions, dtype=np.float64)
        box = np.asarray(box, dtype=np.float64)

        if np.any(box <= 0):
            raise ValueError(f"Box dimensions must be positive, got {box}")
        if not np.all(np.isfinite(positions)):
            raise ValueError("Positions must be finite")

        return _wrap_array(positions, box)

    def get_name(self) -> str:
        """Return 'Periodic' as the boundary condition name."""
        return "Periodic"
