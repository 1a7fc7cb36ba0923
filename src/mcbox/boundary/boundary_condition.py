"""
Abstract base class for boundary conditions.

This module provides the BoundaryCondition ABC that defines
the interface for all boundary condition strategies.
"""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from mcbox.core import Environment, Molecule


class BoundaryCondition(ABC):
    """
    Abstract base for boundary conditions (Strategy Pattern).

    BoundaryCondition maps coordinates back into the simulation volume.

    Design Notes:
        - BoundaryCondition is STATELESS - it does NOT own the box.
        - Box dimensions are passed in from the Environment, so one
          instance can be shared by every box strategy and worker thread.

    Example:
        >>> from mcbox.boundary import PeriodicBoundaryCondition
        >>> bc = PeriodicBoundaryCondition()
        >>> bc.wrap(11.0, 10.0)
        1.0
        >>> bc.enforce(molecule, environment)
    """

    @abstractmethod
    def wrap(self, coordinate: float, dimension: float) -> float:
        """
        Map a single coordinate into the box along one axis.

        Args:
            coordinate: Any real coordinate.
            dimension: Box length along that axis (> 0).

        Returns:
            The mapped coordinate.
        """
        pass

    @abstractmethod
    def wrap_positions(
        self,
        positions: NDArray[np.floating],
        box: NDArray[np.floating],
    ) -> NDArray[np.floating]:
        """
        Map positions into the primary simulation box.

        Args:
            positions: (N, 3) atomic positions.
            box: (3,) box dimensions FROM THE ENVIRONMENT.

        Returns:
            Mapped positions (new array).
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """
        Get human-readable name of this boundary condition.

        Returns:
            Name string (e.g., "Periodic").
        """
        pass

    def enforce(self, molecule: "Molecule", environment: "Environment") -> None:
        """
        Apply the boundary to every atom of a molecule in place.

        Each atom is handled independently, so a molecule straddling a
        face of the box may end up split across it. No center-of-mass
        correction is made.

        Args:
            molecule: Molecule whose atom positions are overwritten.
            environment: Supplies the box dimensions.
        """
        if molecule.num_of_atoms == 0:
            return
        molecule.set_positions(
            self.wrap_positions(molecule.positions(), environment.box)
        )
