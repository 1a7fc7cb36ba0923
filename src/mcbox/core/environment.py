"""
Environment class for Monte Carlo simulations.

This module provides the Environment dataclass: the global, read-only
parameters shared by every component of a simulation box.
"""
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class Environment:
    """
    Global simulation parameters.

    Attributes:
        x, y, z: Box dimensions (all > 0).
        max_translation: Largest translation per axis in one move (>= 0).
        max_rotation: Largest rotation per axis in one move, degrees (>= 0).
        num_of_atoms: Total number of atoms in the box.
        num_of_molecules: Total number of molecules in the box.

    Example:
        >>> from mcbox.core import Environment
        >>> env = Environment(x=10.0, y=10.0, z=10.0,
        ...                   max_translation=0.5, max_rotation=15.0,
        ...                   num_of_atoms=30, num_of_molecules=10)
        >>> env.box
        array([10., 10., 10.])
    """
    x: float
    y: float
    z: float
    max_translation: float = 0.0
    max_rotation: float = 0.0
    num_of_atoms: int = 0
    num_of_molecules: int = 0

    def __post_init__(self) -> None:
        """Validate parameters after initialization."""
        for axis in ("x", "y", "z"):
            value = float(getattr(self, axis))
            if not np.isfinite(value) or value <= 0:
                raise ValueError(f"Box dimension {axis} must be positive, got {value}")
            object.__setattr__(self, axis, value)
        for name in ("max_translation", "max_rotation"):
            value = float(getattr(self, name))
            if not np.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
            object.__setattr__(self, name, value)
        for name in ("num_of_atoms", "num_of_molecules"):
            raw = getattr(self, name)
            try:
                value = int(raw)
            except (TypeError, ValueError, OverflowError):
                value = None
            if isinstance(raw, bool) or value is None or value != raw:
                raise ValueError(f"{name} must be an integer, got {raw!r}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
            object.__setattr__(self, name, value)

    @property
    def box(self) -> NDArray[np.floating]:
        """Box dimensions as a (3,) array."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def get_volume(self) -> float:
        """Volume of the orthorhombic box."""
        return self.x * self.y * self.z
