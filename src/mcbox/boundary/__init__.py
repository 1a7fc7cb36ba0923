"""
Boundary condition module for Monte Carlo box simulations.

This module provides the Strategy pattern implementation for
boundary conditions:
- BoundaryCondition: Abstract interface
- PeriodicBoundaryCondition: Fully periodic (bulk simulations)
"""

from .boundary_condition import BoundaryCondition
from .periodic_bc import PeriodicBoundaryCondition

__all__ = [
    "BoundaryCondition",
    "PeriodicBoundaryCondition",
]
