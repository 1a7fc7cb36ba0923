"""
Simulation box module.

Provides the public contract used by a Monte Carlo driver and its
execution strategies:
- SimulationBox: Abstract contract
- SerialBox: Sequential strategy with a single snapshot slot
- ParallelBox: Thread-pool strategy with per-molecule snapshot slots
- create_box: Strategy selection at construction time
"""

from .factory import STRATEGIES, create_box
from .parallel_box import ParallelBox
from .serial_box import SerialBox
from .simulation_box import BoxEngine, SimulationBox

__all__ = [
    "SimulationBox",
    "BoxEngine",
    "SerialBox",
    "ParallelBox",
    "STRATEGIES",
    "create_box",
]
