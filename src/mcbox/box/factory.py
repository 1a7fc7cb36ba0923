"""
Strategy selection for simulation boxes.
"""
from typing import TYPE_CHECKING, Dict, Optional, Type

from mcbox.sampling import UniformRandomSource

from .parallel_box import ParallelBox
from .serial_box import SerialBox
from .simulation_box import SimulationBox

if TYPE_CHECKING:
    from mcbox.core import ConfigurationBundle
    from mcbox.sampling import RandomSource

STRATEGIES: Dict[str, Type[SimulationBox]] = {
    "serial": SerialBox,
    "parallel": ParallelBox,
}


def create_box(
    bundle: "ConfigurationBundle",
    strategy: str = "serial",
    random_source: Optional["RandomSource"] = None,
    strict_rollback: bool = True,
    **options,
) -> SimulationBox:
    """
    Build a SimulationBox with the requested execution strategy.

    Args:
        bundle: Loaded configuration.
        strategy: "serial" or "parallel" (case-insensitive).
        random_source: Uniform sampler. Defaults to an unseeded
            UniformRandomSource.
        strict_rollback: Check rollback targets against snapshots.
        **options: Strategy-specific keyword arguments (for the parallel
            box: max_workers, min_chunk_size).

    Returns:
        The constructed box.

    Raises:
        ValueError: If the strategy is unknown.

    Example:
        >>> box = create_box(bundle, "parallel", UniformRandomSource(1), max_workers=2)
    """
    key = strategy.lower()
    if key not in STRATEGIES:
        raise ValueError(
            f"Unknown box strategy: {strategy} (expected one of {sorted(STRATEGIES)})"
        )
    if random_source is None:
        random_source = UniformRandomSource()
    return STRATEGIES[key](
        bundle, random_source, strict_rollback=strict_rollback, **options
    )
