"""
Uniform random sources for move proposals.

The box only needs draw(low, high) returning a real in [low, high). Any
object with that method can be passed to a box; the classes here are the
stock implementations.
"""
import threading
from typing import Optional, Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class RandomSource(Protocol):
    """Anything that can draw a uniform real in [low, high)."""

    def draw(self, low: float, high: float) -> float:
        ...


class UniformRandomSource:
    """
    Uniform sampler backed by a numpy Generator.

    Args:
        seed: Seed for numpy.random.default_rng. None draws fresh entropy.

    Example:
        >>> rng = UniformRandomSource(seed=42)
        >>> 0.0 <= rng.draw(0.0, 1.0) < 1.0
        True
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def draw(self, low: float, high: float) -> float:
        """
        Draw one value from U[low, high).

        When low == high the result is low.

        Raises:
            ValueError: If high < low.
        """
        if high < low:
            raise ValueError(f"high ({high}) must be >= low ({low})")
        return float(self._rng.uniform(low, high))

    def __repr__(self) -> str:
        return f"UniformRandomSource(seed={self.seed})"


class SynchronizedRandomSource:
    """
    Serializes access to a shared random source.

    All draws from all threads go through one stream, one at a time. The
    lock is reentrant and exposed so a caller can make a group of draws
    atomic (for example the seven draws of one move), which keeps the
    per-move draw order identical to a sequential run.

    Attributes:
        source: The wrapped RandomSource.
        lock: Reentrant lock guarding the stream.
    """

    def __init__(self, source: RandomSource) -> None:
        self.source = source
        self.lock = threading.RLock()

    def draw(self, low: float, high: float) -> float:
        with self.lock:
            return self.source.draw(low, high)

    def __repr__(self) -> str:
        return f"SynchronizedRandomSource({self.source!r})"
