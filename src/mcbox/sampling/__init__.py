"""
Sampling module: uniform random sources used by move proposals.
"""

from .random_source import RandomSource, SynchronizedRandomSource, UniformRandomSource

__all__ = [
    "RandomSource",
    "UniformRandomSource",
    "SynchronizedRandomSource",
]
