"""
Move module: random rigid-body moves.

Provides:
- MoveParameters: Pivot, translation and rotation of one move
- rotation_matrix, transform_positions: The pure transform
- MoveProposer: Molecule selection and move proposal
"""

from .proposer import MoveProposer, Proposal, TransformKernel
from .transform import MoveParameters, rotation_matrix, transform_positions

__all__ = [
    "MoveParameters",
    "rotation_matrix",
    "transform_positions",
    "MoveProposer",
    "Proposal",
    "TransformKernel",
]
