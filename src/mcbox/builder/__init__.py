"""
Builder module for simulation boxes.

Provides:
- BoxBuilder: Fluent construction of bundles and boxes
- Config loading from YAML files or dictionaries
"""

from .box_builder import BoxBuilder
from .config_loader import (
    BoxConfig,
    build_box_from_config,
    build_bundle_from_config,
    load_box,
    load_yaml,
)

__all__ = [
    "BoxBuilder",
    "BoxConfig",
    "load_yaml",
    "build_bundle_from_config",
    "build_box_from_config",
    "load_box",
]
