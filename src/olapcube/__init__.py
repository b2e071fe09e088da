"""
olapcube: an in-memory multidimensional data cube

Slice, dice and roll-up over a row-aligned set of dimension coordinates
and measure values, with a pandas bridge for loading and exporting.
"""

__version__ = "0.1.0"
__author__ = "olapcube Team"

from olapcube.cube.model import Cube
from olapcube.cube.config import CubeConfig, GroupingStrategy
from olapcube.cube.errors import CubeError
from olapcube.cube.actions import SliceAction, DiceAction, RollUpAction, Filter

__all__ = [
    "Cube",
    "CubeConfig",
    "GroupingStrategy",
    "CubeError",
    "SliceAction",
    "DiceAction",
    "RollUpAction",
    "Filter",
]
