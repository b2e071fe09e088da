"""
Cube behaviour settings.
"""

from dataclasses import dataclass
from enum import Enum


class GroupingStrategy(Enum):
    """How roll-up matches rows to existing groups."""
    HASH = "hash"      # dict keyed by scalar_key
    LINEAR = "linear"  # scan of existing groups, O(rows x groups)


class HeaderMatch(Enum):
    """Which position wins when a label repeats in an ingestion header."""
    FIRST = "first"
    LAST = "last"


@dataclass(frozen=True)
class CubeConfig:
    """Configuration shared by a cube and every cube derived from it."""
    grouping: GroupingStrategy = GroupingStrategy.HASH
    header_match: HeaderMatch = HeaderMatch.FIRST
