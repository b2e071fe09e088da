"""
Helpers over ordered label sequences (dimension and field names).
"""

from typing import List, Optional, Sequence

from olapcube.cube.config import HeaderMatch
from olapcube.cube.errors import DuplicateLabelError, LabelNotFoundError


def copy_labels(labels: Sequence[str]) -> List[str]:
    return list(labels)


def remove_at(values: Sequence, index: int) -> list:
    """Return a new list without the entry at index."""
    return list(values[:index]) + list(values[index + 1:])


def find_index(label: str, labels: Sequence[str],
               match: HeaderMatch = HeaderMatch.FIRST) -> Optional[int]:
    """Position of label in labels, or None when absent."""
    found = None
    for i, candidate in enumerate(labels):
        if candidate == label:
            found = i
            if match is HeaderMatch.FIRST:
                break
    return found


def index_of(label: str, labels: Sequence[str], axis: str = "dimension") -> int:
    """Position of label in labels; raises LabelNotFoundError when absent."""
    idx = find_index(label, labels)
    if idx is None:
        raise LabelNotFoundError(label, axis)
    return idx


def ensure_unique(labels: Sequence[str], axis: str) -> None:
    seen = set()
    for label in labels:
        if label in seen:
            raise DuplicateLabelError(label, axis)
        seen.add(label)
