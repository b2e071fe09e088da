"""
Error taxonomy for cube operations.

Every error raised by the cube core derives from CubeError so callers can
catch the whole family at once.
"""

from enum import Enum
from typing import Any


class CubeError(Exception):
    """Base class for all cube errors."""


class StructuralCheck(Enum):
    """Which structural check a cube failed."""
    POINT_ARITY = "point_arity"
    DATA_ARITY = "data_arity"
    ROW_COUNT = "row_count"


class StructuralMismatchError(CubeError):
    """Points, data and labels of a cube are not consistent."""

    def __init__(self, check: StructuralCheck, message: str):
        super().__init__(message)
        self.check = check


class LabelNotFoundError(CubeError, KeyError):
    """A referenced dimension or field name does not exist."""

    def __init__(self, label: str, axis: str):
        super().__init__(f"{axis} not found: {label!r}")
        self.label = label
        self.axis = axis

    def __str__(self):
        return self.args[0]


class DuplicateLabelError(CubeError):
    """A label sequence that must be unique contains a repeated name."""

    def __init__(self, label: str, axis: str):
        super().__init__(f"duplicate {axis}: {label!r}")
        self.label = label
        self.axis = axis


class HeaderArityError(CubeError):
    """Header length disagrees with the cube's dimensions plus fields."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"invalid header: expected {expected} labels, got {actual}")
        self.expected = expected
        self.actual = actual


class RowArityError(CubeError):
    """An ingested row does not have one value per header label."""

    def __init__(self, row_index: int, expected: int, actual: int):
        super().__init__(
            f"invalid row {row_index}: expected {expected} values, got {actual}"
        )
        self.row_index = row_index
        self.expected = expected
        self.actual = actual


class AggregateArityError(CubeError):
    """An aggregate tuple does not have one entry per output field."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"invalid aggregate: expected {expected} values, got {actual}")
        self.expected = expected
        self.actual = actual


class ScalarTypeError(CubeError, TypeError):
    """A value is not a supported scalar, or not of the requested kind."""


class ActionNotApplicableError(CubeError):
    """A cube action cannot be applied to the given cube."""

    def __init__(self, action: Any):
        super().__init__(f"action not applicable: {action.describe()}")
        self.action = action
