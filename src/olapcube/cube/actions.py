"""
OLAP actions over cubes.

Actions a: C -> C' wrap the cube algebra in small value objects so a
sequence of operations can be described, checked and replayed:
- Slice: fix one dimension member and drop the dimension
- Dice: keep the rows matching a set of filters
- Roll-up: group by a subset of dimensions and aggregate the measures
"""

import logging
import operator as op
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from olapcube.cube.aggregators import AggregateFunction, Measure, compile_measures
from olapcube.cube.errors import ActionNotApplicableError
from olapcube.cube.labels import index_of
from olapcube.cube.model import Aggregator, Cube, Predicate
from olapcube.cube.scalar import ScalarKind, kind_of, scalar_equals

logger = logging.getLogger(__name__)


class ActionType(Enum):
    """Types of cube actions."""
    SLICE = "slice"
    DICE = "dice"
    ROLL_UP = "roll_up"


_ORDERING = {
    "<": op.lt,
    "<=": op.le,
    ">": op.gt,
    ">=": op.ge,
}


def _comparable(a: Any, b: Any) -> bool:
    numeric = (ScalarKind.INTEGER, ScalarKind.FLOAT)
    ka, kb = kind_of(a), kind_of(b)
    if ka is ScalarKind.ABSENT or kb is ScalarKind.ABSENT:
        return False
    return ka is kb or (ka in numeric and kb in numeric)


@dataclass
class Filter:
    """A selection predicate on one dimension."""
    dimension: str
    operator: str  # '=', '!=', 'IN', 'BETWEEN', '<', '<=', '>', '>='
    value: Any

    def matches(self, coordinate: Any) -> bool:
        """Evaluate the filter against a single coordinate value."""
        if self.operator == "=":
            return scalar_equals(coordinate, self.value)
        if self.operator == "!=":
            return not scalar_equals(coordinate, self.value)
        if self.operator == "IN":
            return any(scalar_equals(coordinate, v) for v in self.value)
        if self.operator == "BETWEEN":
            low, high = self.value
            return (_comparable(coordinate, low) and _comparable(coordinate, high)
                    and low <= coordinate <= high)
        if self.operator in _ORDERING:
            return (_comparable(coordinate, self.value)
                    and _ORDERING[self.operator](coordinate, self.value))
        raise ValueError(f"Unknown filter operator: {self.operator}")

    def to_predicate(self, dimensions: Sequence[str]) -> Predicate:
        """Bind the filter to a dimension order, returning a point predicate."""
        idx = index_of(self.dimension, dimensions)
        return lambda point: self.matches(point[idx])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dimension": self.dimension,
            "operator": self.operator,
            "value": self.value
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Filter":
        return cls(**data)


class CubeAction(ABC):
    """
    Abstract base class for cube actions.

    An action maps a cube to a new cube; it is applicable only when every
    label it references exists in the input cube.
    """

    @property
    @abstractmethod
    def action_type(self) -> ActionType:
        """Return the action type."""
        pass

    @abstractmethod
    def is_applicable(self, cube: Cube) -> bool:
        """Check if this action can be applied to the given cube."""
        pass

    @abstractmethod
    def apply(self, cube: Cube) -> Cube:
        """Apply this action, returning the new cube."""
        pass

    @abstractmethod
    def describe(self) -> str:
        """Return human-readable description of the action."""
        pass


@dataclass
class SliceAction(CubeAction):
    """
    Slice: fix a single value for a dimension.
    The dimension is removed from the resulting cube.
    """
    dimension: str
    value: Any

    @property
    def action_type(self) -> ActionType:
        return ActionType.SLICE

    def is_applicable(self, cube: Cube) -> bool:
        return self.dimension in cube.dimensions

    def apply(self, cube: Cube) -> Cube:
        return cube.slice(self.dimension, self.value)

    def describe(self) -> str:
        return f"Slice {self.dimension} = {self.value!r}"


@dataclass
class DiceAction(CubeAction):
    """
    Dice: keep the rows matching every filter and the optional predicate.
    Dimensions and fields are left untouched.
    """
    filters: List[Filter] = field(default_factory=list)
    predicate: Optional[Predicate] = None

    @property
    def action_type(self) -> ActionType:
        return ActionType.DICE

    def is_applicable(self, cube: Cube) -> bool:
        return all(f.dimension in cube.dimensions for f in self.filters)

    def apply(self, cube: Cube) -> Cube:
        checks = [f.to_predicate(cube.dimensions) for f in self.filters]
        if self.predicate is not None:
            checks.append(self.predicate)
        return cube.dice(lambda point: all(check(point) for check in checks))

    def describe(self) -> str:
        parts = [f"{f.dimension} {f.operator} {f.value!r}" for f in self.filters]
        if self.predicate is not None:
            parts.append(getattr(self.predicate, "__name__", "predicate"))
        return f"Dice {' AND '.join(parts) or 'all rows'}"


@dataclass
class RollUpAction(CubeAction):
    """
    Roll-up: group by the given dimensions and aggregate.

    Either pass aggregator/fields/initial_value directly, or build the
    action from measures with from_measures().
    """
    dimensions: List[str]
    fields: List[str] = field(default_factory=list)
    aggregator: Optional[Aggregator] = None
    initial_value: List[Any] = field(default_factory=list)
    measures: List[Measure] = field(default_factory=list)

    @classmethod
    def from_measures(cls, dimensions: Sequence[str], measures: Sequence[Measure]) -> "RollUpAction":
        return cls(dimensions=list(dimensions), measures=list(measures))

    @property
    def action_type(self) -> ActionType:
        return ActionType.ROLL_UP

    def is_applicable(self, cube: Cube) -> bool:
        if not all(d in cube.dimensions for d in self.dimensions):
            return False
        if self.measures:
            return all(
                m.function is AggregateFunction.COUNT or (m.source or m.name) in cube.fields
                for m in self.measures
            )
        return self.aggregator is not None

    def apply(self, cube: Cube) -> Cube:
        if self.measures:
            compiled = compile_measures(self.measures, cube.fields)
            return cube.roll_up(self.dimensions, compiled.fields,
                                compiled.aggregator, compiled.initial_value)
        return cube.roll_up(self.dimensions, self.fields, self.aggregator, self.initial_value)

    def describe(self) -> str:
        if self.measures:
            fields = ", ".join(m.describe() for m in self.measures)
        else:
            fields = ", ".join(self.fields)
        return f"Roll up on {', '.join(self.dimensions)} ({fields})"


def apply_actions(cube: Cube, actions: Sequence[CubeAction]) -> Cube:
    """
    Apply actions in order, each to the result of the previous one.

    Raises:
        ActionNotApplicableError: for the first action that does not fit
    """
    for action in actions:
        if not action.is_applicable(cube):
            raise ActionNotApplicableError(action)
        logger.debug(f"Applying {action.describe()}")
        cube = action.apply(cube)
    return cube
