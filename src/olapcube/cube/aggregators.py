"""
Ready-made aggregators for Cube.roll_up.

An aggregator folds one source row into a group's running aggregate:
aggregator(current_aggregate, row_measures) -> new_aggregate. The functions
here build aggregators for the common cases; anything else can be written as
a plain function with the same signature.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Sequence

from olapcube.cube.labels import index_of
from olapcube.cube.model import Aggregator
from olapcube.cube.scalar import as_int, as_number, as_float


class AggregateFunction(Enum):
    """Supported aggregate functions for measures."""
    SUM = "SUM"
    COUNT = "COUNT"
    MIN = "MIN"
    MAX = "MAX"

    @property
    def initial_value(self) -> Any:
        if self in (AggregateFunction.SUM, AggregateFunction.COUNT):
            return 0
        return None


def count_rows() -> Aggregator:
    """Single-field aggregator counting source rows. Initial value: [0]."""
    def aggregate(current, row):
        return [as_int(current[0]) + 1]
    return aggregate


def sum_fields(indexes: Sequence[int]) -> Aggregator:
    """
    Sum the row measures at the given positions, one output field each.

    Absent measures are skipped. Initial value: [0] * len(indexes).
    """
    indexes = list(indexes)

    def aggregate(current, row):
        result = []
        for total, idx in zip(current, indexes):
            value = as_number(row[idx], allow_absent=True)
            result.append(total if value is None else as_number(total) + value)
        return result
    return aggregate


def weighted_average(count_index: int, value_index: int) -> Aggregator:
    """
    Running count and count-weighted average of a ratio measure.

    The aggregate is [count, average]; initial value [0, None]. A group whose
    total count stays zero keeps average None.
    """
    def aggregate(current, row):
        total = as_int(current[0])
        average = as_float(current[1], allow_absent=True)
        if average is None:
            average = 1.0

        count = as_int(row[count_index])
        ratio = as_float(row[value_index])

        if total + count > 0:
            average = (total * average + count * ratio) / (total + count)
        elif current[1] is None:
            average = None

        return [total + count, average]
    return aggregate


@dataclass
class Measure:
    """
    An aggregated output field.

    Attributes:
        name: Output field name
        function: Aggregate function
        source: Source field name (ignored for COUNT)
    """
    name: str
    function: AggregateFunction = AggregateFunction.SUM
    source: Optional[str] = None

    def describe(self) -> str:
        if self.function is AggregateFunction.COUNT:
            return f"COUNT(*) AS {self.name}"
        return f"{self.function.value}({self.source or self.name}) AS {self.name}"


@dataclass
class CompiledMeasures:
    """Arguments for Cube.roll_up derived from a list of measures."""
    fields: List[str]
    aggregator: Aggregator
    initial_value: List[Any]


def _fold(function: AggregateFunction, current: Any, value: Any) -> Any:
    if function is AggregateFunction.COUNT:
        return as_int(current) + 1
    value = as_number(value, allow_absent=True)
    if value is None:
        return current
    if function is AggregateFunction.SUM:
        return as_number(current) + value
    current = as_number(current, allow_absent=True)
    if current is None:
        return value
    if function is AggregateFunction.MIN:
        return min(current, value)
    return max(current, value)


def compile_measures(measures: Sequence[Measure], source_fields: Sequence[str]) -> CompiledMeasures:
    """
    Build a roll-up aggregator computing several measures at once.

    Source field names are resolved against source_fields up front, so an
    unknown name raises LabelNotFoundError before any row is processed.
    """
    plan = []
    for m in measures:
        if m.function is AggregateFunction.COUNT:
            plan.append((m.function, None))
        else:
            plan.append((m.function, index_of(m.source or m.name, source_fields, "field")))

    def aggregate(current, row):
        return [
            _fold(function, current[i], None if idx is None else row[idx])
            for i, (function, idx) in enumerate(plan)
        ]

    return CompiledMeasures(
        fields=[m.name for m in measures],
        aggregator=aggregate,
        initial_value=[m.function.initial_value for m in measures],
    )
