"""
In-memory OLAP cube.

A Cube holds two row-aligned collections: points (one coordinate per
dimension) and data (one measure per field). Slice, dice and roll-up return
new cubes and never touch the receiver; add_rows is the only mutator.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from olapcube.cube.config import CubeConfig, GroupingStrategy
from olapcube.cube.errors import (
    AggregateArityError,
    HeaderArityError,
    LabelNotFoundError,
    RowArityError,
    StructuralCheck,
    StructuralMismatchError,
)
from olapcube.cube.labels import copy_labels, ensure_unique, find_index, index_of, remove_at
from olapcube.cube.scalar import kind_of, scalar_equals, scalar_key

logger = logging.getLogger(__name__)

# (current_aggregate, row_measures) -> new_aggregate
Aggregator = Callable[[List[Any], Tuple[Any, ...]], Sequence[Any]]
Predicate = Callable[[List[Any]], bool]


@dataclass
class Cube:
    """
    A multidimensional cube.

    Attributes:
        dimensions: Ordered dimension names (coordinate axes)
        fields: Ordered field names (measure axes)
        points: One coordinate list per row, aligned with dimensions
        data: One measure list per row, aligned with fields
        config: Behaviour settings, inherited by derived cubes
    """
    dimensions: List[str] = field(default_factory=list)
    fields: List[str] = field(default_factory=list)
    points: List[List[Any]] = field(default_factory=list)
    data: List[List[Any]] = field(default_factory=list)
    config: CubeConfig = field(default_factory=CubeConfig, compare=False, repr=False)

    def __len__(self):
        return len(self.points)

    def __bool__(self):
        # an empty cube is still a cube
        return True

    def _derive(self, dimensions: List[str], fields: List[str]) -> "Cube":
        return Cube(dimensions=dimensions, fields=fields, config=self.config)

    # -- validation -------------------------------------------------------

    def validate(self) -> None:
        """
        Check that points, data and labels line up.

        An empty data list is always valid. Raises StructuralMismatchError
        naming the first failed check otherwise.
        """
        if not self.data:
            return

        for i, point in enumerate(self.points):
            if len(point) != len(self.dimensions):
                raise StructuralMismatchError(
                    StructuralCheck.POINT_ARITY,
                    f"invalid point {i}: {len(point)} coordinates for "
                    f"{len(self.dimensions)} dimensions",
                )

        for i, values in enumerate(self.data):
            if len(values) != len(self.fields):
                raise StructuralMismatchError(
                    StructuralCheck.DATA_ARITY,
                    f"invalid data {i}: {len(values)} values for {len(self.fields)} fields",
                )

        if len(self.data) != len(self.points):
            raise StructuralMismatchError(
                StructuralCheck.ROW_COUNT,
                f"orphan rows: {len(self.points)} points, {len(self.data)} data tuples",
            )

    def is_valid(self) -> bool:
        try:
            self.validate()
        except StructuralMismatchError:
            return False
        return True

    # -- projection -------------------------------------------------------

    def headers(self) -> List[str]:
        """Column names for rows(): dimensions then fields."""
        return copy_labels(self.dimensions) + copy_labels(self.fields)

    def rows(self) -> List[List[Any]]:
        """The cube content as fresh row lists, in row order."""
        return [list(point) + list(values) for point, values in zip(self.points, self.data)]

    # -- ingestion --------------------------------------------------------

    def add_rows(self, header: Sequence[str], rows: Sequence[Sequence[Any]]) -> int:
        """
        Append tabular rows whose columns are named by header.

        Header order is free; each dimension and field is looked up by name.
        Everything is checked before the first row is appended, including
        that every value is a supported scalar, so a failed call leaves the
        cube untouched.

        Returns:
            Number of rows appended
        """
        expected = len(self.dimensions) + len(self.fields)
        if len(header) != expected:
            raise HeaderArityError(expected, len(header))

        match = self.config.header_match
        dim_indexes = self._header_indexes(self.dimensions, header, match, "dimension")
        fld_indexes = self._header_indexes(self.fields, header, match, "field")

        for i, row in enumerate(rows):
            if len(row) != len(header):
                raise RowArityError(i, len(header), len(row))
            for value in row:
                kind_of(value)

        for row in rows:
            self.points.append([row[j] for j in dim_indexes])
            self.data.append([row[j] for j in fld_indexes])

        logger.debug(f"Added {len(rows)} rows, cube now has {len(self.points)}")
        return len(rows)

    @staticmethod
    def _header_indexes(labels, header, match, axis) -> List[int]:
        indexes = []
        for label in labels:
            idx = find_index(label, header, match)
            if idx is None:
                raise LabelNotFoundError(label, axis)
            indexes.append(idx)
        return indexes

    # -- algebra ----------------------------------------------------------

    def slice(self, dimension: str, value: Any) -> "Cube":
        """
        Fix one dimension to a single value and drop it from the result.

        Args:
            dimension: Name of the dimension to fix
            value: Coordinate to keep, compared with strict scalar equality
        """
        dim_index = index_of(dimension, self.dimensions)
        new_cube = self._derive(remove_at(self.dimensions, dim_index), copy_labels(self.fields))

        for point, values in zip(self.points, self.data):
            if scalar_equals(point[dim_index], value):
                new_cube.points.append(remove_at(point, dim_index))
                new_cube.data.append(list(values))

        logger.debug(f"Slice {dimension}={value!r}: {len(self.points)} -> {len(new_cube.points)} rows")
        return new_cube

    def dice(self, predicate: Predicate) -> "Cube":
        """Keep the rows whose point satisfies predicate; schema is unchanged."""
        new_cube = self._derive(copy_labels(self.dimensions), copy_labels(self.fields))

        for point, values in zip(self.points, self.data):
            if predicate(list(point)):
                new_cube.points.append(list(point))
                new_cube.data.append(list(values))

        logger.debug(f"Dice: {len(self.points)} -> {len(new_cube.points)} rows")
        return new_cube

    def roll_up(self, dimensions: Sequence[str], fields: Sequence[str],
                aggregator: Aggregator, initial_value: Sequence[Any]) -> "Cube":
        """
        Group rows by a subset of dimensions and fold their measures.

        Groups appear in first-seen order. Each group starts from a copy of
        initial_value and is folded with aggregator(aggregate, row_measures)
        once per source row. Errors raised by the aggregator propagate.

        Args:
            dimensions: Grouping dimensions, in output order
            fields: Names of the aggregate fields produced by aggregator
            aggregator: Fold function over (current aggregate, row measures)
            initial_value: Starting aggregate, one entry per output field

        Example:
            cube.roll_up(["Year"], ["Count"], lambda agg, row: [agg[0] + row[0]], [0])
        """
        ensure_unique(dimensions, "dimension")
        ensure_unique(fields, "field")
        if len(initial_value) != len(fields):
            raise AggregateArityError(len(fields), len(initial_value))

        dim_indexes = [index_of(d, self.dimensions) for d in dimensions]
        new_cube = self._derive(copy_labels(dimensions), copy_labels(fields))
        groups = self._group_index(new_cube)

        for point, values in zip(self.points, self.data):
            key = [point[i] for i in dim_indexes]

            found = groups.find(key)
            if found is None:
                found = len(new_cube.points)
                new_cube.points.append(key)
                new_cube.data.append(list(initial_value))
                groups.add(key, found)

            aggregate = aggregator(new_cube.data[found], tuple(values))
            if len(aggregate) != len(fields):
                raise AggregateArityError(len(fields), len(aggregate))
            new_cube.data[found] = list(aggregate)

        logger.debug(
            f"RollUp on {list(dimensions)}: {len(self.points)} rows -> {len(new_cube.points)} groups"
        )
        return new_cube

    def _group_index(self, target: "Cube") -> "_GroupIndex":
        if self.config.grouping is GroupingStrategy.LINEAR:
            return _LinearGroupIndex(target)
        return _HashGroupIndex()


class _GroupIndex:
    """Maps a roll-up key to the position of its group in the output cube."""

    def find(self, key: List[Any]) -> Optional[int]:
        raise NotImplementedError

    def add(self, key: List[Any], position: int) -> None:
        pass


class _LinearGroupIndex(_GroupIndex):
    """Scans the groups already in the output cube."""

    def __init__(self, target: Cube):
        self.target = target

    def find(self, key):
        for j, point in enumerate(self.target.points):
            if all(scalar_equals(a, b) for a, b in zip(point, key)):
                return j
        return None


class _HashGroupIndex(_GroupIndex):
    """Dict keyed by the scalar_key encoding of each key component."""

    def __init__(self):
        self.groups: Dict[tuple, int] = {}

    def find(self, key):
        return self.groups.get(tuple(scalar_key(v) for v in key))

    def add(self, key, position):
        self.groups[tuple(scalar_key(v) for v in key)] = position
