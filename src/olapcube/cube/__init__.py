"""
Cube module: in-memory cube data model and its OLAP algebra.
"""

from olapcube.cube.config import CubeConfig, GroupingStrategy, HeaderMatch
from olapcube.cube.errors import (
    CubeError, StructuralCheck, StructuralMismatchError, LabelNotFoundError,
    DuplicateLabelError, HeaderArityError, RowArityError, AggregateArityError,
    ScalarTypeError, ActionNotApplicableError,
)
from olapcube.cube.scalar import (
    ScalarKind, kind_of, is_scalar, scalar_equals, scalar_key,
    as_int, as_float, as_number, as_text,
)
from olapcube.cube.model import Cube, Aggregator, Predicate
from olapcube.cube.aggregators import (
    AggregateFunction, Measure, CompiledMeasures, compile_measures,
    count_rows, sum_fields, weighted_average,
)
from olapcube.cube.actions import (
    CubeAction, ActionType, Filter,
    SliceAction, DiceAction, RollUpAction, apply_actions,
)
from olapcube.cube.engine import cube_from_dataframe, cube_to_dataframe, compute_field_statistics

__all__ = [
    "CubeConfig", "GroupingStrategy", "HeaderMatch",
    "CubeError", "StructuralCheck", "StructuralMismatchError", "LabelNotFoundError",
    "DuplicateLabelError", "HeaderArityError", "RowArityError", "AggregateArityError",
    "ScalarTypeError", "ActionNotApplicableError",
    "ScalarKind", "kind_of", "is_scalar", "scalar_equals", "scalar_key",
    "as_int", "as_float", "as_number", "as_text",
    "Cube", "Aggregator", "Predicate",
    "AggregateFunction", "Measure", "CompiledMeasures", "compile_measures",
    "count_rows", "sum_fields", "weighted_average",
    "CubeAction", "ActionType", "Filter",
    "SliceAction", "DiceAction", "RollUpAction", "apply_actions",
    "cube_from_dataframe", "cube_to_dataframe", "compute_field_statistics",
]
