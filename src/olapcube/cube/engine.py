"""
pandas bridge for cubes.

Loads cubes from DataFrames, exports the flat (headers, rows) view back to
a DataFrame and computes per-field summary statistics.
"""

import logging
from typing import Dict, Optional, Sequence

import numpy as np
import pandas as pd

from olapcube.cube.config import CubeConfig
from olapcube.cube.errors import LabelNotFoundError
from olapcube.cube.model import Cube
from olapcube.cube.scalar import ScalarKind, kind_of

logger = logging.getLogger(__name__)


def _to_scalar(value):
    """Map pandas missing markers to None and numpy scalars to Python ones."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    if isinstance(value, np.generic):
        return value.item()
    return value


def cube_from_dataframe(df: pd.DataFrame,
                        dimensions: Sequence[str],
                        fields: Sequence[str],
                        config: Optional[CubeConfig] = None) -> Cube:
    """
    Build a cube from the columns of a DataFrame.

    Args:
        df: Source table, one row per cube row
        dimensions: Columns to use as dimensions, in cube order
        fields: Columns to use as fields, in cube order
        config: Optional cube configuration

    Raises:
        LabelNotFoundError: if a dimension or field is not a column of df
        ScalarTypeError: if a selected column holds unsupported values
    """
    for axis, labels in (("dimension", dimensions), ("field", fields)):
        for label in labels:
            if label not in df.columns:
                raise LabelNotFoundError(label, axis)

    cube = Cube(dimensions=list(dimensions), fields=list(fields),
                config=config or CubeConfig())

    wanted = set(dimensions) | set(fields)
    # Keep DataFrame column order; add_rows maps columns back by name
    header = [c for c in df.columns if c in wanted]
    rows = [
        [_to_scalar(v) for v in record]
        for record in df[header].itertuples(index=False, name=None)
    ]
    cube.add_rows(header, rows)

    logger.info(f"Loaded cube with {len(cube.dimensions)} dimensions, "
                f"{len(cube.fields)} fields, {len(cube)} rows")
    return cube


def cube_to_dataframe(cube: Cube) -> pd.DataFrame:
    """Flatten a cube into a DataFrame with one column per header."""
    return pd.DataFrame(cube.rows(), columns=cube.headers())


def compute_field_statistics(cube: Cube) -> Dict[str, Dict[str, float]]:
    """
    Summary statistics for each numeric field.

    Absent values are ignored. A field holding any text value is skipped.

    Returns:
        Dict mapping field name -> {count, mean, std, min, max}
    """
    statistics = {}
    for i, name in enumerate(cube.fields):
        values = []
        numeric = True
        for row in cube.data:
            kind = kind_of(row[i])
            if kind is ScalarKind.ABSENT:
                continue
            if kind is ScalarKind.TEXT:
                numeric = False
                break
            values.append(float(row[i]))

        if not numeric:
            continue

        col_data = np.asarray(values, dtype=float)
        statistics[name] = {
            "count": float(len(col_data)),
            "mean": float(col_data.mean()) if len(col_data) > 0 else 0,
            "std": float(col_data.std(ddof=1)) if len(col_data) > 1 else 0,
            "min": float(col_data.min()) if len(col_data) > 0 else 0,
            "max": float(col_data.max()) if len(col_data) > 0 else 0,
        }
    return statistics
