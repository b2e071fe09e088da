"""
Scalar values stored in cube points and data tuples.

Values stay native Python objects; ScalarKind is the closed set of variants
they are classified into. Equality between scalars is strict: both the kind
and the value must match, so 2018 and 2018.0 are different coordinates.
"""

import math
import numbers
from enum import Enum
from typing import Any, Hashable, Optional, Tuple

from olapcube.cube.errors import ScalarTypeError


class ScalarKind(Enum):
    """Supported scalar variants."""
    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    ABSENT = "absent"


def kind_of(value: Any) -> ScalarKind:
    """Classify a value, raising ScalarTypeError for unsupported types."""
    if value is None:
        return ScalarKind.ABSENT
    if isinstance(value, bool):
        raise ScalarTypeError(f"unsupported scalar type: bool ({value!r})")
    if isinstance(value, str):
        return ScalarKind.TEXT
    if isinstance(value, numbers.Integral):
        return ScalarKind.INTEGER
    if isinstance(value, numbers.Real):
        return ScalarKind.FLOAT
    raise ScalarTypeError(f"unsupported scalar type: {type(value).__name__} ({value!r})")


def is_scalar(value: Any) -> bool:
    try:
        kind_of(value)
    except ScalarTypeError:
        return False
    return True


def _is_nan(value: Any) -> bool:
    return isinstance(value, numbers.Real) and math.isnan(value)


def scalar_equals(a: Any, b: Any) -> bool:
    """
    Strict scalar equality.

    Kinds must match, then values must compare equal. NaN equals NaN so
    that grouping on a NaN coordinate is deterministic.
    """
    kind = kind_of(a)
    if kind is not kind_of(b):
        return False
    if kind is ScalarKind.FLOAT and _is_nan(a):
        return _is_nan(b)
    return a == b


def scalar_key(value: Any) -> Tuple[ScalarKind, Hashable]:
    """Hashable encoding of a scalar, consistent with scalar_equals."""
    kind = kind_of(value)
    if kind is ScalarKind.INTEGER:
        return kind, int(value)
    if kind is ScalarKind.FLOAT:
        value = float(value)
        if math.isnan(value):
            return kind, "nan"
        return kind, value
    return kind, value


def _extract(value: Any, accepted: Tuple[ScalarKind, ...],
             allow_absent: bool, wanted: str) -> Optional[ScalarKind]:
    kind = kind_of(value)
    if kind is ScalarKind.ABSENT and allow_absent:
        return None
    if kind not in accepted:
        raise ScalarTypeError(f"expected {wanted}, got {kind.value} ({value!r})")
    return kind


def as_int(value: Any, allow_absent: bool = False) -> Optional[int]:
    """Extract an integer scalar."""
    if _extract(value, (ScalarKind.INTEGER,), allow_absent, "integer") is None:
        return None
    return int(value)


def as_float(value: Any, allow_absent: bool = False) -> Optional[float]:
    """Extract a float; integers are widened."""
    if _extract(value, (ScalarKind.INTEGER, ScalarKind.FLOAT), allow_absent, "number") is None:
        return None
    return float(value)


def as_number(value: Any, allow_absent: bool = False):
    """Extract an int or float, keeping its kind."""
    kind = _extract(value, (ScalarKind.INTEGER, ScalarKind.FLOAT), allow_absent, "number")
    if kind is None:
        return None
    return int(value) if kind is ScalarKind.INTEGER else float(value)


def as_text(value: Any, allow_absent: bool = False) -> Optional[str]:
    """Extract a text scalar."""
    if _extract(value, (ScalarKind.TEXT,), allow_absent, "text") is None:
        return None
    return value
