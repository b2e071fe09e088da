"""
Unit tests for scalar kinds and label helpers.
"""

import pytest
import numpy as np
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from olapcube.cube.config import HeaderMatch
from olapcube.cube.errors import DuplicateLabelError, LabelNotFoundError, ScalarTypeError
from olapcube.cube.labels import copy_labels, ensure_unique, find_index, index_of, remove_at
from olapcube.cube.scalar import (
    ScalarKind, as_float, as_int, as_number, as_text, is_scalar, kind_of,
    scalar_equals, scalar_key,
)


class TestScalarKinds:
    @pytest.mark.parametrize("value,kind", [
        (3, ScalarKind.INTEGER),
        (np.int64(3), ScalarKind.INTEGER),
        (0.5, ScalarKind.FLOAT),
        (np.float32(0.5), ScalarKind.FLOAT),
        ("Jan", ScalarKind.TEXT),
        (None, ScalarKind.ABSENT),
    ])
    def test_kind_of(self, value, kind):
        assert kind_of(value) is kind

    @pytest.mark.parametrize("value", [True, [1], {"a": 1}, object()])
    def test_unsupported(self, value):
        with pytest.raises(ScalarTypeError):
            kind_of(value)
        assert not is_scalar(value)

    def test_scalar_type_error_is_type_error(self):
        with pytest.raises(TypeError):
            kind_of(b"bytes")


class TestScalarEquality:
    def test_same_kind(self):
        assert scalar_equals(2018, 2018)
        assert scalar_equals("Feb", "Feb")
        assert scalar_equals(None, None)
        assert not scalar_equals(2018, 2017)

    def test_no_coercion(self):
        assert not scalar_equals(2018, 2018.0)
        assert not scalar_equals(2018, "2018")
        assert not scalar_equals(0, None)

    def test_numpy_values(self):
        assert scalar_equals(np.int64(7), 7)
        assert not scalar_equals(np.float64(7.0), 7)

    def test_nan(self):
        assert scalar_equals(float("nan"), float("nan"))
        assert not scalar_equals(float("nan"), 1.0)

    def test_keys_follow_equality(self):
        assert scalar_key(7) == scalar_key(np.int64(7))
        assert scalar_key(7) != scalar_key(7.0)
        assert scalar_key(float("nan")) == scalar_key(float("nan"))
        assert hash(scalar_key("x")) == hash(scalar_key("x"))


class TestExtraction:
    def test_as_int(self):
        assert as_int(4) == 4
        assert type(as_int(np.int32(4))) is int
        with pytest.raises(ScalarTypeError):
            as_int(4.0)
        with pytest.raises(ScalarTypeError):
            as_int(None)
        assert as_int(None, allow_absent=True) is None

    def test_as_float_widens_integers(self):
        assert as_float(2) == 2.0
        assert isinstance(as_float(2), float)
        with pytest.raises(ScalarTypeError):
            as_float("2.0")

    def test_as_number_keeps_kind(self):
        assert type(as_number(2)) is int
        assert type(as_number(2.5)) is float

    def test_as_text(self):
        assert as_text("A") == "A"
        with pytest.raises(ScalarTypeError):
            as_text(1)


class TestLabels:
    def test_remove_at(self):
        labels = ["Year", "Month", "Product"]
        assert remove_at(labels, 1) == ["Year", "Product"]
        assert remove_at(labels, 0) == ["Month", "Product"]
        assert remove_at(labels, 2) == ["Year", "Month"]
        assert labels == ["Year", "Month", "Product"]

    def test_copy_labels(self):
        labels = ["A", "B"]
        copied = copy_labels(labels)
        copied.append("C")
        assert labels == ["A", "B"]

    def test_find_index(self):
        labels = ["A", "B", "A"]
        assert find_index("A", labels) == 0
        assert find_index("A", labels, HeaderMatch.LAST) == 2
        assert find_index("Z", labels) is None

    def test_index_of(self):
        assert index_of("B", ["A", "B"]) == 1
        with pytest.raises(LabelNotFoundError) as exc:
            index_of("C", ["A", "B"], "field")
        assert exc.value.axis == "field"
        assert "C" in str(exc.value)

    def test_label_not_found_is_key_error(self):
        with pytest.raises(KeyError):
            index_of("C", [])

    def test_ensure_unique(self):
        ensure_unique(["A", "B"], "dimension")
        with pytest.raises(DuplicateLabelError):
            ensure_unique(["A", "B", "A"], "dimension")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
