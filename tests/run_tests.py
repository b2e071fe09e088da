#!/usr/bin/env python3
"""
Simple test runner without pytest dependency.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from olapcube.cube.actions import DiceAction, Filter, RollUpAction, SliceAction, apply_actions
from olapcube.cube.aggregators import AggregateFunction, Measure, weighted_average
from olapcube.cube.errors import HeaderArityError, LabelNotFoundError
from olapcube.cube.model import Cube


def create_test_cube():
    """Create the five-row quality cube."""
    return Cube(
        dimensions=["Year", "Month", "Product"],
        fields=["Count", "PercentOk"],
        points=[
            [2018, "Jan", "A"],
            [2018, "Feb", "A"],
            [2018, "Feb", "B"],
            [2017, "Jan", "A"],
            [2017, "Jan", "B"],
        ],
        data=[
            [100, 0.05],
            [300, 0.01],
            [100, 0.1],
            [200, 0.5],
            [200, 0.1],
        ],
    )


def test_creation():
    """Test headers and rows of a new cube."""
    cube = create_test_cube()
    assert cube.is_valid()
    assert cube.headers() == ["Year", "Month", "Product", "Count", "PercentOk"]
    assert cube.rows()[1] == [2018, "Feb", "A", 300, 0.01]
    print("✓ test_creation passed")


def test_slice():
    """Test slicing on a dimension."""
    cube = create_test_cube().slice("Year", 2018)
    assert cube.is_valid()
    assert cube.dimensions == ["Month", "Product"]
    assert len(cube) == 3
    print("✓ test_slice passed")


def test_dice():
    """Test dicing with a predicate."""
    cube = create_test_cube().dice(lambda point: point[1] == "Feb")
    assert cube.is_valid()
    assert cube.rows() == [[2018, "Feb", "A", 300, 0.01], [2018, "Feb", "B", 100, 0.1]]
    print("✓ test_dice passed")


def test_roll_up():
    """Test roll-up with a weighted average."""
    cube = create_test_cube().roll_up(["Year"], ["Sum", "PercentOk"],
                                      weighted_average(0, 1), [0, None])
    assert cube.is_valid()
    assert [row[:2] for row in cube.rows()] == [[2018, 500], [2017, 400]]
    assert abs(cube.data[0][1] - 0.036) < 1e-12
    assert abs(cube.data[1][1] - 0.3) < 1e-12
    print("✓ test_roll_up passed")


def test_add_rows():
    """Test ingestion with reordered headers and error cases."""
    cube = Cube(dimensions=["Year"], fields=["Count"])
    cube.add_rows(["Count", "Year"], [[5, 2020]])
    assert cube.rows() == [[2020, 5]]

    try:
        cube.add_rows(["Year"], [[2021]])
        raise AssertionError("header arity not detected")
    except HeaderArityError:
        pass

    try:
        cube.add_rows(["Year", "Total"], [[2021, 1]])
        raise AssertionError("missing field not detected")
    except LabelNotFoundError as e:
        assert e.axis == "field"
    assert len(cube) == 1
    print("✓ test_add_rows passed")


def test_action_pipeline():
    """Test chaining actions."""
    cube = apply_actions(create_test_cube(), [
        DiceAction(filters=[Filter("Product", "IN", ["A"])]),
        SliceAction("Month", "Jan"),
        RollUpAction.from_measures(["Year"], [Measure("Count", AggregateFunction.SUM)]),
    ])
    assert cube.rows() == [[2018, 100], [2017, 200]]
    print("✓ test_action_pipeline passed")


def run_all_tests():
    """Run all tests."""
    print("Running olapcube tests...\n")

    tests = [
        test_creation,
        test_slice,
        test_dice,
        test_roll_up,
        test_add_rows,
        test_action_pipeline,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
        except AssertionError as e:
            print(f"✗ {test.__name__} FAILED: {e}")
            failed += 1
        except Exception as e:
            print(f"✗ {test.__name__} ERROR: {e}")
            failed += 1

    print(f"\n{'='*40}")
    print(f"Results: {passed} passed, {failed} failed")
    print(f"{'='*40}")

    return failed == 0


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
