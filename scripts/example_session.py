#!/usr/bin/env python3
"""
Example: slicing, dicing and rolling up a sales cube.

This script demonstrates how to:
1. Load a cube from a pandas DataFrame
2. Apply slice, dice and roll-up directly and as an action pipeline
3. Export the result back to a DataFrame
"""

import logging
import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pandas as pd
import numpy as np

from olapcube.cube.actions import DiceAction, Filter, RollUpAction, SliceAction, apply_actions
from olapcube.cube.aggregators import AggregateFunction, Measure, weighted_average
from olapcube.cube.config import CubeConfig, GroupingStrategy
from olapcube.cube.engine import compute_field_statistics, cube_from_dataframe, cube_to_dataframe
from configs.cubes import get_cube


def create_sample_data():
    """Create sample sales data for demonstration."""
    np.random.seed(42)

    stores = ['CA_1', 'CA_2', 'TX_1', 'TX_2', 'WI_1']
    states = {'CA_1': 'CA', 'CA_2': 'CA', 'TX_1': 'TX', 'TX_2': 'TX', 'WI_1': 'WI'}
    categories = ['Foods', 'Household', 'Hobbies']

    records = []
    for year in [2022, 2023]:
        for month in range(1, 13):
            for store in stores:
                for cat in categories:
                    base = 1000 + np.random.normal(0, 200)

                    # Seasonal effect
                    if month in [11, 12]:
                        base *= 1.3
                    elif month in [1, 2]:
                        base *= 0.8

                    if cat == 'Foods':
                        base *= 1.5

                    units = max(0, int(base))
                    records.append({
                        'year': year,
                        'month': month,
                        'state': states[store],
                        'store': store,
                        'category': cat,
                        'units': units,
                        'revenue': round(units * np.random.uniform(8, 12), 2),
                    })

    return pd.DataFrame(records)


def print_cube(title, cube, limit=8):
    print(f"\n{title}")
    print(cube_to_dataframe(cube).head(limit).to_string(index=False))
    print(f"({len(cube)} rows)")


def run_demo():
    """Run a demonstration session."""
    print("=" * 60)
    print("olapcube demo")
    print("=" * 60)

    df = create_sample_data()
    cube = cube_from_dataframe(
        df,
        dimensions=["year", "month", "state", "store", "category"],
        fields=["units", "revenue"],
        config=CubeConfig(grouping=GroupingStrategy.HASH),
    )
    cube.validate()

    print_cube("Source cube", cube)

    by_state = cube.roll_up(
        ["year", "state"],
        ["units", "revenue"],
        lambda agg, row: [agg[0] + row[0], round(agg[1] + row[1], 2)],
        [0, 0.0],
    )
    print_cube("Roll up on year, state", by_state)

    texas_2023 = apply_actions(cube, [
        SliceAction("year", 2023),
        DiceAction(filters=[Filter("state", "=", "TX"), Filter("month", "BETWEEN", (6, 8))]),
        RollUpAction.from_measures(["category"], [
            Measure("units", AggregateFunction.SUM),
            Measure("rows", AggregateFunction.COUNT),
            Measure("best_month_revenue", AggregateFunction.MAX, source="revenue"),
        ]),
    ])
    print_cube("Texas, summer 2023, by category", texas_2023)

    print("\nField statistics:")
    for name, stats in compute_field_statistics(texas_2023).items():
        print(f"  {name}: mean={stats['mean']:.1f} min={stats['min']:.1f} max={stats['max']:.1f}")

    quality = get_cube("quality")
    by_year = quality.roll_up(["Year"], ["Count", "PercentOk"], weighted_average(0, 1), [0, None])
    print_cube("Quality cube, weighted ok-ratio per year", by_year)


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    run_demo()
