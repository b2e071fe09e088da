"""
Sample cube definitions.

- quality: yearly/monthly production counts with an ok-ratio per product
- flights: departures per carrier and route
"""

from olapcube.cube.model import Cube


def create_quality_cube() -> Cube:
    """
    Production quality cube.

    Dimensions: Year, Month, Product
    Fields: Count, PercentOk
    """
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


def create_flights_cube() -> Cube:
    """
    Flights cube.

    Dimensions: Year, Month, Carrier, Origin
    Fields: Flights, Delayed
    """
    cube = Cube(
        dimensions=["Year", "Month", "Carrier", "Origin"],
        fields=["Flights", "Delayed"],
    )
    cube.add_rows(
        ["Carrier", "Origin", "Year", "Month", "Flights", "Delayed"],
        [
            ["AA", "JFK", 2019, 1, 120, 14],
            ["AA", "LAX", 2019, 1, 95, 9],
            ["DL", "JFK", 2019, 1, 80, 12],
            ["AA", "JFK", 2019, 2, 110, 20],
            ["DL", "ATL", 2019, 2, 150, 11],
            ["DL", "JFK", 2020, 1, 60, None],
            ["AA", "LAX", 2020, 1, 70, 4],
        ],
    )
    return cube


# Cube registry
CUBES = {
    "quality": create_quality_cube,
    "flights": create_flights_cube,
}


def get_cube(name: str) -> Cube:
    """Get a sample cube by name."""
    if name not in CUBES:
        raise ValueError(f"Unknown cube: {name}. Available: {list(CUBES.keys())}")
    return CUBES[name]()
