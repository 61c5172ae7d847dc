"""
Shared test fixtures for pytest.

Provides sample coordinates and features around a mill site near Porto,
and common fixtures used across unit and integration tests.
"""

import pytest

from core.features import Coordinate, LineFeature, PointFeature


@pytest.fixture
def query_coordinate():
    """Coordinate clicked on the map."""
    return Coordinate(lng=-8.6120, lat=41.1580)


@pytest.fixture
def far_mill():
    """Mill roughly 43 m from the query coordinate."""
    return PointFeature(
        id="mill-far",
        coordinate=Coordinate(lng=-8.6125, lat=41.1579),
        name="Moinho do Rio",
    )


@pytest.fixture
def near_mill():
    """Mill roughly 1.4 m from the query coordinate."""
    return PointFeature(
        id="mill-near",
        coordinate=Coordinate(lng=-8.61201, lat=41.15801),
        name="Moinho da Ponte",
    )


@pytest.fixture
def levada():
    """
    Two-segment water channel.

    First segment runs east along latitude 41.1580 from -8.6140 to -8.6120,
    second segment runs north from there to latitude 41.1600.
    """
    return LineFeature(
        id="levada-1",
        coordinates=(
            Coordinate(lng=-8.6140, lat=41.1580),
            Coordinate(lng=-8.6120, lat=41.1580),
            Coordinate(lng=-8.6120, lat=41.1600),
        ),
        name="Levada de Cima",
        color="#1e90ff",
    )


@pytest.fixture
def point_wkt():
    """Stored point geometry text (western hemisphere)."""
    return "POINT(-8.6125 41.1579)"


@pytest.fixture
def linestring_wkt():
    """Stored linestring geometry text matching the levada fixture."""
    return "LINESTRING(-8.614 41.158, -8.612 41.158, -8.612 41.16)"
