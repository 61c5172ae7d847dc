"""
Unit tests for GeoJSON conversion utilities.
"""

from shapely.geometry import LineString, Point

from core.features import Coordinate, PointFeature
from utils.geometry import (
    coordinate_to_point,
    feature_to_geojson,
    features_to_feature_collection,
    line_feature_to_geojson,
    point_feature_to_geojson,
    to_shapely,
)


class TestToShapely:
    """Tests for Shapely conversion."""

    def test_coordinate_axis_order(self):
        """Test that x is longitude and y is latitude."""
        point = coordinate_to_point(Coordinate(-8.6125, 41.1579))

        assert isinstance(point, Point)
        assert point.x == -8.6125
        assert point.y == 41.1579

    def test_point_feature(self, near_mill):
        """Test that point features become Points."""
        assert isinstance(to_shapely(near_mill), Point)

    def test_line_feature(self, levada):
        """Test that line features become LineStrings with all vertices."""
        line = to_shapely(levada)

        assert isinstance(line, LineString)
        assert len(line.coords) == 3
        assert line.coords[0] == (-8.6140, 41.1580)

    def test_line_is_open(self, levada):
        """Test that the polyline is not closed."""
        assert not to_shapely(levada).is_closed


class TestPointFeatureToGeojson:
    """Tests for point GeoJSON conversion."""

    def test_returns_feature_dict(self, near_mill):
        """Test that function returns valid GeoJSON Feature."""
        result = point_feature_to_geojson(near_mill)

        assert result["type"] == "Feature"
        assert result["id"] == "mill-near"
        assert result["geometry"]["type"] == "Point"
        assert result["properties"]["name"] == "Moinho da Ponte"
        assert result["properties"]["kind"] == "point"

    def test_coordinates_are_correct(self, near_mill):
        """Test that coordinates are in (lng, lat) order."""
        result = point_feature_to_geojson(near_mill)

        lng, lat = result["geometry"]["coordinates"]
        assert lng == -8.61201
        assert lat == 41.15801

    def test_unnamed_feature(self):
        """Test that a missing name is carried as None."""
        feature = PointFeature("m1", Coordinate(0.0, 0.0))

        assert point_feature_to_geojson(feature)["properties"]["name"] is None


class TestLineFeatureToGeojson:
    """Tests for line GeoJSON conversion."""

    def test_returns_feature_dict(self, levada):
        """Test that function returns valid GeoJSON Feature."""
        result = line_feature_to_geojson(levada)

        assert result["type"] == "Feature"
        assert result["geometry"]["type"] == "LineString"
        assert len(result["geometry"]["coordinates"]) == 3

    def test_carries_color(self, levada):
        """Test that display color is kept in properties."""
        result = line_feature_to_geojson(levada)

        assert result["properties"]["color"] == "#1e90ff"
        assert result["properties"]["kind"] == "line"


class TestFeatureCollection:
    """Tests for FeatureCollection building."""

    def test_dispatch_by_type(self, near_mill, levada):
        """Test that feature_to_geojson picks the right converter."""
        assert feature_to_geojson(near_mill)["geometry"]["type"] == "Point"
        assert feature_to_geojson(levada)["geometry"]["type"] == "LineString"

    def test_points_first_then_lines(self, near_mill, far_mill, levada):
        """Test collection ordering and size."""
        result = features_to_feature_collection([near_mill, far_mill], [levada])

        assert result["type"] == "FeatureCollection"
        assert [f["id"] for f in result["features"]] == [
            "mill-near",
            "mill-far",
            "levada-1",
        ]

    def test_empty_collection(self):
        """Test that no features give an empty collection."""
        result = features_to_feature_collection([], [])

        assert result["features"] == []
