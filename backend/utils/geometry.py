"""
GeoJSON conversion utilities.

Provides functions for converting engine features to Shapely geometries
and GeoJSON Features for the map layer.
"""

from typing import Any

from shapely.geometry import LineString, Point, mapping

from core.features import Coordinate, LineFeature, PointFeature


def coordinate_to_point(coord: Coordinate) -> Point:
    """
    Convert a coordinate to a Shapely Point.

    Parameters
    ----------
    coord : Coordinate
        WGS84 coordinate

    Returns
    -------
    Point
        Shapely Point with x=longitude, y=latitude
    """
    return Point(coord.lng, coord.lat)


def to_shapely(feature: PointFeature | LineFeature) -> Point | LineString:
    """
    Convert a feature's geometry to Shapely.

    Parameters
    ----------
    feature : PointFeature | LineFeature
        Feature to convert

    Returns
    -------
    Point | LineString
        Shapely geometry in EPSG:4326, (lng, lat) axis order

    Examples
    --------
    >>> line = LineFeature("l1", (Coordinate(0, 0), Coordinate(1, 1)))
    >>> to_shapely(line).geom_type
    'LineString'
    """
    if isinstance(feature, PointFeature):
        return coordinate_to_point(feature.coordinate)
    return LineString([c.as_tuple() for c in feature.coordinates])


def point_feature_to_geojson(feature: PointFeature) -> dict[str, Any]:
    """
    Convert a point feature to a GeoJSON Feature.

    Parameters
    ----------
    feature : PointFeature
        Point feature

    Returns
    -------
    dict
        GeoJSON Feature dictionary
    """
    return {
        "type": "Feature",
        "id": feature.id,
        "geometry": mapping(to_shapely(feature)),
        "properties": {"name": feature.name, "kind": "point"},
    }


def line_feature_to_geojson(feature: LineFeature) -> dict[str, Any]:
    """
    Convert a line feature to a GeoJSON Feature.

    The display color travels in the properties; it has no geometric role.

    Parameters
    ----------
    feature : LineFeature
        Line feature

    Returns
    -------
    dict
        GeoJSON Feature dictionary

    Examples
    --------
    >>> line = LineFeature("l1", (Coordinate(0, 0), Coordinate(1, 1)), color="#0000ff")
    >>> line_feature_to_geojson(line)["properties"]["color"]
    '#0000ff'
    """
    return {
        "type": "Feature",
        "id": feature.id,
        "geometry": mapping(to_shapely(feature)),
        "properties": {"name": feature.name, "kind": "line", "color": feature.color},
    }


def feature_to_geojson(feature: PointFeature | LineFeature) -> dict[str, Any]:
    """Convert either feature type to a GeoJSON Feature."""
    if isinstance(feature, PointFeature):
        return point_feature_to_geojson(feature)
    return line_feature_to_geojson(feature)


def features_to_feature_collection(
    points: list[PointFeature],
    lines: list[LineFeature],
) -> dict[str, Any]:
    """
    Build a GeoJSON FeatureCollection from point and line features.

    Parameters
    ----------
    points : list[PointFeature]
        Point features, emitted first
    lines : list[LineFeature]
        Line features

    Returns
    -------
    dict
        GeoJSON FeatureCollection dictionary
    """
    return {
        "type": "FeatureCollection",
        "features": [point_feature_to_geojson(p) for p in points]
        + [line_feature_to_geojson(line) for line in lines],
    }
