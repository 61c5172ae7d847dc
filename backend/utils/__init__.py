"""
Utility functions for Moinhos GIS backend.
"""

from utils.geometry import (
    feature_to_geojson,
    features_to_feature_collection,
    line_feature_to_geojson,
    point_feature_to_geojson,
    to_shapely,
)

__all__ = [
    "to_shapely",
    "point_feature_to_geojson",
    "line_feature_to_geojson",
    "feature_to_geojson",
    "features_to_feature_collection",
]
