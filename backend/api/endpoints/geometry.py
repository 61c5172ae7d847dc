"""
Geometry codec and distance endpoints.

Exposes the persisted geometry text format and great-circle distance to
the map editor: decoding stored geometries for display, encoding drawn
geometries for storage, and building GeoJSON layers from stored features.
"""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException
from shapely.geometry import LineString, mapping

from api.endpoints.snap import decode_request_features
from core.distance import haversine_distance
from core.features import Coordinate
from core.geometry_codec import (
    decode_linestring,
    decode_point,
    encode_linestring,
    encode_point,
    geometry_type,
)
from models.schemas import (
    CoordinateModel,
    DistanceRequest,
    DistanceResponse,
    FeatureCollectionRequest,
    GeometryDecodeRequest,
    GeometryDecodeResponse,
    GeometryEncodeRequest,
    GeometryEncodeResponse,
)
from utils.geometry import coordinate_to_point, features_to_feature_collection

logger = logging.getLogger(__name__)
router = APIRouter()


def _to_coordinate(model: CoordinateModel) -> Coordinate:
    return Coordinate(lng=model.longitude, lat=model.latitude)


def _to_model(coord: Coordinate) -> CoordinateModel:
    return CoordinateModel(longitude=coord.lng, latitude=coord.lat)


@router.post("/geometry/decode", response_model=GeometryDecodeResponse)
def decode_geometry(request: GeometryDecodeRequest) -> GeometryDecodeResponse:
    """
    Decode POINT or LINESTRING text.

    Malformed text surfaces as a GeometryError, reported as 400 by the
    application exception handler.

    Returns
    -------
    GeometryDecodeResponse
        Geometry type, decoded vertices and GeoJSON geometry
    """
    geom_type = geometry_type(request.wkt)
    if geom_type == "LineString":
        coords = decode_linestring(request.wkt)
        geojson = mapping(LineString([c.as_tuple() for c in coords]))
    else:
        coords = [decode_point(request.wkt)]
        geojson = mapping(coordinate_to_point(coords[0]))

    return GeometryDecodeResponse(
        type=geom_type,
        coordinates=[_to_model(c) for c in coords],
        geojson=geojson,
    )


@router.post("/geometry/encode", response_model=GeometryEncodeResponse)
def encode_geometry(request: GeometryEncodeRequest) -> GeometryEncodeResponse:
    """
    Encode drawn vertices as POINT or LINESTRING text.

    A Point takes exactly one coordinate; a LineString at least two.
    """
    coords = [_to_coordinate(c) for c in request.coordinates]
    if request.type == "Point":
        if len(coords) != 1:
            raise HTTPException(
                status_code=400,
                detail=f"Point takes exactly 1 coordinate, got {len(coords)}",
            )
        wkt = encode_point(coords[0])
    else:
        wkt = encode_linestring(coords)

    return GeometryEncodeResponse(wkt=wkt)


@router.post("/geometry/features")
def feature_collection(request: FeatureCollectionRequest) -> dict[str, Any]:
    """
    Build a GeoJSON FeatureCollection from stored features.

    Returns
    -------
    dict
        FeatureCollection with point features first, then line features
    """
    points, lines = decode_request_features(request.points, request.lines)
    logger.debug(f"Built layer with {len(points)} points and {len(lines)} lines")
    return features_to_feature_collection(points, lines)


@router.post("/distance", response_model=DistanceResponse)
def distance(request: DistanceRequest) -> DistanceResponse:
    """Great-circle distance between two coordinates [m]."""
    return DistanceResponse(
        distance_m=haversine_distance(
            _to_coordinate(request.a), _to_coordinate(request.b)
        )
    )
