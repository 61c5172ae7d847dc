"""
Snap resolution endpoint.

Decodes the features currently shown on the map editor, resolves the
nearest point or line feature within tolerance of a clicked coordinate,
and returns the coordinate to use for the new or moved feature.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from core.config import Settings, get_settings
from core.exceptions import GeometryError
from core.features import (
    Coordinate,
    LineFeature,
    PointFeature,
    SnapKind,
    SnapResult,
)
from core.geometry_codec import decode_line_feature, decode_point_feature, encode_point
from core.snap_resolver import find_nearest_line, find_nearest_point, resolve_snap
from models.schemas import (
    CoordinateModel,
    LineFeatureIn,
    PointFeatureIn,
    SnapRequest,
    SnapResponse,
)
from utils.geometry import feature_to_geojson

logger = logging.getLogger(__name__)
router = APIRouter()


def decode_request_features(
    points: list[PointFeatureIn],
    lines: list[LineFeatureIn],
) -> tuple[list[PointFeature], list[LineFeature]]:
    """
    Decode stored feature geometries into engine features.

    Raises
    ------
    HTTPException
        400 if any geometry is malformed, naming the offending feature
    """
    decoded_points = []
    for p in points:
        try:
            decoded_points.append(decode_point_feature(p.id, p.geom, p.name))
        except GeometryError as e:
            raise HTTPException(
                status_code=400, detail=f"Point feature {p.id}: {e}"
            ) from e

    decoded_lines = []
    for line in lines:
        try:
            decoded_lines.append(
                decode_line_feature(line.id, line.path, line.name, line.color)
            )
        except GeometryError as e:
            raise HTTPException(
                status_code=400, detail=f"Line feature {line.id}: {e}"
            ) from e

    return decoded_points, decoded_lines


def _matched_feature(
    result: SnapResult,
    points: list[PointFeature],
    lines: list[LineFeature],
) -> PointFeature | LineFeature | None:
    candidates = points if result.kind is SnapKind.POINT else lines
    return next((f for f in candidates if f.id == result.feature_id), None)


@router.post("/snap", response_model=SnapResponse)
def snap(
    request: SnapRequest,
    settings: Settings = Depends(get_settings),
) -> SnapResponse:
    """
    Resolve the snap target for a clicked coordinate.

    Parameters
    ----------
    request : SnapRequest
        Query coordinate, candidate features and optional tolerance
    settings : Settings
        Application settings (default and maximum tolerance)

    Returns
    -------
    SnapResponse
        Matched feature and snapped coordinate, or kind 'none'
    """
    threshold_m = (
        request.threshold_m
        if request.threshold_m is not None
        else settings.snap_threshold_m
    )
    if threshold_m > settings.max_snap_threshold_m:
        raise HTTPException(
            status_code=400,
            detail=(
                f"threshold_m must not exceed {settings.max_snap_threshold_m} m"
            ),
        )

    n_features = len(request.points) + len(request.lines)
    if n_features > settings.max_features_per_request:
        raise HTTPException(
            status_code=400,
            detail=(
                f"Too many features ({n_features}), "
                f"limit is {settings.max_features_per_request}"
            ),
        )

    try:
        points, lines = decode_request_features(request.points, request.lines)
        query = Coordinate(lng=request.query.longitude, lat=request.query.latitude)

        if request.target == "point":
            result = find_nearest_point(query, points, threshold_m)
        elif request.target == "line":
            result = find_nearest_line(query, lines, threshold_m)
        else:
            result = resolve_snap(query, points, lines, threshold_m)

        if not result.matched:
            return SnapResponse(kind="none")

        feature = _matched_feature(result, points, lines)
        return SnapResponse(
            kind=result.kind.value,
            feature_id=result.feature_id,
            distance_m=result.distance_m,
            snapped=CoordinateModel(
                longitude=result.coordinate.lng,
                latitude=result.coordinate.lat,
            ),
            geom=encode_point(result.coordinate),
            feature_geojson=feature_to_geojson(feature) if feature else None,
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error resolving snap: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Internal server error during snap resolution",
        ) from e
