"""
Nearest-feature resolution for interactive placement.

Decides whether a newly placed coordinate should snap to an existing
point feature (mill, pool) or onto an existing line feature (water
channel), and computes the exact coordinate to snap to.

All functions are pure: they read caller-owned features, recompute from
scratch on every call and keep no state between calls. The scan is
linear over all point features and every segment of every line feature.
"""

import logging
from collections.abc import Iterable

from core.constants import DEFAULT_SNAP_THRESHOLD_M
from core.distance import haversine_distance, project_onto_segment
from core.features import Coordinate, LineFeature, PointFeature, SnapKind, SnapResult

logger = logging.getLogger(__name__)


def _check_threshold(threshold_m: float) -> None:
    if threshold_m < 0:
        raise ValueError(f"Snap threshold must be non-negative, got {threshold_m}")


def _nearest_point(
    query: Coordinate,
    points: Iterable[PointFeature],
) -> SnapResult:
    """Closest point feature regardless of distance (NONE if no points)."""
    best = SnapResult.none()
    for feature in points:
        distance = haversine_distance(query, feature.coordinate)
        if best.distance_m is None or distance < best.distance_m:
            best = SnapResult(
                kind=SnapKind.POINT,
                coordinate=feature.coordinate,
                feature_id=feature.id,
                distance_m=distance,
            )
    return best


def _nearest_line(
    query: Coordinate,
    lines: Iterable[LineFeature],
) -> SnapResult:
    """Closest projection onto any line segment (NONE if no lines)."""
    best = SnapResult.none()
    for feature in lines:
        for start, end in feature.segments():
            projection = project_onto_segment(query, start, end)
            if best.distance_m is None or projection.distance_m < best.distance_m:
                best = SnapResult(
                    kind=SnapKind.LINE,
                    coordinate=projection.coordinate,
                    feature_id=feature.id,
                    distance_m=projection.distance_m,
                )
    return best


def _within(result: SnapResult, threshold_m: float) -> SnapResult:
    if result.distance_m is not None and result.distance_m <= threshold_m:
        return result
    return SnapResult.none()


def find_nearest_point(
    query: Coordinate,
    points: Iterable[PointFeature],
    threshold_m: float = DEFAULT_SNAP_THRESHOLD_M,
) -> SnapResult:
    """
    Find the nearest point feature within tolerance.

    Used when drawing a water channel: vertices snap onto existing mills.

    Parameters
    ----------
    query : Coordinate
        Coordinate captured from the map
    points : Iterable[PointFeature]
        Candidate point features
    threshold_m : float, optional
        Maximum snapping distance in meters (inclusive), default 10

    Returns
    -------
    SnapResult
        POINT result carrying the feature's coordinate, or NONE
    """
    _check_threshold(threshold_m)
    return _within(_nearest_point(query, points), threshold_m)


def find_nearest_line(
    query: Coordinate,
    lines: Iterable[LineFeature],
    threshold_m: float = DEFAULT_SNAP_THRESHOLD_M,
) -> SnapResult:
    """
    Find the nearest position on any line feature within tolerance.

    Used when placing a mill: the location snaps onto an existing channel.
    Every consecutive segment of every line is considered, not only the
    vertices.

    Parameters
    ----------
    query : Coordinate
        Coordinate captured from the map
    lines : Iterable[LineFeature]
        Candidate line features
    threshold_m : float, optional
        Maximum snapping distance in meters (inclusive), default 10

    Returns
    -------
    SnapResult
        LINE result carrying the projected coordinate, or NONE
    """
    _check_threshold(threshold_m)
    return _within(_nearest_line(query, lines), threshold_m)


def resolve_snap(
    query: Coordinate,
    points: Iterable[PointFeature],
    lines: Iterable[LineFeature],
    threshold_m: float = DEFAULT_SNAP_THRESHOLD_M,
) -> SnapResult:
    """
    Resolve the snap target for a coordinate among points and lines.

    Point features are scanned first, then every segment of every line
    feature. Only a strictly smaller distance replaces the current best,
    so a point feature wins a tie against a line feature and an earlier
    feature wins a tie against a later one.

    Parameters
    ----------
    query : Coordinate
        Coordinate captured from the map
    points : Iterable[PointFeature]
        Candidate point features
    lines : Iterable[LineFeature]
        Candidate line features
    threshold_m : float, optional
        Maximum snapping distance in meters (inclusive), default 10

    Returns
    -------
    SnapResult
        Closest feature within tolerance, or a NONE result

    Raises
    ------
    ValueError
        If threshold_m is negative

    Examples
    --------
    >>> mill = PointFeature("m1", Coordinate(-8.61201, 41.15801))
    >>> result = resolve_snap(Coordinate(-8.6120, 41.1580), [mill], [])
    >>> result.kind, round(result.distance_m, 1)
    (<SnapKind.POINT: 'point'>, 1.4)
    """
    _check_threshold(threshold_m)

    best_point = _nearest_point(query, points)
    best_line = _nearest_line(query, lines)

    best = best_point
    if best_line.distance_m is not None and (
        best.distance_m is None or best_line.distance_m < best.distance_m
    ):
        best = best_line

    result = _within(best, threshold_m)
    if result.matched:
        logger.debug(
            f"Snapped ({query.lng}, {query.lat}) to {result.kind.value} "
            f"{result.feature_id} at {result.distance_m:.2f}m"
        )
    else:
        logger.debug(
            f"No feature within {threshold_m}m of ({query.lng}, {query.lat})"
        )
    return result
