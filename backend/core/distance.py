"""
Distance primitives for the snap resolver.

Provides great-circle distance between coordinates (Haversine formula on a
spherical earth) and projection of a point onto a polyline segment.

Notes
-----
Projection uses an equirectangular plane local to the segment (longitude
scaled by the cosine of the segment's mean latitude). The distance to the
projected point is then measured with the Haversine formula. The planar
step is accurate at the tens-of-meters scale used for snapping and loses
accuracy for segments hundreds of kilometers long.
"""

import math
from dataclasses import dataclass

from core.constants import DEGENERATE_SEGMENT_EPSILON_DEG2, EARTH_RADIUS_M
from core.features import Coordinate


@dataclass(frozen=True)
class SegmentProjection:
    """
    Closest point on a segment to a query point.

    Attributes
    ----------
    coordinate : Coordinate
        Projected coordinate, always on the segment
    distance_m : float
        Haversine distance from the query to the projected coordinate [m]
    fraction : float
        Position along the segment, 0 at start and 1 at end
    """

    coordinate: Coordinate
    distance_m: float
    fraction: float


def haversine_distance(a: Coordinate, b: Coordinate) -> float:
    """
    Calculate great-circle distance between two coordinates.

    Parameters
    ----------
    a : Coordinate
        First coordinate
    b : Coordinate
        Second coordinate

    Returns
    -------
    float
        Distance in meters on a sphere of radius 6,371 km

    Examples
    --------
    >>> d = haversine_distance(Coordinate(-8.6120, 41.1580), Coordinate(-8.6125, 41.1579))
    >>> print(f"{d:.0f} m")
    43 m
    """
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    dlat = math.radians(b.lat - a.lat)
    dlng = math.radians(b.lng - a.lng)

    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    )
    # Rounding can push h marginally above 1 for antipodal points
    h = min(1.0, h)

    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def _unwrap_lng(lng: float, reference: float) -> float:
    """Longitude offset from reference, taking the short way round."""
    delta = lng - reference
    if delta > 180.0:
        delta -= 360.0
    elif delta < -180.0:
        delta += 360.0
    return delta


def _wrap_lng(lng: float) -> float:
    """Bring a longitude back into [-180, 180]."""
    if lng > 180.0:
        return lng - 360.0
    if lng < -180.0:
        return lng + 360.0
    return lng


def project_onto_segment(
    query: Coordinate,
    start: Coordinate,
    end: Coordinate,
) -> SegmentProjection:
    """
    Project a point onto a line segment.

    The projection parameter is clamped to [0, 1], so the result never
    extends past the segment's endpoints. A segment whose endpoints
    coincide is treated as a single point.

    Parameters
    ----------
    query : Coordinate
        Point to project
    start : Coordinate
        Segment start
    end : Coordinate
        Segment end

    Returns
    -------
    SegmentProjection
        Closest coordinate on the segment and its Haversine distance

    Examples
    --------
    >>> proj = project_onto_segment(
    ...     Coordinate(-8.6100, 41.1581),
    ...     Coordinate(-8.6110, 41.1580),
    ...     Coordinate(-8.6090, 41.1580),
    ... )
    >>> print(f"{proj.distance_m:.1f} m")
    11.1 m
    """
    scale = math.cos(math.radians((start.lat + end.lat) / 2))

    seg_dlng = _unwrap_lng(end.lng, start.lng)
    seg_x = seg_dlng * scale
    seg_y = end.lat - start.lat
    length2 = seg_x * seg_x + seg_y * seg_y

    if length2 < DEGENERATE_SEGMENT_EPSILON_DEG2:
        return SegmentProjection(
            coordinate=start,
            distance_m=haversine_distance(query, start),
            fraction=0.0,
        )

    q_x = _unwrap_lng(query.lng, start.lng) * scale
    q_y = query.lat - start.lat
    t = (q_x * seg_x + q_y * seg_y) / length2

    if t <= 0.0:
        closest, t = start, 0.0
    elif t >= 1.0:
        closest, t = end, 1.0
    else:
        lat = start.lat + t * seg_y
        lo, hi = sorted((start.lat, end.lat))
        closest = Coordinate(
            lng=_wrap_lng(start.lng + t * seg_dlng),
            lat=min(max(lat, lo), hi),
        )

    return SegmentProjection(
        coordinate=closest,
        distance_m=haversine_distance(query, closest),
        fraction=t,
    )
