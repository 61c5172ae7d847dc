"""
Feature model for the geometry engine.

Defines the immutable value types exchanged between the persistence layer,
the geometry codec and the snap resolver: coordinates, point features
(mills, pools), line features (water channels) and snap results.
"""

import math
from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from enum import Enum

from core.constants import LAT_MAX, LAT_MIN, LNG_MAX, LNG_MIN, MIN_LINE_VERTICES
from core.exceptions import InvalidGeometry

FeatureId = str


@dataclass(frozen=True)
class Coordinate:
    """
    Geographic coordinate in WGS84.

    Attributes
    ----------
    lng : float
        Longitude in decimal degrees, range -180 to 180
    lat : float
        Latitude in decimal degrees, range -90 to 90

    Raises
    ------
    InvalidGeometry
        If a value is not finite or lies outside the WGS84 range

    Examples
    --------
    >>> Coordinate(-8.6125, 41.1579)
    Coordinate(lng=-8.6125, lat=41.1579)
    """

    lng: float
    lat: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.lng) and math.isfinite(self.lat)):
            raise InvalidGeometry(
                f"Coordinate values must be finite, got ({self.lng}, {self.lat})"
            )
        if not LNG_MIN <= self.lng <= LNG_MAX:
            raise InvalidGeometry(f"Longitude {self.lng} outside [-180, 180]")
        if not LAT_MIN <= self.lat <= LAT_MAX:
            raise InvalidGeometry(f"Latitude {self.lat} outside [-90, 90]")

    def as_tuple(self) -> tuple[float, float]:
        """Return (lng, lat) tuple."""
        return (self.lng, self.lat)


@dataclass(frozen=True)
class PointFeature:
    """
    Single-location structure (e.g. a mill or a water pool).

    Attributes
    ----------
    id : str
        Opaque identifier assigned by the persistence layer
    coordinate : Coordinate
        Location of the structure
    name : str | None
        Display name
    """

    id: FeatureId
    coordinate: Coordinate
    name: str | None = None

    def with_coordinate(self, coordinate: Coordinate) -> "PointFeature":
        """Return a copy of the feature moved to a new coordinate."""
        return replace(self, coordinate=coordinate)


@dataclass(frozen=True)
class LineFeature:
    """
    Open polyline structure (e.g. a levada or other water channel).

    Consecutive vertices may repeat; the resulting zero-length segments
    contribute nothing to distance calculations.

    Attributes
    ----------
    id : str
        Opaque identifier assigned by the persistence layer
    coordinates : tuple[Coordinate, ...]
        Ordered vertices, at least two of them distinct
    name : str | None
        Display name
    color : str | None
        Display color, used for rendering only

    Raises
    ------
    InvalidGeometry
        If fewer than two vertices are given or all vertices coincide
    """

    id: FeatureId
    coordinates: tuple[Coordinate, ...]
    name: str | None = None
    color: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        coords = tuple(self.coordinates)
        object.__setattr__(self, "coordinates", coords)

        if len(coords) < MIN_LINE_VERTICES:
            raise InvalidGeometry(
                f"Line feature {self.id!r} needs at least {MIN_LINE_VERTICES} "
                f"coordinates, got {len(coords)}"
            )
        if len(set(coords)) < MIN_LINE_VERTICES:
            raise InvalidGeometry(
                f"Line feature {self.id!r} has no two distinct coordinates"
            )

    @property
    def start(self) -> Coordinate:
        """First vertex of the polyline."""
        return self.coordinates[0]

    @property
    def end(self) -> Coordinate:
        """Last vertex of the polyline."""
        return self.coordinates[-1]

    def segments(self) -> Iterator[tuple[Coordinate, Coordinate]]:
        """Yield consecutive (start, end) vertex pairs."""
        for i in range(len(self.coordinates) - 1):
            yield self.coordinates[i], self.coordinates[i + 1]


class SnapKind(str, Enum):
    """Type of feature a snap result refers to."""

    POINT = "point"
    LINE = "line"
    NONE = "none"


@dataclass(frozen=True)
class SnapResult:
    """
    Outcome of a snap resolution.

    Attributes
    ----------
    kind : SnapKind
        Matched feature type, or NONE when nothing lies within tolerance
    coordinate : Coordinate | None
        Coordinate to snap to (None when kind is NONE)
    feature_id : str | None
        Identifier of the matched feature
    distance_m : float | None
        Haversine distance from the query to the snapped coordinate [m]
    """

    kind: SnapKind
    coordinate: Coordinate | None = None
    feature_id: FeatureId | None = None
    distance_m: float | None = None

    @classmethod
    def none(cls) -> "SnapResult":
        """Result for 'no feature within tolerance'."""
        return cls(kind=SnapKind.NONE)

    @property
    def matched(self) -> bool:
        """Whether a feature was matched."""
        return self.kind is not SnapKind.NONE
