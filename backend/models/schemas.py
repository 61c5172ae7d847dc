"""
Pydantic models for API request/response schemas.

Defines data structures for snap resolution, geometry encoding/decoding
and distance API endpoints.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator


class CoordinateModel(BaseModel):
    """
    WGS84 coordinate.

    Attributes
    ----------
    longitude : float
        Longitude in WGS84 (decimal degrees), range -180 to 180
    latitude : float
        Latitude in WGS84 (decimal degrees), range -90 to 90
    """

    longitude: float = Field(
        ...,
        ge=-180,
        le=180,
        description="Longitude in WGS84 (decimal degrees)",
        examples=[-8.6120],
    )
    latitude: float = Field(
        ...,
        ge=-90,
        le=90,
        description="Latitude in WGS84 (decimal degrees)",
        examples=[41.1580],
    )


# ===================== SNAP MODELS =====================


def _check_unique_ids(features: list, kind: str) -> None:
    seen = set()
    for feature in features:
        if feature.id in seen:
            raise ValueError(f"Duplicate {kind} feature id: {feature.id}")
        seen.add(feature.id)


class PointFeatureIn(BaseModel):
    """Point feature as loaded from storage."""

    id: str = Field(..., min_length=1, description="Feature identifier")
    geom: str = Field(
        ...,
        description="Point geometry text",
        examples=["POINT(-8.6125 41.1579)"],
    )
    name: str | None = Field(None, description="Display name")


class LineFeatureIn(BaseModel):
    """Line feature as loaded from storage."""

    id: str = Field(..., min_length=1, description="Feature identifier")
    path: str = Field(
        ...,
        description="Linestring geometry text",
        examples=["LINESTRING(-8.6130 41.1570, -8.6110 41.1590)"],
    )
    name: str | None = Field(None, description="Display name")
    color: str | None = Field(None, description="Display color")


class SnapRequest(BaseModel):
    """
    Request model for snap resolution.

    Attributes
    ----------
    query : CoordinateModel
        Coordinate captured from the map
    points : list[PointFeatureIn]
        Point features to snap to (mills, pools)
    lines : list[LineFeatureIn]
        Line features to snap to (water channels)
    threshold_m : float, optional
        Snapping tolerance [m]; server default when omitted
    target : str, optional
        Restrict matching to 'point' or 'line' features, default 'any'
    """

    query: CoordinateModel = Field(..., description="Query coordinate")
    points: list[PointFeatureIn] = Field(
        default_factory=list, description="Candidate point features"
    )
    lines: list[LineFeatureIn] = Field(
        default_factory=list, description="Candidate line features"
    )
    threshold_m: float | None = Field(
        None, ge=0, description="Snapping tolerance [m]", examples=[10.0]
    )
    target: Literal["any", "point", "line"] = Field(
        "any", description="Feature types eligible for snapping"
    )

    @model_validator(mode="after")
    def check_unique_ids(self) -> "SnapRequest":
        """Feature ids must be unique within points and within lines."""
        _check_unique_ids(self.points, "point")
        _check_unique_ids(self.lines, "line")
        return self


class SnapResponse(BaseModel):
    """
    Response model for snap resolution.

    Attributes
    ----------
    kind : str
        'point', 'line' or 'none'
    feature_id : str | None
        Identifier of the matched feature
    distance_m : float | None
        Distance from query to snapped coordinate [m]
    snapped : CoordinateModel | None
        Coordinate to use for the new or updated feature
    geom : str | None
        Snapped coordinate as point geometry text
    feature_geojson : dict | None
        Matched feature as GeoJSON Feature
    """

    kind: Literal["point", "line", "none"] = Field(..., description="Match type")
    feature_id: str | None = Field(None, description="Matched feature identifier")
    distance_m: float | None = Field(None, ge=0, description="Snap distance [m]")
    snapped: CoordinateModel | None = Field(None, description="Snapped coordinate")
    geom: str | None = Field(None, description="Snapped coordinate geometry text")
    feature_geojson: dict[str, Any] | None = Field(
        None, description="Matched feature as GeoJSON Feature"
    )


# ===================== GEOMETRY MODELS =====================


class GeometryDecodeRequest(BaseModel):
    """Request model for geometry text decoding."""

    wkt: str = Field(
        ...,
        description="POINT or LINESTRING geometry text",
        examples=["POINT(-8.6125 41.1579)"],
    )


class GeometryDecodeResponse(BaseModel):
    """Response model for geometry text decoding."""

    type: Literal["Point", "LineString"] = Field(..., description="Geometry type")
    coordinates: list[CoordinateModel] = Field(..., description="Decoded vertices")
    geojson: dict[str, Any] = Field(..., description="GeoJSON geometry")


class GeometryEncodeRequest(BaseModel):
    """Request model for geometry text encoding."""

    type: Literal["Point", "LineString"] = Field(..., description="Geometry type")
    coordinates: list[CoordinateModel] = Field(
        ..., min_length=1, description="Vertices in order"
    )


class GeometryEncodeResponse(BaseModel):
    """Response model for geometry text encoding."""

    wkt: str = Field(..., description="Geometry text")


class FeatureCollectionRequest(BaseModel):
    """Request model for building a map layer from stored features."""

    points: list[PointFeatureIn] = Field(default_factory=list)
    lines: list[LineFeatureIn] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_ids(self) -> "FeatureCollectionRequest":
        """Feature ids must be unique within points and within lines."""
        _check_unique_ids(self.points, "point")
        _check_unique_ids(self.lines, "line")
        return self


# ===================== DISTANCE MODELS =====================


class DistanceRequest(BaseModel):
    """Request model for great-circle distance."""

    a: CoordinateModel = Field(..., description="First coordinate")
    b: CoordinateModel = Field(..., description="Second coordinate")


class DistanceResponse(BaseModel):
    """Response model for great-circle distance."""

    distance_m: float = Field(..., ge=0, description="Haversine distance [m]")
