"""
Geometry codec for persisted point and polyline geometries.

Converts between in-memory coordinates and the textual geometry form
stored by the persistence layer (PostGIS ``ST_AsText`` style):

- ``POINT(<lng> <lat>)``
- ``LINESTRING(<lng1> <lat1>, <lng2> <lat2>, ...)``

Numbers are written in positional notation with the shortest digit string
that parses back to the same double, so ``decode(encode(x)) == x`` holds
bit-for-bit.
"""

import logging
import math
import re
from collections.abc import Sequence

import numpy as np

from core.constants import MIN_LINE_VERTICES, SRID_WGS84
from core.exceptions import InvalidGeometry, MalformedGeometry
from core.features import Coordinate, FeatureId, LineFeature, PointFeature

logger = logging.getLogger(__name__)

# Signed decimal number, optional exponent. Both signs allowed on either axis.
_NUMBER = r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?"
_NUMBER_RE = re.compile(_NUMBER, re.ASCII)

# Optional EWKT prefix as returned for WGS84 geography columns
_SRID_PREFIX = rf"(?:SRID={SRID_WGS84}\s*;\s*)?"

_POINT_RE = re.compile(
    rf"^\s*{_SRID_PREFIX}POINT\s*\(\s*({_NUMBER})\s+({_NUMBER})\s*\)\s*$",
    re.IGNORECASE | re.ASCII,
)
_LINESTRING_RE = re.compile(
    rf"^\s*{_SRID_PREFIX}LINESTRING\s*\((.*)\)\s*$",
    re.IGNORECASE | re.DOTALL | re.ASCII,
)
_KEYWORD_RE = re.compile(
    rf"^\s*{_SRID_PREFIX}(POINT|LINESTRING)\s*\(",
    re.IGNORECASE | re.ASCII,
)


def _format_number(value: float) -> str:
    """Shortest round-trip positional representation, '.' as separator."""
    return np.format_float_positional(float(value), unique=True, trim="-")


def _format_pair(coord: Coordinate) -> str:
    return f"{_format_number(coord.lng)} {_format_number(coord.lat)}"


def _parse_number(token: str, text: str) -> float:
    if not _NUMBER_RE.fullmatch(token):
        raise MalformedGeometry(f"Invalid number {token!r} in geometry {text!r}")
    value = float(token)
    if not math.isfinite(value):
        raise MalformedGeometry(f"Non-finite number {token!r} in geometry {text!r}")
    return value


def _make_coordinate(lng: float, lat: float, text: str) -> Coordinate:
    try:
        return Coordinate(lng=lng, lat=lat)
    except InvalidGeometry as e:
        raise MalformedGeometry(f"Coordinate out of range in {text!r}: {e}") from e


def encode_point(coord: Coordinate) -> str:
    """
    Encode a coordinate as point text.

    Parameters
    ----------
    coord : Coordinate
        Coordinate to encode

    Returns
    -------
    str
        ``POINT(<lng> <lat>)``

    Examples
    --------
    >>> encode_point(Coordinate(-8.6125, 41.1579))
    'POINT(-8.6125 41.1579)'
    """
    return f"POINT({_format_pair(coord)})"


def decode_point(text: str) -> Coordinate:
    """
    Decode point text into a coordinate.

    Parameters
    ----------
    text : str
        ``POINT(<lng> <lat>)``, optionally prefixed with ``SRID=4326;``

    Returns
    -------
    Coordinate
        Decoded coordinate

    Raises
    ------
    MalformedGeometry
        If the text does not match the point form or holds an
        out-of-range coordinate

    Examples
    --------
    >>> decode_point("POINT(-8.6125 41.1579)")
    Coordinate(lng=-8.6125, lat=41.1579)
    """
    if not isinstance(text, str):
        raise MalformedGeometry(f"Expected point text, got {type(text).__name__}")

    match = _POINT_RE.match(text)
    if match is None:
        raise MalformedGeometry(f"Invalid point geometry: {text!r}")

    lng = _parse_number(match.group(1), text)
    lat = _parse_number(match.group(2), text)
    return _make_coordinate(lng, lat, text)


def encode_linestring(coords: Sequence[Coordinate]) -> str:
    """
    Encode an ordered coordinate sequence as linestring text.

    Parameters
    ----------
    coords : Sequence[Coordinate]
        Polyline vertices in order

    Returns
    -------
    str
        ``LINESTRING(<lng1> <lat1>, <lng2> <lat2>, ...)``

    Raises
    ------
    InvalidGeometry
        If fewer than two coordinates are given
    """
    coords = list(coords)
    if len(coords) < MIN_LINE_VERTICES:
        raise InvalidGeometry(
            f"LINESTRING needs at least {MIN_LINE_VERTICES} coordinates, "
            f"got {len(coords)}"
        )
    return "LINESTRING(" + ", ".join(_format_pair(c) for c in coords) + ")"


def decode_linestring(text: str, *, strict: bool = True) -> list[Coordinate]:
    """
    Decode linestring text into an ordered coordinate list.

    Parameters
    ----------
    text : str
        ``LINESTRING(<lng1> <lat1>, ...)``, optionally prefixed with
        ``SRID=4326;``
    strict : bool, optional
        When False, text that is not a linestring at all yields an empty
        list (legacy behaviour) instead of raising. Malformed coordinate
        pairs raise in both modes. Default True.

    Returns
    -------
    list[Coordinate]
        Decoded vertices in order

    Raises
    ------
    MalformedGeometry
        If the text is not a linestring (strict mode), a pair is not two
        finite in-range numbers, or fewer than two vertices are present
    """
    match = _LINESTRING_RE.match(text) if isinstance(text, str) else None
    if match is None:
        if strict:
            raise MalformedGeometry(f"Invalid linestring geometry: {text!r}")
        logger.warning(f"Treating unparseable linestring as empty: {text!r}")
        return []

    coords = []
    for pair in match.group(1).split(","):
        tokens = pair.split()
        if len(tokens) != 2:
            raise MalformedGeometry(
                f"Invalid coordinate pair {pair.strip()!r} in {text!r}"
            )
        lng = _parse_number(tokens[0], text)
        lat = _parse_number(tokens[1], text)
        coords.append(_make_coordinate(lng, lat, text))

    if len(coords) < MIN_LINE_VERTICES:
        raise MalformedGeometry(
            f"LINESTRING needs at least {MIN_LINE_VERTICES} coordinates: {text!r}"
        )
    return coords


def geometry_type(text: str) -> str:
    """
    Geometry type named by the leading keyword of geometry text.

    Returns
    -------
    str
        'Point' or 'LineString'

    Raises
    ------
    MalformedGeometry
        If the text does not start with a POINT or LINESTRING keyword
    """
    match = _KEYWORD_RE.match(text) if isinstance(text, str) else None
    if match is None:
        raise MalformedGeometry(f"Unsupported geometry: {text!r}")
    return "Point" if match.group(1).upper() == "POINT" else "LineString"


def encode_line_feature(feature: LineFeature) -> str:
    """Encode a line feature's path as linestring text."""
    return encode_linestring(feature.coordinates)


def decode_point_feature(
    id: FeatureId,
    text: str,
    name: str | None = None,
) -> PointFeature:
    """Build a PointFeature from its persisted point text."""
    return PointFeature(id=id, coordinate=decode_point(text), name=name)


def decode_line_feature(
    id: FeatureId,
    text: str,
    name: str | None = None,
    color: str | None = None,
) -> LineFeature:
    """
    Build a LineFeature from its persisted linestring text.

    Raises
    ------
    MalformedGeometry
        If the text cannot be decoded
    InvalidGeometry
        If all decoded vertices coincide
    """
    return LineFeature(
        id=id,
        coordinates=tuple(decode_linestring(text)),
        name=name,
        color=color,
    )
