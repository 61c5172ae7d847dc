"""
Project-wide constants.

Centralizes magic numbers and coordinate reference system identifiers
used by the geometry engine.
"""

# Spatial reference id of WGS84 geography columns
SRID_WGS84 = 4326

# Coordinate domain (WGS84 degrees)
LNG_MIN = -180.0
LNG_MAX = 180.0
LAT_MIN = -90.0
LAT_MAX = 90.0

# Spherical earth radius used by the Haversine formula [m]
EARTH_RADIUS_M = 6_371_000.0

# Default snapping tolerance for interactive placement [m]
DEFAULT_SNAP_THRESHOLD_M = 10.0

# Segments shorter than this (squared, in local planar degrees) are treated
# as a single point (~1 cm)
DEGENERATE_SEGMENT_EPSILON_DEG2 = 1e-14

# Minimum number of vertices in a polyline
MIN_LINE_VERTICES = 2
