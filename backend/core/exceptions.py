"""
Geometry engine exceptions.
"""


class GeometryError(ValueError):
    """Base exception for the geometry engine."""


class MalformedGeometry(GeometryError):
    """Raised when geometry text cannot be decoded."""


class InvalidGeometry(GeometryError):
    """Raised when a value violates a geometry precondition."""
