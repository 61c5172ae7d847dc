"""
Pydantic models for API schemas.
"""

from models.schemas import (
    CoordinateModel,
    SnapRequest,
    SnapResponse,
)

__all__ = [
    "CoordinateModel",
    "SnapRequest",
    "SnapResponse",
]
