"""
Health check endpoint.

Reports service status and verifies the geometry engine answers a
reference distance query.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from core.distance import haversine_distance
from core.features import Coordinate

router = APIRouter()

VERSION = "1.0.0"


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    engine: str
    version: str


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """
    Check system health.

    Returns
    -------
    HealthResponse
        Service status and geometry engine self-check result
    """
    # One degree of latitude on the reference sphere is ~111.2 km
    try:
        d = haversine_distance(Coordinate(0.0, 0.0), Coordinate(0.0, 1.0))
        engine_status = "ok" if abs(d - 111_195.0) < 1.0 else f"error: {d}"
    except Exception as e:
        engine_status = f"error: {str(e)}"

    status = "healthy" if engine_status == "ok" else "unhealthy"

    return HealthResponse(
        status=status,
        engine=engine_status,
        version=VERSION,
    )
