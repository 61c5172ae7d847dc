"""
FastAPI application entry point.

Configures the API with routers, middleware, and exception handlers.
"""

import logging
import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from api.endpoints import geometry, health, snap
from api.endpoints.health import VERSION
from core.config import get_settings
from core.exceptions import GeometryError

# Configure structured logging
settings = get_settings()
log_level = getattr(logging, settings.log_level)

structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
        if settings.log_level != "DEBUG"
        else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logging.basicConfig(
    format="%(message)s",
    level=log_level,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info(
        f"Starting Moinhos GIS API (snap threshold {settings.snap_threshold_m} m)..."
    )
    yield
    logger.info("Shutting down Moinhos GIS API...")


app = FastAPI(
    title="Moinhos GIS API",
    description="Geometry engine for the mills and water channels inventory",
    version=VERSION,
    lifespan=lifespan,
)

# CORS middleware - origins from environment variable
cors_origins = [origin.strip() for origin in settings.cors_origins.split(",")]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Accept"],
)
app.add_middleware(GZipMiddleware, minimum_size=500)


@app.middleware("http")
async def add_request_id(request, call_next):
    """Add unique request ID to each request for log traceability."""
    request_id = str(uuid.uuid4())[:8]
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(GeometryError)
async def geometry_error_handler(request: Request, exc: GeometryError):
    """Report geometry errors that escape an endpoint as 400."""
    logger.warning(f"Geometry error on {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(snap.router, prefix="/api", tags=["Snap"])
app.include_router(geometry.router, prefix="/api", tags=["Geometry"])


@app.get("/")
async def root():
    """Root endpoint - redirect info."""
    return {
        "message": "Moinhos GIS API",
        "docs": "/docs",
        "health": "/health",
    }
