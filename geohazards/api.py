"""Geohazards API - FastAPI service.

Exposes the gateway operations over HTTP. Part of the imperative shell:
routes only translate query parameters into operation inputs and map
errors onto status codes.
"""

import logging

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from geohazards.core.catalog import priced_operations
from geohazards.core.config import Config
from geohazards.core.errors import (
    EventNotFound,
    GeohazardError,
    InvalidInput,
    UpstreamMalformed,
    UpstreamUnavailable,
)
from geohazards.core.inputs import (
    LookupRequest,
    ReportRequest,
    SearchRequest,
    TopRequest,
    VolcanoSearchRequest,
)
from geohazards.orchestrator import Orchestrator


logger = logging.getLogger(__name__)

# HTTP status per error type
ERROR_STATUS: dict[type[GeohazardError], int] = {
    InvalidInput: 400,
    EventNotFound: 404,
    UpstreamUnavailable: 502,
    UpstreamMalformed: 502,
}

router = APIRouter()


def get_orchestrator(request: Request) -> Orchestrator:
    """Orchestrator attached to the running app."""
    return request.app.state.orchestrator


async def handle_geohazard_error(request: Request, exc: GeohazardError) -> JSONResponse:
    """Translate an operation failure into a JSON error response."""
    status = ERROR_STATUS.get(type(exc), 500)

    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)

    return JSONResponse(
        status_code=status,
        content={"error": exc.code, "message": exc.message},
    )


async def handle_request_validation_error(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Report unparseable or missing query parameters as invalid input."""
    first = exc.errors()[0]
    field = str(first["loc"][-1])
    error = InvalidInput(field, first["msg"])

    logger.warning("%s %s rejected: %s", request.method, request.url.path, error.message)

    return JSONResponse(
        status_code=ERROR_STATUS[InvalidInput],
        content={"error": error.code, "message": error.message},
    )


# ===== Public Endpoints =====

@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@router.get("/entrypoints")
async def list_entrypoints(request: Request):
    """List the operations with their advertised prices."""
    config: Config = request.app.state.config
    return {
        "name": config.service_name,
        "version": config.service_version,
        "entrypoints": [
            {"key": op.key, "description": op.description, "price": op.price}
            for op in priced_operations(config.prices)
        ],
    }


@router.get("/overview")
async def overview(orchestrator: Orchestrator = Depends(get_orchestrator)):
    """Free overview of recent global seismic activity."""
    return await orchestrator.overview()


@router.get("/lookup/{event_id}")
async def lookup(event_id: str, orchestrator: Orchestrator = Depends(get_orchestrator)):
    """Details for a specific earthquake by USGS event ID."""
    return await orchestrator.lookup(LookupRequest(event_id=event_id))


@router.get("/search")
async def search(
    latitude: float | None = Query(default=None),
    longitude: float | None = Query(default=None),
    radius_km: float = Query(default=500, alias="radiusKm"),
    min_magnitude: float = Query(default=4, alias="minMagnitude"),
    max_magnitude: float | None = Query(default=None, alias="maxMagnitude"),
    days: int = Query(default=7),
    limit: int = Query(default=20),
    orchestrator: Orchestrator = Depends(get_orchestrator),
):
    """Search earthquakes by location, magnitude range and time period."""
    return await orchestrator.search(SearchRequest(
        latitude=latitude,
        longitude=longitude,
        radius_km=radius_km,
        min_magnitude=min_magnitude,
        max_magnitude=max_magnitude,
        days=days,
        limit=limit,
    ))


@router.get("/top")
async def top(
    period: str = Query(default="week"),
    min_magnitude: float = Query(default=5, alias="minMagnitude"),
    limit: int = Query(default=10),
    orchestrator: Orchestrator = Depends(get_orchestrator),
):
    """Largest earthquakes by magnitude for a day, week or month."""
    return await orchestrator.top(TopRequest(
        period=period,
        min_magnitude=min_magnitude,
        limit=limit,
    ))


@router.get("/volcanoes")
async def volcano_search(
    country: str | None = Query(default=None),
    name: str | None = Query(default=None),
    limit: int = Query(default=20),
    latitude: float | None = Query(default=None),
    longitude: float | None = Query(default=None),
    radius_km: float = Query(default=300, alias="radiusKm"),
    orchestrator: Orchestrator = Depends(get_orchestrator),
):
    """Search volcanoes by country, name, or distance from a point."""
    return await orchestrator.volcano_search(VolcanoSearchRequest(
        country=country,
        name=name,
        limit=limit,
        latitude=latitude,
        longitude=longitude,
        radius_km=radius_km,
    ))


@router.get("/report")
async def report(
    latitude: float = Query(...),
    longitude: float = Query(...),
    radius_km: float = Query(default=300, alias="radiusKm"),
    orchestrator: Orchestrator = Depends(get_orchestrator),
):
    """Geohazard report: nearby earthquakes and volcanoes within a radius."""
    return await orchestrator.report(ReportRequest(
        latitude=latitude,
        longitude=longitude,
        radius_km=radius_km,
    ))


def create_app(
    config: Config | None = None,
    orchestrator: Orchestrator | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Application configuration (defaults if None)
        orchestrator: Operation runner (built from config if None)

    Returns:
        Configured FastAPI app
    """
    config = config or Config()

    app = FastAPI(
        title="Geohazards API",
        description="Real-time earthquake and volcano data from USGS",
        version=config.service_version,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    app.state.config = config
    app.state.orchestrator = orchestrator or Orchestrator(config)

    app.add_exception_handler(GeohazardError, handle_geohazard_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.include_router(router)

    return app
