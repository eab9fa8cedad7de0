"""
Safety-Aware Routing API - FastAPI Main Application

A RESTful API that scores a pedestrian road network for safety and returns a
shortest and a safety-first walking route.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import uvicorn

from api.routes.safety import router as safety_router
from api.schemas.safety import ErrorResponse
from api.services.safety_service import safety_service

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - startup and shutdown events.
    """
    logger.info("Starting Safety-Aware Routing API...")

    health = safety_service.get_health_status()
    if health.datasets_loaded:
        logger.info(f"Safety service ready with datasets {health.dataset_counts}")
    else:
        logger.warning("Safety service running in degraded mode - road data not loaded")

    yield

    logger.info("Shutting down Safety-Aware Routing API...")


app = FastAPI(
    title="Safety-Aware Routing API",
    description="""
    **Walking routes that balance distance against personal safety**

    Every road segment is scored from crime density, security camera coverage,
    building shadow and land use, adjusted for the time of day.

    ## Features

    - **Two Routes per Request**: Shortest and safety-first
    - **Time of Day**: Scores change with lighting conditions
    - **Point Breakdown**: Per-indicator diagnostics for any coordinate
    - **GeoJSON Output**: Scored network and routes for map clients

    ## Quick Start

    1. Check service health: `GET /api/safety/health`
    2. Calculate routes: `POST /api/safety/routes`
    3. Fetch the scored network: `GET /api/safety/roads`
    """,
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle request validation errors with detailed information.
    """
    logger.warning(f"Validation error for {request.url}: {exc}")
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(
            error="validation_error",
            message="Request validation failed",
            details={"errors": jsonable_encoder(exc.errors())}
        ).model_dump()
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """
    Handle unexpected errors gracefully.
    """
    logger.error(f"Unexpected error for {request.url}: {exc}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="internal_server_error",
            message="An unexpected error occurred"
        ).model_dump()
    )


app.include_router(safety_router)


@app.get("/", tags=["general"])
async def root():
    """
    API root endpoint with basic information.
    """
    return {
        "api": "Safety-Aware Routing API",
        "version": "1.0.0",
        "status": "operational",
        "documentation": "/docs",
        "health_check": "/api/safety/health"
    }


@app.get("/health", tags=["general"])
async def api_health():
    """
    Simple health check endpoint.
    """
    service_health = safety_service.get_health_status()
    return {
        "api_status": "healthy",
        "service_status": service_health.status
    }


# Development server configuration
if __name__ == "__main__":
    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
