"""
FastAPI routes for safety scoring and routing endpoints.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from api.schemas.safety import (
    HealthResponse,
    PointScoreRequest,
    PointScoreResponse,
    RouteRequest,
    RouteResponse,
    TimeRequest,
    TimeResponse,
)
from api.services.safety_service import safety_service

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api/safety", tags=["safety"])


@router.get("/health", response_model=HealthResponse, summary="Health Check")
async def health_check():
    """
    Check the health status of the safety routing service.

    Returns:
        HealthResponse: Service health and dataset counts
    """
    try:
        return safety_service.get_health_status()
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Health check failed"
        )


@router.post("/routes", response_model=RouteResponse, summary="Calculate Routes")
async def calculate_routes(request: RouteRequest):
    """
    Calculate the shortest and the safety-first walking route.

    Example:
        ```json
        {
            "origin": {"latitude": 35.8080, "longitude": 139.7210},
            "destination": {"latitude": 35.8110, "longitude": 139.7260},
            "simulated_hour": 22
        }
        ```
    """
    try:
        logger.info(f"Route request from ({request.origin.latitude}, {request.origin.longitude}) "
                    f"to ({request.destination.latitude}, {request.destination.longitude})")

        # No route is a normal outcome and is reported in the body
        return safety_service.calculate_routes(request)

    except ValueError as e:
        logger.warning(f"Route calculation validation error: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Route calculation failed with unexpected error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error during route calculation"
        )


@router.post("/point-score", response_model=PointScoreResponse, summary="Score a Single Point")
async def score_point(request: PointScoreRequest):
    """
    Diagnostic safety breakdown for one coordinate.
    """
    try:
        return safety_service.score_point(request)
    except ValueError as e:
        logger.warning(f"Point score validation error: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Point scoring failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error during point scoring"
        )


@router.get("/roads", summary="Scored Road Network")
async def scored_roads(
    simulated_hour: Optional[int] = Query(default=None, ge=0, le=23),
    min_lon: Optional[float] = Query(default=None, ge=-180, le=180),
    min_lat: Optional[float] = Query(default=None, ge=-90, le=90),
    max_lon: Optional[float] = Query(default=None, ge=-180, le=180),
    max_lat: Optional[float] = Query(default=None, ge=-90, le=90)
):
    """
    Scored road segments as a GeoJSON FeatureCollection.

    Pass all four bounds to restrict the result to a viewport.
    """
    bounds = (min_lon, min_lat, max_lon, max_lat)
    bbox = None
    if any(b is not None for b in bounds):
        if any(b is None for b in bounds):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Viewport filter needs min_lon, min_lat, max_lon and max_lat"
            )
        bbox = bounds

    try:
        return safety_service.get_scored_roads_geojson(simulated_hour, bbox)
    except Exception as e:
        logger.error(f"Failed to build scored road network: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error while scoring roads"
        )


@router.put("/time", response_model=TimeResponse, summary="Set Simulated Hour")
async def set_time(request: TimeRequest):
    """
    Change the simulated hour and rescore the network.

    Send ``null`` to follow the wall clock again.
    """
    try:
        return safety_service.set_time(request.simulated_hour)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Failed to change simulated hour: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error while rescoring"
        )
