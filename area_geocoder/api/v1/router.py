"""API v1 router module."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from area_geocoder.core.config import settings

router = APIRouter(default_response_class=JSONResponse)


@router.get("/health")
async def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint.

    Returns
    -------
        Dict containing health status information
    """
    return {
        "status": "healthy",
        "version": settings.version,
        "correlation_id": request.state.correlation_id,
    }
