"""Health: liveness probe and a configuration summary.

Invariants:
    - GET /live always returns 200 {"message": "Hello world"} if the process is up
    - GET /health reports which upstream credentials are set (booleans, never values)
"""

from fastapi import APIRouter, Depends, status

from tripgate import __version__
from tripgate.config import Settings, get_settings

router = APIRouter(tags=["health"])


@router.get("/live", status_code=status.HTTP_200_OK)
async def live():
    """Basic liveness probe."""
    return {"message": "Hello world"}


@router.get("/health", status_code=status.HTTP_200_OK)
async def health(settings: Settings = Depends(get_settings)):
    return {
        "status": "healthy",
        "service": "tripgate",
        "version": __version__,
        "upstreams": {
            "places": bool(settings.fsq_api_key),
            "chat": bool(settings.openrouter_api_key),
            "gemini": bool(settings.gemini_api_key),
        },
    }
