"""Health and readiness check routes."""

import logging

from fastapi import APIRouter, Depends

from config import Settings
from dependencies import get_cache, get_settings
from services.cache import TTLCache

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/ready")
async def ready(settings: Settings = Depends(get_settings)) -> dict:
    """Lightweight readiness check — no external calls."""
    return {"status": "ok", "service": "unicorn-leads-api", "commit": settings.git_sha}


@router.get("/health")
async def health(
    settings: Settings = Depends(get_settings),
    cache: TTLCache = Depends(get_cache),
) -> dict:
    """Report cache state and which providers have credentials configured."""
    missing = settings.validate()
    return {
        "status": "ok" if not missing else "degraded",
        "service": "unicorn-leads-api",
        "commit": settings.git_sha,
        "cache": {"entries": len(cache), "ttl_seconds": cache.ttl_seconds},
        "providers": {
            "google_places": bool(settings.google_places_api_key),
            "yelp": bool(settings.rapidapi_key),
            "yellow_pages": bool(settings.rapidapi_key),
        },
        "missing_config": missing,
    }
