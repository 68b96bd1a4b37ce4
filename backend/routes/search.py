"""Lead search routes — one per provider, all behind the response cache.

GET /api/places/search       → Google Places nearby search
GET /api/yelp/search         → Yelp business search
GET /api/yellowpages/search  → Yellow Pages listings
"""

import logging

import httpx
from fastapi import APIRouter, Depends, Query

from config import Settings
from dependencies import get_cache, get_http_client, get_settings
from errors import MissingParameterError
from services import google_places, yellow_pages, yelp
from services.cache import TTLCache
from services.lead_search import search_with_cache

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


@router.get("/places/search")
async def places_search(
    query: str | None = Query(None),
    lat: float | None = Query(None),
    lng: float | None = Query(None),
    radius: int = Query(5000, gt=0, le=50000),
    cache: TTLCache = Depends(get_cache),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> list[dict]:
    """Google Places results near ``lat,lng`` matching ``query``."""
    query = _clean(query)
    if not query:
        raise MissingParameterError("query")
    if lat is None or lng is None:
        raise MissingParameterError("lat", "lng")

    params = {"query": query, "lat": lat, "lng": lng, "radius": radius}
    return await search_with_cache(
        cache,
        google_places.NAMESPACE,
        params,
        lambda: google_places.search_places(client, settings, query, lat, lng, radius),
    )


@router.get("/yelp/search")
async def yelp_search(
    term: str | None = Query(None),
    location: str | None = Query(None),
    cache: TTLCache = Depends(get_cache),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> list[dict]:
    term, location = _clean(term), _clean(location)
    if not term or not location:
        raise MissingParameterError("term", "location")

    return await search_with_cache(
        cache,
        yelp.NAMESPACE,
        {"term": term, "location": location},
        lambda: yelp.search_businesses(client, settings, term, location),
    )


@router.get("/yellowpages/search")
async def yellowpages_search(
    query: str | None = Query(None),
    location: str | None = Query(None),
    cache: TTLCache = Depends(get_cache),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> list[dict]:
    query, location = _clean(query), _clean(location)
    if not query:
        raise MissingParameterError("query")

    return await search_with_cache(
        cache,
        yellow_pages.NAMESPACE,
        {"query": query, "location": location},
        lambda: yellow_pages.search_listings(client, settings, query, location),
    )
