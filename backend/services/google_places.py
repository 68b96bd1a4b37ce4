"""Google Places nearby search, normalized into lead dicts."""

import logging

import httpx

from config import Settings
from errors import ConfigurationError, UpstreamError
from services.upstream import get_json

logger = logging.getLogger(__name__)

SOURCE = "Google Places"
NAMESPACE = "places"

# ZERO_RESULTS is a successful, empty search
_OK_STATUSES = {"OK", "ZERO_RESULTS"}


def normalize_place(place: dict) -> dict:
    location = place.get("geometry", {}).get("location", {})
    return {
        "id": place["place_id"],
        "name": place["name"],
        "address": place.get("vicinity"),
        "phone": place.get("formatted_phone_number"),
        "rating": place.get("rating"),
        "location": {"lat": location.get("lat"), "lng": location.get("lng")},
        "total_ratings": place.get("user_ratings_total"),
        "types": place.get("types", []),
        "source": SOURCE,
    }


async def search_places(
    client: httpx.AsyncClient,
    settings: Settings,
    query: str,
    lat: float,
    lng: float,
    radius: int = 5000,
) -> list[dict]:
    """Search nearby places matching ``query`` around ``lat,lng``."""
    if not settings.google_places_api_key:
        raise ConfigurationError("GOOGLE_PLACES_API_KEY is not configured")

    data = await get_json(
        client,
        f"{settings.google_places_url}/nearbysearch/json",
        source=SOURCE,
        params={
            "location": f"{lat},{lng}",
            "radius": radius,
            "keyword": query,
            "key": settings.google_places_api_key,
        },
    )

    if not isinstance(data, dict):
        raise UpstreamError("Google Places returned an unexpected payload", source=SOURCE)

    status = data.get("status")
    if status not in _OK_STATUSES:
        logger.warning("Google Places returned status %s for %r", status, query)
        raise UpstreamError(f"Google Places API error: {status}", source=SOURCE)

    try:
        return [normalize_place(p) for p in data.get("results", [])]
    except (KeyError, TypeError, AttributeError) as e:
        raise UpstreamError("Google Places returned an unexpected payload", source=SOURCE) from e
