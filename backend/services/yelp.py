"""Yelp business search (via RapidAPI), normalized into lead dicts."""

import httpx

from config import Settings
from errors import ConfigurationError, UpstreamError
from services.upstream import get_json, rapidapi_headers

SOURCE = "Yelp"
NAMESPACE = "yelp"


def normalize_business(business: dict) -> dict:
    location = business.get("location") or {}
    return {
        "id": business["id"],
        "name": business["name"],
        "address": ", ".join(location.get("display_address", [])) or None,
        "phone": business.get("phone") or None,
        "rating": business.get("rating"),
        "review_count": business.get("review_count"),
        "categories": [c["title"] for c in business.get("categories", [])],
        "source": SOURCE,
    }


async def search_businesses(
    client: httpx.AsyncClient, settings: Settings, term: str, location: str
) -> list[dict]:
    if not settings.rapidapi_key:
        raise ConfigurationError("RAPIDAPI_KEY is not configured")

    data = await get_json(
        client,
        f"{settings.yelp_url}/businesses/search",
        source=SOURCE,
        params={"term": term, "location": location},
        headers=rapidapi_headers(settings.rapidapi_key, settings.yelp_url),
    )

    try:
        return [normalize_business(b) for b in data["businesses"]]
    except (KeyError, TypeError) as e:
        raise UpstreamError("Yelp returned an unexpected payload", source=SOURCE) from e
