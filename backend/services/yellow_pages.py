"""Yellow Pages listing search (via RapidAPI), normalized into lead dicts."""

import httpx

from config import Settings
from errors import ConfigurationError, UpstreamError
from services.upstream import get_json, rapidapi_headers

SOURCE = "Yellow Pages"
NAMESPACE = "yellowpages"


def normalize_listing(business: dict) -> dict:
    return {
        "id": business["id"],
        "name": business["name"],
        "address": business.get("address"),
        "phone": business.get("phone"),
        "rating": business.get("rating"),
        "website": business.get("website"),
        "categories": business.get("categories", []),
        "source": SOURCE,
    }


async def search_listings(
    client: httpx.AsyncClient, settings: Settings, query: str, location: str | None
) -> list[dict]:
    if not settings.rapidapi_key:
        raise ConfigurationError("RAPIDAPI_KEY is not configured")

    params = {"query": query}
    if location:
        params["location"] = location

    data = await get_json(
        client,
        f"{settings.yellow_pages_url}/search",
        source=SOURCE,
        params=params,
        headers=rapidapi_headers(settings.rapidapi_key, settings.yellow_pages_url),
    )

    try:
        return [normalize_listing(b) for b in data["businesses"]]
    except (KeyError, TypeError) as e:
        raise UpstreamError("Yellow Pages returned an unexpected payload", source=SOURCE) from e
