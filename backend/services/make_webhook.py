"""Make.com automation webhooks.

Three webhooks receive three different payload shapes. Each has its own
function rather than one merged payload.
"""

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)

SOURCE = "Make"

DEFAULT_BUSINESS_TYPE = "restaurant"
DEFAULT_LOCATION = "New York, USA"


async def _post(client: httpx.AsyncClient, url: str | None, payload: dict, purpose: str) -> Any:
    if not url:
        raise ConfigurationError(f"Make webhook URL for {purpose} is not configured")
    try:
        resp = await client.post(url, json=payload)
        resp.raise_for_status()
    except httpx.HTTPError as e:
        logger.error("Make webhook (%s) failed: %s", purpose, e)
        raise UpstreamError(f"Failed to send {purpose} to Make", source=SOURCE) from e

    logger.info("Sent %s to Make (HTTP %s)", purpose, resp.status_code)
    # Make answers "Accepted" as plain text unless a webhook response module is set up
    try:
        return resp.json()
    except ValueError:
        return resp.text


async def send_lead(client: httpx.AsyncClient, url: str | None, lead: dict) -> Any:
    """Forward a single lead record as-is."""
    return await _post(client, url, lead, "lead")


async def send_search(
    client: httpx.AsyncClient,
    url: str | None,
    search_term: str,
    source: str,
    location: str,
) -> Any:
    """Forward a search request so the automation can run it asynchronously."""
    payload = {
        "searchTerm": search_term,
        "source": source,
        "location": location,
        "requestedAt": datetime.now(timezone.utc).isoformat(),
    }
    return await _post(client, url, payload, "search")


async def request_leads(
    client: httpx.AsyncClient,
    url: str | None,
    business_type: str | None = None,
    location: str | None = None,
) -> Any:
    payload = {
        "business_type": business_type or DEFAULT_BUSINESS_TYPE,
        "location": location or DEFAULT_LOCATION,
    }
    return await _post(client, url, payload, "lead request")
