"""Shared httpx call wrapper for search providers and webhooks."""

import logging
from typing import Any

import httpx

from errors import UpstreamError

logger = logging.getLogger(__name__)


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    source: str,
    params: dict | None = None,
    headers: dict | None = None,
) -> Any:
    """GET ``url`` and return the decoded JSON body.

    Transport errors, non-2xx responses and undecodable bodies all become
    ``UpstreamError`` tagged with ``source``.
    """
    try:
        resp = await client.get(url, params=params, headers=headers)
        resp.raise_for_status()
        return resp.json()
    except httpx.HTTPStatusError as e:
        logger.warning("%s returned HTTP %s", source, e.response.status_code)
        raise UpstreamError(
            f"{source} API error: HTTP {e.response.status_code}", source=source
        ) from e
    except httpx.HTTPError as e:
        logger.warning("%s request failed: %s", source, e)
        raise UpstreamError(f"{source} request failed", source=source) from e
    except ValueError as e:
        logger.warning("%s returned invalid JSON: %s", source, e)
        raise UpstreamError(f"{source} returned an invalid response", source=source) from e


def rapidapi_headers(api_key: str, base_url: str) -> dict:
    host = httpx.URL(base_url).host
    return {"X-RapidAPI-Key": api_key, "X-RapidAPI-Host": host}
