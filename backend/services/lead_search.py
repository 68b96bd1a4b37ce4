"""Search-with-cache flow shared by every provider endpoint."""

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from services.cache import TTLCache, make_key

logger = logging.getLogger(__name__)


async def search_with_cache(
    cache: TTLCache,
    namespace: str,
    params: Mapping[str, Any],
    fetch: Callable[[], Awaitable[list[dict]]],
) -> list[dict]:
    """Return cached leads for ``params`` or fetch, store and return fresh ones.

    Exceptions from ``fetch`` propagate and nothing is stored.
    """
    key = make_key(namespace, params)
    cached = cache.get(key)
    if cached is not None:
        logger.debug("Cache hit: %s", key)
        return cached

    logger.debug("Cache miss: %s", key)
    leads = await fetch()
    cache.set(key, leads)
    logger.info("Cached %d %s results under %s", len(leads), namespace, key)
    return leads
