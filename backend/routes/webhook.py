"""Make.com forwarding routes and cache maintenance."""

import logging

import httpx
from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel, Field

from config import Settings
from dependencies import get_cache, get_http_client, get_settings
from errors import MissingParameterError
from services import make_webhook
from services.cache import TTLCache

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


class LeadRequest(BaseModel):
    business_type: str | None = None
    location: str | None = None


class SearchRequest(BaseModel):
    search_term: str = Field("", alias="searchTerm")
    source: str = ""
    location: str = ""


@router.post("/webhook/make")
async def request_leads(
    body: LeadRequest | None = None,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Ask the Make automation to gather leads for a business type and location."""
    body = body or LeadRequest()
    data = await make_webhook.request_leads(
        client, settings.make_request_webhook_url, body.business_type, body.location
    )
    return {"message": "Request sent to Make", "data": data}


@router.post("/leads/send")
async def send_lead(
    lead: dict = Body(...),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> dict:
    data = await make_webhook.send_lead(client, settings.make_lead_webhook_url, lead)
    return {"data": data}


@router.post("/searches/send")
async def send_search(
    body: SearchRequest,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> dict:
    search_term = body.search_term.strip()
    if not search_term:
        raise MissingParameterError("searchTerm")
    data = await make_webhook.send_search(
        client, settings.make_search_webhook_url, search_term, body.source, body.location
    )
    return {"data": data}


@router.post("/cache/clear")
async def clear_cache(cache: TTLCache = Depends(get_cache)) -> dict:
    """Operational reset of the response cache."""
    removed = cache.clear()
    logger.info("Response cache cleared (%d entries)", removed)
    return {"status": "cleared", "entries_removed": removed}
