"""FastAPI dependencies for the per-process shared objects on ``app.state``."""

import httpx
from fastapi import Request

from config import Settings
from services.cache import TTLCache


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_cache(request: Request) -> TTLCache:
    return request.app.state.cache


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client
