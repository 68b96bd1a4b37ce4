"""FastAPI application entry point for the Unicorn AI lead search API."""

import logging
import sys
import time
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Settings, settings as default_settings
from errors import register_error_handlers
from services.cache import TTLCache
from services.rate_limit import RateLimiter

# Structured logging: JSON for production, human-readable for local
if default_settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Build the app. Tests pass their own settings and a mock-transport client."""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        missing = settings.validate()
        if missing:
            logger.warning("Missing env vars (search/webhook features may fail): %s", ", ".join(missing))

        owns_client = app.state.http_client is None
        if owns_client:
            app.state.http_client = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
        try:
            yield
        finally:
            if owns_client:
                await app.state.http_client.aclose()

    app = FastAPI(title="Unicorn AI Lead Search API", version="1.0.0", lifespan=lifespan)

    # One cache and one rate limiter per process, shared by every handler
    app.state.settings = settings
    app.state.http_client = http_client
    app.state.cache = TTLCache(ttl_seconds=settings.cache_ttl_seconds)
    app.state.rate_limiter = RateLimiter(
        max_requests=settings.rate_limit_max,
        window_seconds=settings.rate_limit_window_seconds,
    )

    @app.middleware("http")
    async def rate_limit(request: Request, call_next):
        if request.url.path.startswith("/api/") and request.method != "OPTIONS":
            client_key = request.client.host if request.client else "unknown"
            allowed, retry_after = app.state.rate_limiter.hit(client_key)
            if not allowed:
                logger.warning("Rate limit exceeded for %s on %s", client_key, request.url.path)
                return JSONResponse(
                    {"error": "Too many requests, please try again later."},
                    status_code=429,
                    headers={"Retry-After": str(max(1, int(retry_after)))},
                )
        return await call_next(request)

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Request log
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s %d %.1fms", request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    # CORS is added last so it wraps every response above, 429s included
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Centralized error handlers
    register_error_handlers(app)

    from routes.health import router as health_router
    from routes.search import router as search_router
    from routes.webhook import router as webhook_router

    app.include_router(health_router)
    app.include_router(search_router)
    app.include_router(webhook_router)

    return app


app = create_app()
