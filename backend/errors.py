"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class LeadSearchError(Exception):
    """Base exception with HTTP status code and optional originating provider."""

    def __init__(self, message: str, status_code: int = 500, source: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.source = source

    def to_dict(self) -> dict:
        body = {"error": str(self)}
        if self.source:
            body["source"] = self.source
        return body


class MissingParameterError(LeadSearchError):
    def __init__(self, *names: str):
        joined = " and ".join(names)
        # "query" reads as a word; leave identifiers like "searchTerm" alone
        if names[0].islower():
            joined = joined[:1].upper() + joined[1:]
        if len(names) == 1:
            message = f"{joined} parameter is required"
        else:
            message = f"{joined} parameters are required"
        super().__init__(message, status_code=400)
        self.names = names


class UpstreamError(LeadSearchError):
    """A search provider or webhook failed. Never cached."""

    def __init__(self, message: str, source: str):
        super().__init__(message, status_code=500, source=source)


class ConfigurationError(LeadSearchError):
    def __init__(self, message: str):
        super().__init__(message, status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(LeadSearchError)
    async def handle_lead_search_error(_request: Request, exc: LeadSearchError):
        if exc.status_code >= 500:
            logger.warning("Request failed (%s): %s", exc.source or "internal", exc)
        return JSONResponse(exc.to_dict(), status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_request: Request, exc: RequestValidationError):
        errors = exc.errors()
        detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return JSONResponse({"error": detail}, status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"error": "An unexpected error occurred"},
            status_code=500,
        )
