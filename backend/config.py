"""Centralized configuration — all env vars in one place."""

import os


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")

        # Response cache
        self.cache_ttl_seconds: int = int(os.getenv("CACHE_TTL_SECONDS", "3600"))

        # Search providers
        self.google_places_api_key: str | None = os.getenv("GOOGLE_PLACES_API_KEY")
        self.rapidapi_key: str | None = os.getenv("RAPIDAPI_KEY")
        self.google_places_url: str = os.getenv(
            "GOOGLE_PLACES_URL", "https://maps.googleapis.com/maps/api/place"
        )
        self.yelp_url: str = os.getenv("YELP_URL", "https://yelp.p.rapidapi.com")
        self.yellow_pages_url: str = os.getenv(
            "YELLOW_PAGES_URL", "https://yellowpage-us.p.rapidapi.com"
        )
        self.http_timeout_seconds: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))

        # Make.com automation webhooks
        self.make_lead_webhook_url: str | None = os.getenv("MAKE_LEAD_WEBHOOK_URL")
        self.make_search_webhook_url: str | None = os.getenv("MAKE_SEARCH_WEBHOOK_URL")
        self.make_request_webhook_url: str | None = os.getenv("MAKE_REQUEST_WEBHOOK_URL")

        # Rate limiting on /api (15 minutes, 100 requests per client)
        self.rate_limit_window_seconds: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "900"))
        self.rate_limit_max: int = int(os.getenv("RATE_LIMIT_MAX", "100"))

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return list of missing env vars for provider and webhook features."""
        required = [
            "GOOGLE_PLACES_API_KEY",
            "RAPIDAPI_KEY",
            "MAKE_LEAD_WEBHOOK_URL",
            "MAKE_SEARCH_WEBHOOK_URL",
            "MAKE_REQUEST_WEBHOOK_URL",
        ]
        return [var for var in required if not getattr(self, var.lower())]


settings = Settings()
