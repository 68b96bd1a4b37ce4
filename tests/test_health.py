import httpx


def test_ready(client):
    resp = client.get("/ready")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["X-Frame-Options"] == "DENY"


def test_health_reports_cache_and_providers(client, upstream):
    upstream.on("yelp.p.rapidapi.com", lambda request: httpx.Response(200, json={"businesses": []}))
    client.get("/api/yelp/search", params={"term": "cafe", "location": "NY"})

    body = client.get("/health").json()

    assert body["status"] == "ok"
    assert body["cache"] == {"entries": 1, "ttl_seconds": 3600}
    assert body["providers"] == {"google_places": True, "yelp": True, "yellow_pages": True}
    assert body["missing_config"] == []


def test_health_degraded_without_credentials(client, settings):
    settings.google_places_api_key = None

    body = client.get("/health").json()

    assert body["status"] == "degraded"
    assert body["providers"]["google_places"] is False
    assert body["missing_config"] == ["GOOGLE_PLACES_API_KEY"]
