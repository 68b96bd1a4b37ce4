import json
from datetime import datetime

import httpx

MAKE_HOST = "hook.make.test"


def _body(request: httpx.Request) -> dict:
    return json.loads(request.content)


def test_request_leads_applies_defaults(client, upstream):
    upstream.on(MAKE_HOST, lambda request: httpx.Response(200, text="Accepted"))

    resp = client.post("/api/webhook/make", json={})

    assert resp.status_code == 200
    assert resp.json() == {"message": "Request sent to Make", "data": "Accepted"}
    request = upstream.calls_to(MAKE_HOST)[0]
    assert request.url.path == "/request"
    assert _body(request) == {"business_type": "restaurant", "location": "New York, USA"}


def test_request_leads_without_body(client, upstream):
    upstream.on(MAKE_HOST, lambda request: httpx.Response(200, text="Accepted"))

    resp = client.post("/api/webhook/make")

    assert resp.status_code == 200
    assert _body(upstream.calls[0])["business_type"] == "restaurant"


def test_request_leads_forwards_fields(client, upstream):
    upstream.on(MAKE_HOST, lambda request: httpx.Response(200, json={"queued": 3}))

    resp = client.post("/api/webhook/make", json={"business_type": "dentist", "location": "Austin, TX"})

    assert resp.json()["data"] == {"queued": 3}
    assert _body(upstream.calls[0]) == {"business_type": "dentist", "location": "Austin, TX"}


def test_send_lead_posts_record_as_is(client, upstream):
    upstream.on(MAKE_HOST, lambda request: httpx.Response(200, json={"ok": True}))
    lead = {"id": "joes-pizza-ny", "name": "Joe's Pizza", "source": "Yelp"}

    resp = client.post("/api/leads/send", json=lead)

    assert resp.status_code == 200
    assert resp.json() == {"data": {"ok": True}}
    request = upstream.calls[0]
    assert request.url.path == "/lead"
    assert _body(request) == lead


def test_send_search_stamps_request_time(client, upstream):
    upstream.on(MAKE_HOST, lambda request: httpx.Response(200, text="Accepted"))

    resp = client.post(
        "/api/searches/send",
        json={"searchTerm": "florist", "source": "Yelp", "location": "Miami"},
    )

    assert resp.status_code == 200
    body = _body(upstream.calls[0])
    assert body["searchTerm"] == "florist"
    assert body["source"] == "Yelp"
    assert body["location"] == "Miami"
    assert datetime.fromisoformat(body["requestedAt"]).tzinfo is not None


def test_send_search_requires_term(client, upstream):
    resp = client.post("/api/searches/send", json={"source": "Yelp", "location": "Miami"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "searchTerm parameter is required"}
    assert upstream.calls == []


def test_webhook_failure_reports_make_as_source(client, upstream):
    upstream.on(MAKE_HOST, lambda request: httpx.Response(500, text="scenario error"))

    resp = client.post("/api/leads/send", json={"id": "1"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to send lead to Make", "source": "Make"}


def test_unconfigured_webhook(client, upstream, settings):
    settings.make_lead_webhook_url = None

    resp = client.post("/api/leads/send", json={"id": "1"})

    assert resp.status_code == 500
    assert "not configured" in resp.json()["error"]
    assert upstream.calls == []
