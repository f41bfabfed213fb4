"""Tests for response headers, error envelopes, rate limiting and health checks."""

from __future__ import annotations

from unittest.mock import MagicMock

from akwaaba_shared.config import settings

from akwaaba_api.middleware.rate_limit import RateBucket, RateLimitMiddleware


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_ready(client):
    assert client.get("/ready").json() == {"status": "ready"}


def test_security_headers(client):
    response = client.get("/api/properties")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
    assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
    assert "frame-ancestors 'self'" in response.headers["Content-Security-Policy"]


def test_request_id_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_request_id_generated(client):
    assert len(client.get("/health").headers["X-Request-ID"]) == 32


def test_unknown_route_envelope(client):
    response = client.get("/api/nope")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_validation_envelope(client):
    response = client.get("/api/properties?bedrooms=many")
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    assert body["details"][0]["loc"] == ["query", "bedrooms"]


def test_rate_limit_headers(client):
    response = client.get("/api/properties")
    assert response.headers["X-RateLimit-Limit"] == str(settings.rate_limit_requests)
    assert response.headers["X-RateLimit-Remaining"] == str(settings.rate_limit_requests - 1)


def test_auth_endpoints_rate_limited(client):
    body = {"email": "a@example.com", "password": ""}
    for _ in range(settings.auth_rate_limit_requests):
        assert client.post("/api/auth/login", json=body).status_code == 400

    response = client.post("/api/auth/login", json=body)
    assert response.status_code == 429
    assert response.json()["error"] == "Too many requests"
    assert int(response.headers["Retry-After"]) > 0
    assert response.headers["X-RateLimit-Remaining"] == "0"


def test_auth_limit_keyed_by_forwarded_ip(client):
    body = {"email": "a@example.com", "password": ""}
    for _ in range(settings.auth_rate_limit_requests):
        client.post("/api/auth/login", json=body, headers={"X-Forwarded-For": "10.1.1.1"})

    other = client.post("/api/auth/login", json=body, headers={"X-Forwarded-For": "10.2.2.2"})
    assert other.status_code == 400


def test_auth_limit_ignores_user_agent(client):
    body = {"email": "a@example.com", "password": ""}
    for n in range(settings.auth_rate_limit_requests):
        client.post("/api/auth/login", json=body, headers={"User-Agent": f"client/{n}"})

    response = client.post("/api/auth/login", json=body, headers={"User-Agent": "fresh/1.0"})
    assert response.status_code == 429


def test_closed_windows_are_pruned():
    limiter = RateLimitMiddleware(MagicMock())
    limiter._buckets = {
        "ip:10.0.0.1": RateBucket(window=60, window_start=0.0, count=3),
        "auth:10.0.0.2": RateBucket(window=900, window_start=0.0, count=5),
    }
    limiter._prune(now=120.0)
    assert list(limiter._buckets) == ["auth:10.0.0.2"]


def test_health_not_rate_limited(client):
    for _ in range(3):
        response = client.get("/health")
    assert "X-RateLimit-Limit" not in response.headers
