# =============================================================================
# tests/test_cors.py - Origin Registry & CORS Gate Tests
# =============================================================================
# This module contains tests for:
# - OriginRegistry parsing and exact-match membership
# - evaluate_request decision table
# - OriginGateMiddleware behaviour through the full app
# =============================================================================

import pytest

from app.cors import (
    ORIGIN_NOT_ALLOWED,
    OriginRegistry,
    cors_headers,
    evaluate_request,
)
from tests.conftest import ALLOWED_ORIGIN, DISALLOWED_ORIGIN, SECOND_ALLOWED_ORIGIN

CORS_HEADER_NAMES = [
    "access-control-allow-origin",
    "access-control-allow-credentials",
    "access-control-allow-methods",
    "access-control-allow-headers",
]


# =============================================================================
# OriginRegistry Tests
# =============================================================================

class TestOriginRegistry:
    """Test allow-list parsing and membership."""

    def test_parses_trimmed_non_empty_entries(self):
        registry = OriginRegistry.from_string(" http://localhost:3000 , ,https://a.example,")
        assert registry.origins == ("http://localhost:3000", "https://a.example")

    def test_duplicates_are_kept(self):
        registry = OriginRegistry.from_string("https://a.example,https://a.example")
        assert registry.origins == ("https://a.example", "https://a.example")
        assert registry.is_allowed("https://a.example")

    @pytest.mark.parametrize("raw", [None, "", " , ,"])
    def test_empty_configuration(self, raw):
        registry = OriginRegistry.from_string(raw)
        assert registry.origins == ()
        assert registry.describe() == "(none)"

    def test_exact_match_only(self):
        registry = OriginRegistry.from_string("https://app.example.com")

        assert registry.is_allowed("https://app.example.com")
        assert not registry.is_allowed("https://APP.example.com")
        assert not registry.is_allowed("http://app.example.com")
        assert not registry.is_allowed("https://app.example.com:8443")
        assert not registry.is_allowed("https://evil.app.example.com")
        assert not registry.is_allowed("https://app.example.com/")

    def test_missing_origin_is_never_allowed(self):
        registry = OriginRegistry.from_string("https://app.example.com")
        assert not registry.is_allowed(None)
        assert not registry.is_allowed("")

    def test_registry_is_immutable(self):
        registry = OriginRegistry.from_string("https://app.example.com")
        with pytest.raises(AttributeError):
            registry.origins = ("https://evil.example",)


# =============================================================================
# Decision Table Tests
# =============================================================================

class TestEvaluateRequest:
    """Test the pure gate decision function."""

    @pytest.fixture
    def registry(self):
        return OriginRegistry.from_string(ALLOWED_ORIGIN)

    def test_preflight_without_origin(self, registry):
        decision = evaluate_request("OPTIONS", None, registry)
        assert decision.status_code == 204
        assert decision.headers == {}

    def test_preflight_without_origin_ignores_empty_registry(self):
        decision = evaluate_request("OPTIONS", None, OriginRegistry())
        assert decision.status_code == 204

    def test_preflight_allowed(self, registry):
        decision = evaluate_request("OPTIONS", ALLOWED_ORIGIN, registry)
        assert decision.status_code == 204
        assert decision.headers == cors_headers(ALLOWED_ORIGIN)

    def test_preflight_rejected(self, registry):
        decision = evaluate_request("OPTIONS", DISALLOWED_ORIGIN, registry)
        assert decision.status_code == 403
        assert decision.headers == {}
        assert decision.body is None

    def test_non_browser_passes_through(self, registry):
        decision = evaluate_request("GET", None, registry)
        assert not decision.is_terminal
        assert decision.headers == {}

    def test_empty_origin_counts_as_absent(self, registry):
        decision = evaluate_request("POST", "", registry)
        assert not decision.is_terminal
        assert decision.headers == {}

    @pytest.mark.parametrize("method", ["GET", "POST", "PUT", "PATCH", "DELETE"])
    def test_allowed_browser_request_continues(self, registry, method):
        decision = evaluate_request(method, ALLOWED_ORIGIN, registry)
        assert not decision.is_terminal
        assert decision.headers["Access-Control-Allow-Origin"] == ALLOWED_ORIGIN

    def test_disallowed_browser_request_rejected(self, registry):
        decision = evaluate_request("GET", DISALLOWED_ORIGIN, registry)
        assert decision.is_rejected
        assert decision.body == {"error": ORIGIN_NOT_ALLOWED}

    def test_method_is_case_insensitive(self, registry):
        assert evaluate_request("options", None, registry).status_code == 204

    def test_header_set(self):
        headers = cors_headers("https://a.example")
        assert headers == {
            "Access-Control-Allow-Origin": "https://a.example",
            "Vary": "Origin",
            "Access-Control-Allow-Credentials": "true",
            "Access-Control-Allow-Methods": "GET,POST,PUT,PATCH,DELETE,OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type, Authorization",
        }


# =============================================================================
# Middleware Tests
# =============================================================================

class TestOriginGateMiddleware:
    """Test the gate in front of real routes."""

    @pytest.fixture
    def hits(self, app):
        """Count how many requests reach the counting handler."""
        counter = {"count": 0}

        @app.api_route("/counted", methods=["GET", "POST", "DELETE"])
        async def counted():
            counter["count"] += 1
            return {"counted": True}

        return counter

    @pytest.mark.parametrize("origin", [ALLOWED_ORIGIN, SECOND_ALLOWED_ORIGIN])
    def test_allowed_origin_reaches_handler(self, client, hits, origin):
        response = client.get("/counted", headers={"Origin": origin})

        assert response.status_code == 200
        assert response.json() == {"counted": True}
        assert response.headers["access-control-allow-origin"] == origin
        assert response.headers["access-control-allow-credentials"] == "true"
        assert "Origin" in response.headers["vary"]
        assert hits["count"] == 1

    @pytest.mark.parametrize("method", ["GET", "POST", "DELETE"])
    def test_disallowed_origin_never_reaches_handler(self, client, hits, method):
        response = client.request(method, "/counted", headers={"Origin": DISALLOWED_ORIGIN})

        assert response.status_code == 403
        assert response.json() == {"error": "CORS: Origin not allowed"}
        assert "access-control-allow-origin" not in response.headers
        assert hits["count"] == 0

    def test_no_origin_reaches_handler_without_cors_headers(self, client, hits):
        response = client.get("/counted")

        assert response.status_code == 200
        assert hits["count"] == 1
        for name in CORS_HEADER_NAMES:
            assert name not in response.headers

    def test_preflight_without_origin(self, client, hits):
        response = client.options("/counted")

        assert response.status_code == 204
        assert hits["count"] == 0

    def test_preflight_allowed(self, client, hits):
        response = client.options(
            "/api/search",
            headers={"Origin": ALLOWED_ORIGIN, "Access-Control-Request-Method": "GET"},
        )

        assert response.status_code == 204
        assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
        assert response.headers["access-control-allow-methods"] == "GET,POST,PUT,PATCH,DELETE,OPTIONS"
        assert response.headers["access-control-allow-headers"] == "Content-Type, Authorization"
        assert response.headers["vary"] == "Origin"

    def test_preflight_rejected(self, client, hits):
        response = client.options("/counted", headers={"Origin": DISALLOWED_ORIGIN})

        assert response.status_code == 403
        assert response.content == b""
        for name in CORS_HEADER_NAMES:
            assert name not in response.headers
        assert hits["count"] == 0

    def test_preflight_for_unknown_path(self, client):
        response = client.options("/nope", headers={"Origin": ALLOWED_ORIGIN})
        assert response.status_code == 204

    def test_allowed_origin_on_unknown_path_gets_404_with_headers(self, client):
        response = client.get("/nope", headers={"Origin": ALLOWED_ORIGIN})

        assert response.status_code == 404
        assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN

    def test_rejection_carries_request_context_headers(self, client):
        response = client.get("/health", headers={"Origin": DISALLOWED_ORIGIN})

        assert response.status_code == 403
        assert response.headers["x-request-id"]
        assert response.headers["x-content-type-options"] == "nosniff"

    def test_unhandled_error_keeps_cors_headers(self, app, client):
        @app.get("/explode")
        async def explode():
            raise RuntimeError("boom")

        response = client.get("/explode", headers={"Origin": ALLOWED_ORIGIN})

        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"
        assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
        assert response.headers["access-control-allow-credentials"] == "true"
        assert "Origin" in response.headers["vary"]
        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["referrer-policy"] == "no-referrer"
        assert response.json()["request_id"] == response.headers["x-request-id"]
