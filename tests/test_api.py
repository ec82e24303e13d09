"""Tests for HTTP endpoints."""

import re
from datetime import datetime

import pytest
from fastapi.exceptions import RequestValidationError
from httpx import ASGITransport, AsyncClient

from config import Config
from web_app import create_app
from web_app.error_handlers import first_error_message
from conftest import BASE_URL

SUMMARY_KEYS = {"shortCode", "longUrl", "shortUrl", "createdAt", "clicks"}


@pytest.mark.asyncio
class TestShortenEndpoint:
    """Test POST /shorten."""

    async def test_shorten_url(self, client, sample_urls):
        response = await client.post("/shorten", json={"longUrl": sample_urls[0]})

        assert response.status_code == 201
        data = response.json()
        assert set(data) == SUMMARY_KEYS
        assert data["longUrl"] == sample_urls[0]
        assert data["shortUrl"] == f"{BASE_URL}/{data['shortCode']}"
        assert data["clicks"] == 0
        assert re.match(r"^[0-9a-z]{6}$", data["shortCode"])
        datetime.fromisoformat(data["createdAt"].replace("Z", "+00:00"))

    async def test_shorten_with_custom_alias(self, client, sample_urls):
        response = await client.post(
            "/shorten",
            json={"longUrl": sample_urls[0], "customAlias": "test123"},
        )

        assert response.status_code == 201
        assert response.json()["shortCode"] == "test123"

    async def test_shorten_null_alias_generates_code(self, client, sample_urls):
        response = await client.post(
            "/shorten",
            json={"longUrl": sample_urls[0], "customAlias": None},
        )

        assert response.status_code == 201
        assert len(response.json()["shortCode"]) == 6

    async def test_shorten_invalid_url(self, client, repository):
        response = await client.post("/shorten", json={"longUrl": "not-a-url"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Please provide a valid URL with http:// or https://"
        assert len(repository) == 0

    async def test_shorten_alias_too_short(self, client, repository):
        response = await client.post(
            "/shorten",
            json={"longUrl": "https://x.com", "customAlias": "ab"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Custom alias must be at least 3 characters long"
        assert repository.calls == []

    async def test_shorten_alias_bad_charset(self, client):
        response = await client.post(
            "/shorten",
            json={"longUrl": "https://x.com", "customAlias": "no spaces"},
        )

        assert response.status_code == 400
        assert "letters, numbers, hyphens, and underscores" in response.json()["detail"]

    async def test_shorten_alias_trailing_newline(self, client, repository):
        response = await client.post(
            "/shorten",
            json={"longUrl": "https://x.com", "customAlias": "abcd\n"},
        )

        assert response.status_code == 400
        assert "letters, numbers, hyphens, and underscores" in response.json()["detail"]
        assert repository.calls == []

    async def test_shorten_missing_url(self, client):
        response = await client.post("/shorten", json={"customAlias": "abc"})

        assert response.status_code == 400
        assert response.json()["detail"] == "longUrl: Field required"

    async def test_shorten_unknown_field(self, client):
        response = await client.post(
            "/shorten",
            json={"longUrl": "https://x.com", "clicks": 1000},
        )

        assert response.status_code == 400
        assert response.json()["detail"].startswith("clicks:")

    async def test_shorten_malformed_json(self, client):
        response = await client.post(
            "/shorten",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Request body is not valid JSON"

    async def test_shorten_duplicate_custom_alias(self, client, sample_urls):
        await client.post("/shorten", json={"longUrl": sample_urls[0], "customAlias": "dup123"})

        response = await client.post(
            "/shorten",
            json={"longUrl": sample_urls[1], "customAlias": "dup123"},
        )

        assert response.status_code == 409
        assert '"dup123"' in response.json()["detail"]

    async def test_shorten_records_creator_ip(self, client, repository, sample_urls):
        response = await client.post("/shorten", json={"longUrl": sample_urls[0]})

        data = response.json()
        assert "creatorIp" not in data
        stored = await repository.find_by_short_code(data["shortCode"])
        assert stored.creator_ip == "127.0.0.1"

    async def test_forwarded_for_ignored_by_default(self, client, repository, sample_urls):
        response = await client.post(
            "/shorten",
            json={"longUrl": sample_urls[0]},
            headers={"X-Forwarded-For": "203.0.113.7"},
        )

        stored = await repository.find_by_short_code(response.json()["shortCode"])
        assert stored.creator_ip == "127.0.0.1"

    async def test_forwarded_for_used_when_trusted(self, repository, service, logger, sample_urls):
        config = Config(store_backend="memory", base_url=BASE_URL, trust_proxy_headers=True)
        app = create_app(repository, service, config, logger=logger)

        async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as client:
            response = await client.post(
                "/shorten",
                json={"longUrl": sample_urls[0]},
                headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1"},
            )

        stored = await repository.find_by_short_code(response.json()["shortCode"])
        assert stored.creator_ip == "203.0.113.7"


@pytest.mark.asyncio
class TestRedirectEndpoint:
    """Test GET /{shortCode}."""

    async def test_redirect(self, client, sample_urls):
        create_response = await client.post("/shorten", json={"longUrl": sample_urls[1]})
        short_code = create_response.json()["shortCode"]

        response = await client.get(f"/{short_code}", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == sample_urls[1]

    async def test_redirect_not_found(self, client):
        response = await client.get("/nonexistent", follow_redirects=False)

        assert response.status_code == 404
        assert '"nonexistent"' in response.json()["detail"]

    async def test_redirect_invalid_code_format(self, client):
        response = await client.get("/ab", follow_redirects=False)

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid short code format"

    async def test_redirect_code_with_trailing_newline(self, client):
        await client.post("/shorten", json={"longUrl": "https://x.com", "customAlias": "abcd"})

        response = await client.get("/abcd%0A", follow_redirects=False)

        assert response.status_code == 400


@pytest.mark.asyncio
class TestDetailsEndpoint:
    """Test GET /api/links/{shortCode}."""

    async def test_get_link_details(self, client, service, sample_urls):
        create_response = await client.post("/shorten", json={"longUrl": sample_urls[0]})
        created = create_response.json()

        response = await client.get(f"/api/links/{created['shortCode']}")

        assert response.status_code == 200
        assert response.json() == created

    async def test_get_link_details_not_found(self, client):
        response = await client.get("/api/links/nonexistent")

        assert response.status_code == 404

    async def test_get_link_details_invalid_code(self, client):
        response = await client.get("/api/links/bad.code")

        assert response.status_code == 400


@pytest.mark.asyncio
class TestHealthEndpoint:
    """Test GET /api/health."""

    async def test_health_check(self, client):
        response = await client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "healthy"
        assert "timestamp" in data


@pytest.mark.asyncio
class TestCORS:
    """Test cross-origin access for the web client."""

    async def test_preflight_allows_any_origin_by_default(self, client):
        response = await client.options(
            "/shorten",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"


class TestValidationMessages:
    """Test how request validation failures are described."""

    def test_json_decode_error(self):
        exc = RequestValidationError(
            [{"type": "json_invalid", "loc": ("body", 1), "msg": "JSON decode error", "input": {}}]
        )

        assert first_error_message(exc) == "Request body is not valid JSON"

    def test_index_parts_dropped_from_field_name(self):
        exc = RequestValidationError(
            [{"type": "missing", "loc": ("body", 0, "longUrl"), "msg": "Field required", "input": {}}]
        )

        assert first_error_message(exc) == "longUrl: Field required"

    def test_validator_message_used_verbatim(self):
        exc = RequestValidationError(
            [{
                "type": "value_error",
                "loc": ("body", "customAlias"),
                "msg": "Value error, Custom alias must not exceed 50 characters",
                "input": "a" * 51,
                "ctx": {"error": ValueError("Custom alias must not exceed 50 characters")},
            }]
        )

        assert first_error_message(exc) == "Custom alias must not exceed 50 characters"
