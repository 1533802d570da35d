"""
SnippetBoard Backend — HTTP Endpoint Tests
============================================

What:  End-to-end tests of the HTML pages, the JSON API and health.
How:   HTTPX AsyncClient over ASGITransport against an app built from
       `test_settings` (authors "0" christian scott and "7" ada, no seed).

What we test:
    ✅ Form post → 303 → feed shows the snippet (escaped)
    ✅ Author pages and the unknown-author 404 page
    ✅ JSON feed, post, authors, unknown-author 404 body
    ✅ Full bounded store → 503, posting throttle → 429 (JSON and HTML)
    ✅ Unexpected errors → 500 carrying the request id
    ✅ Startup seed snippet, health payload, X-Request-ID echo
"""

from unittest.mock import MagicMock

import pytest
from httpx import AsyncClient, ASGITransport

from snippetboard.config import Settings
from snippetboard.main import create_app


def client_for(settings: Settings, clock) -> AsyncClient:
    app = create_app(settings, clock=clock)
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


class TestPages:
    """HTML pages."""

    @pytest.mark.asyncio
    async def test_empty_feed_page(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert 'name="snippet"' in response.text
        assert "No snippets yet." in response.text

    @pytest.mark.asyncio
    async def test_form_post_redirects_to_feed(self, test_client):
        response = await test_client.post("/", data={"snippet": "wrote some tests"})

        assert response.status_code == 303
        assert response.headers["location"] == "/"

        feed = await test_client.get("/")
        assert "wrote some tests" in feed.text
        assert "Someone New" in feed.text
        assert 'href="/authors/1"' in feed.text

    @pytest.mark.asyncio
    async def test_form_post_as_registered_author(self, test_client):
        await test_client.post("/", data={"snippet": "from ada", "author_id": "7"})

        feed = await test_client.get("/")
        assert 'href="/authors/7">ada</a>' in feed.text

    @pytest.mark.asyncio
    async def test_body_is_escaped(self, test_client):
        await test_client.post("/", data={"snippet": "<script>alert(1)</script>"})

        feed = await test_client.get("/")
        assert "<script>alert(1)</script>" not in feed.text
        assert "&lt;script&gt;" in feed.text

    @pytest.mark.asyncio
    async def test_author_page(self, test_client):
        await test_client.post("/", data={"snippet": "christian's", "author_id": "0"})
        await test_client.post("/", data={"snippet": "ada's", "author_id": "7"})

        response = await test_client.get("/authors/7")

        assert response.status_code == 200
        assert "ada&#39;s" in response.text
        assert "christian&#39;s" not in response.text
        assert 'name="snippet"' not in response.text

    @pytest.mark.asyncio
    async def test_unknown_author_page(self, test_client):
        response = await test_client.get("/authors/nonexistent", headers={"Accept": "text/html"})

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("text/html")
        assert "nonexistent" in response.text

        # the process keeps serving
        assert (await test_client.get("/")).status_code == 200

    @pytest.mark.asyncio
    async def test_unknown_author_without_html_accept(self, test_client):
        response = await test_client.get("/authors/nonexistent")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_form_post_throttled_page(self, test_settings, clock):
        settings = test_settings.model_copy(update={"post_rate_limit_requests": 1})
        browser = {"Accept": "text/html,application/xhtml+xml"}
        async with client_for(settings, clock) as client:
            assert (await client.post("/", data={"snippet": "one"}, headers=browser)).status_code == 303

            throttled = await client.post("/", data={"snippet": "two"}, headers=browser)

        assert throttled.status_code == 429
        assert throttled.headers["content-type"].startswith("text/html")
        assert int(throttled.headers["Retry-After"]) > 0
        assert "Too many snippets" in throttled.text
        assert throttled.headers["X-Request-ID"] in throttled.text


class TestSnippetApi:
    """JSON API."""

    @pytest.mark.asyncio
    async def test_post_and_list(self, test_client, clock):
        created = await test_client.post("/api/snippets", json={"body": "first", "author_id": "0"})
        clock.advance(minutes=3)
        await test_client.post("/api/snippets", json={"body": "second"})

        assert created.status_code == 201
        assert created.json()["author"] == {"id": "0", "name": "christian scott", "uri": "/authors/0"}

        response = await test_client.get("/api/snippets")
        data = response.json()

        assert response.status_code == 200
        assert response.headers["X-Total-Count"] == "2"
        assert data["count"] == 2
        assert [s["body"] for s in data["snippets"]] == ["second", "first"]
        assert data["snippets"][1]["posted_at"] == "3 minutes ago"
        assert data["snippets"][1]["author_uri"] == "/authors/0"

    @pytest.mark.asyncio
    async def test_author_feed(self, test_client):
        for body, author_id in [("s1", "0"), ("s2", "7"), ("s3", "0")]:
            await test_client.post("/api/snippets", json={"body": body, "author_id": author_id})

        response = await test_client.get("/api/authors/0/snippets")
        data = response.json()

        assert response.status_code == 200
        assert data["author"]["name"] == "christian scott"
        assert [s["body"] for s in data["snippets"]] == ["s3", "s1"]

    @pytest.mark.asyncio
    async def test_unknown_author_feed(self, test_client):
        response = await test_client.get("/api/authors/nonexistent/snippets")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_list_authors(self, test_client):
        response = await test_client.get("/api/authors")

        assert response.status_code == 200
        assert [a["id"] for a in response.json()] == ["0", "7"]

    @pytest.mark.asyncio
    async def test_body_required(self, test_client):
        response = await test_client.post("/api/snippets", json={"author_id": "0"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_full_store(self, test_settings, clock):
        settings = test_settings.model_copy(update={"max_snippets": 1})
        async with client_for(settings, clock) as client:
            assert (await client.post("/api/snippets", json={"body": "one"})).status_code == 201

            refused = await client.post("/api/snippets", json={"body": "two"})
            assert refused.status_code == 503
            assert refused.json()["error"] == "store_unavailable"

            feed = (await client.get("/api/snippets")).json()
            assert [s["body"] for s in feed["snippets"]] == ["one"]

            health = (await client.get("/health")).json()
            assert health["status"] == "degraded"

    @pytest.mark.asyncio
    async def test_posting_throttle(self, test_settings, clock):
        settings = test_settings.model_copy(update={"post_rate_limit_requests": 2})
        async with client_for(settings, clock) as client:
            for i in range(2):
                assert (await client.post("/api/snippets", json={"body": str(i)})).status_code == 201

            throttled = await client.post("/api/snippets", json={"body": "too many"})
            assert throttled.status_code == 429
            assert int(throttled.headers["Retry-After"]) > 0
            assert throttled.json()["error"] == "rate_limit_exceeded"
            assert throttled.json()["details"] == {"retry_after": int(throttled.headers["Retry-After"])}
            assert throttled.json()["request_id"] == throttled.headers["X-Request-ID"]

            # reads are not throttled
            assert (await client.get("/api/snippets")).json()["count"] == 2


class TestAppWiring:
    """Startup seeding, health and middleware."""

    @pytest.mark.asyncio
    async def test_seed_snippet(self, test_settings, clock):
        settings = test_settings.model_copy(update={"seed_snippet_body": "I worked on this snippets tool"})
        async with client_for(settings, clock) as client:
            feed = (await client.get("/api/snippets")).json()

        assert feed["count"] == 1
        assert feed["snippets"][0]["author_name"] == "christian scott"

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        await test_client.post("/api/snippets", json={"body": "x"})

        response = await test_client.get("/health")
        data = response.json()

        assert response.status_code == 200
        assert data["status"] == "healthy"
        assert data["authors"] == 2
        assert data["snippets"] == 1
        assert data["capacity"] is None

    @pytest.mark.asyncio
    async def test_health_reports_capacity(self, test_settings, clock):
        settings = test_settings.model_copy(update={"max_snippets": 5})
        async with client_for(settings, clock) as client:
            data = (await client.get("/health")).json()

        assert data["capacity"] == 5
        assert data["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_unexpected_error_carries_request_id(self, test_settings, clock):
        app = create_app(test_settings, clock=clock)
        app.state.feed_service.feed = MagicMock(side_effect=RuntimeError("boom"))

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/api/snippets", headers={"X-Request-ID": "abc123"})
            # the process keeps serving
            authors = await client.get("/api/authors")

        assert response.status_code == 500
        assert response.headers["X-Request-ID"] == "abc123"
        assert response.json() == {
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again later.",
            "request_id": "abc123",
        }
        assert "boom" not in response.text
        assert authors.status_code == 200

    @pytest.mark.asyncio
    async def test_unexpected_error_page(self, test_settings, clock):
        app = create_app(test_settings, clock=clock)
        app.state.feed_service.feed = MagicMock(side_effect=RuntimeError("boom"))

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/", headers={"Accept": "text/html"})

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("text/html")
        assert response.headers["X-Request-ID"] in response.text
        assert "boom" not in response.text

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/api/snippets", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/")
        assert len(response.headers["X-Request-ID"]) == 8
