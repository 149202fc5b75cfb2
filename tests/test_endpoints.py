"""
HTTP tests for the URL shortener API.
"""

import pytest
from fastapi.testclient import TestClient

from shortener.core.rate_limit import RATE_LIMIT_MESSAGE
from shortener.core.setting import RateLimitSettings, Settings
from shortener.main import create_app

from tests.conftest import BASE_URL


def shorten(client: TestClient, url: str, short_code: str = None):
    body = {"url": url}
    if short_code is not None:
        body["shortCode"] = short_code
    return client.post("/api/shorten", json=body)


def assert_error(resp, status_code: int):
    assert resp.status_code == status_code
    assert resp.headers.get("content-type", "").startswith("application/json")
    message = resp.json()["error"]
    assert isinstance(message, str)
    assert message.strip() != ""


class TestShorten:
    """POST /api/shorten"""

    def test_create_returns_201_with_camel_case_body(self, client):
        resp = shorten(client, "https://example.com")

        assert resp.status_code == 201
        body = resp.json()
        assert set(body) == {"shortUrl", "shortCode", "originalUrl", "createdAt"}
        assert body["originalUrl"] == "https://example.com"
        assert len(body["shortCode"]) == 6
        assert body["shortUrl"] == BASE_URL + body["shortCode"]
        assert body["createdAt"].startswith("2024-01-01T12:00:00")

    def test_create_with_custom_code(self, client):
        resp = shorten(client, "https://example.com", "mycode")

        assert resp.status_code == 201
        assert resp.json()["shortCode"] == "mycode"
        assert resp.json()["shortUrl"] == "http://localhost:8080/mycode"

    def test_same_url_twice_returns_same_code(self, client):
        first = shorten(client, "https://example.com")
        second = shorten(client, "https://example.com")

        assert first.status_code == second.status_code == 201
        assert first.json()["shortCode"] == second.json()["shortCode"]
        assert len(client.get("/api/urls").json()) == 1

    def test_registered_url_with_new_custom_code_returns_existing(self, client):
        first = shorten(client, "https://example.com")
        second = shorten(client, "https://example.com", "other")

        assert second.status_code == 201
        assert second.json()["shortCode"] == first.json()["shortCode"]

    def test_custom_code_collision(self, client):
        assert shorten(client, "https://a", "abc").status_code == 201

        resp = shorten(client, "https://b", "abc")

        assert_error(resp, 400)
        assert resp.json()["error"] == "Short code already in use"

    @pytest.mark.parametrize("url", ["example.com", "ftp://example.com", "   ", ""])
    def test_invalid_url(self, client, url):
        assert_error(shorten(client, url), 400)

    def test_invalid_custom_code(self, client):
        assert_error(shorten(client, "https://example.com", "not valid!"), 400)

    def test_invalid_custom_code_for_registered_url_returns_existing(self, client):
        first = shorten(client, "https://example.com")

        second = shorten(client, "https://example.com", "my.code")

        assert second.status_code == 201
        assert second.json()["shortCode"] == first.json()["shortCode"]
        assert_error(shorten(client, "https://other.example", "my.code"), 400)

    @pytest.mark.parametrize("code", ["health", "docs", "redoc"])
    def test_reserved_custom_code_is_rejected(self, client, code):
        resp = shorten(client, "https://example.com", code)

        assert_error(resp, 400)
        assert resp.json()["error"] == "Short code already in use"
        assert client.get("/api/urls").json() == []
        assert client.get("/health").json() == {"status": "healthy"}

    def test_oversized_url(self, client):
        url = "https://example.com/" + "a" * 2029
        assert len(url) == 2049

        assert_error(shorten(client, url), 413)
        assert client.get("/api/urls").json() == []

    def test_missing_url_field(self, client):
        assert_error(client.post("/api/shorten", json={}), 400)

    def test_wrong_type(self, client):
        assert_error(client.post("/api/shorten", json={"url": 123}), 400)

    def test_malformed_json(self, client):
        resp = client.post(
            "/api/shorten",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert_error(resp, 400)


class TestRedirect:
    """GET /{shortCode}"""

    def test_create_then_redirect(self, client):
        code = shorten(client, "https://example.com").json()["shortCode"]

        resp = client.get(f"/{code}", follow_redirects=False)

        assert resp.status_code == 301
        assert resp.headers["location"] == "https://example.com"
        assert resp.content == b""

    def test_unknown_code(self, client):
        resp = client.get("/nope", follow_redirects=False)

        assert_error(resp, 404)
        assert resp.json()["error"] == "Short code not found"

    def test_expired_code(self, client, clock):
        code = shorten(client, "https://example.com").json()["shortCode"]
        clock.advance(hours=24, seconds=1)

        resp = client.get(f"/{code}", follow_redirects=False)

        assert_error(resp, 404)
        assert resp.json()["error"] == "This short URL has expired"


class TestStats:
    """GET /api/stats/{shortCode} and GET /api/urls"""

    def test_stats_counts_redirects(self, client):
        code = shorten(client, "https://e.com").json()["shortCode"]
        for _ in range(5):
            assert client.get(f"/{code}", follow_redirects=False).status_code == 301

        resp = client.get(f"/api/stats/{code}")

        assert resp.status_code == 200
        body = resp.json()
        assert set(body) == {"shortCode", "originalUrl", "createdAt", "visitCount", "expiryTime"}
        assert body["shortCode"] == code
        assert body["originalUrl"] == "https://e.com"
        assert body["visitCount"] == 5
        assert body["expiryTime"].startswith("2024-01-02T12:00:00")

    def test_stats_unknown_code(self, client):
        assert_error(client.get("/api/stats/missing"), 404)

    def test_stats_expired_code(self, client, clock):
        code = shorten(client, "https://example.com").json()["shortCode"]
        clock.advance(hours=24, seconds=1)

        assert_error(client.get(f"/api/stats/{code}"), 404)

    def test_list_all_includes_expired(self, client, clock):
        shorten(client, "https://example1.com")
        shorten(client, "https://example2.com")
        clock.advance(days=3)

        resp = client.get("/api/urls")

        assert resp.status_code == 200
        assert sorted(item["originalUrl"] for item in resp.json()) == [
            "https://example1.com",
            "https://example2.com",
        ]
        assert all(item["visitCount"] == 0 for item in resp.json())

    def test_list_all_empty(self, client):
        resp = client.get("/api/urls")

        assert resp.status_code == 200
        assert resp.json() == []


class TestRateLimit:
    """Global request ceiling applied to every route."""

    def test_101st_request_is_rejected(self, client):
        for i in range(100):
            assert shorten(client, f"https://example.com/{i}").status_code == 201

        resp = client.get("/api/urls")

        assert resp.status_code == 429
        assert resp.text == RATE_LIMIT_MESSAGE
        assert resp.headers["retry-after"] == "61"

    def test_rejected_request_does_not_reach_registry(self, client, app):
        for _ in range(100):
            client.get("/health")

        assert shorten(client, "https://example.com").status_code == 429
        assert len(app.state.registry) == 0

    def test_requests_allowed_again_after_window_slides(self, client, clock):
        code = shorten(client, "https://example.com").json()["shortCode"]
        for _ in range(99):
            client.get("/health")
        assert client.get(f"/{code}", follow_redirects=False).status_code == 429

        clock.advance(milliseconds=60_001)

        assert client.get(f"/{code}", follow_redirects=False).status_code == 301
        assert shorten(client, "https://other.example").status_code == 201
        assert client.get(f"/api/stats/{code}").json()["visitCount"] == 1

    def test_limit_comes_from_settings(self, clock):
        settings = Settings(rate_limit=RateLimitSettings(max_requests=2, window_millis=1000))
        client = TestClient(create_app(settings=settings, clock=clock))

        assert client.get("/health").status_code == 200
        assert client.get("/health").status_code == 200
        assert client.get("/health").status_code == 429

        clock.advance(milliseconds=1001)
        assert client.get("/health").status_code == 200


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}


def test_base_url_from_settings(clock):
    settings = Settings(BASE_URL="https://sho.rt/")
    client = TestClient(create_app(settings=settings, clock=clock))

    body = shorten(client, "https://example.com", "abc").json()

    assert body["shortUrl"] == "https://sho.rt/abc"
