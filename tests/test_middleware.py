from fastapi.testclient import TestClient
from starlette.responses import PlainTextResponse

from studybuddy.config import Settings
from studybuddy.main import create_app
from studybuddy.middleware import RateLimitMiddleware


async def _ok_app(scope, receive, send):
    await PlainTextResponse("ok")(scope, receive, send)


def test_security_headers(client):
    resp = client.get("/health")
    assert resp.headers["x-content-type-options"] == "nosniff"
    assert resp.headers["x-frame-options"] == "SAMEORIGIN"


def test_cors_headers(client):
    resp = client.get("/health", headers={"Origin": "http://localhost:3000"})
    assert resp.headers["access-control-allow-origin"] == "*"


def test_inbound_rate_limit():
    limited = create_app(Settings(GEMINI_API_KEY="k", RATE_LIMIT_MAX=2, RATE_LIMIT_WINDOW_SECONDS=60))
    with TestClient(limited) as c:
        first = c.get("/health")
        assert first.status_code == 200
        assert first.headers["ratelimit-limit"] == "2"
        assert first.headers["ratelimit-remaining"] == "1"
        assert c.get("/health").status_code == 200

        resp = c.get("/health")
        assert resp.status_code == 429
        assert resp.json() == {"error": "Too many requests, please try again later."}
        assert resp.headers["ratelimit-remaining"] == "0"
        assert "retry-after" in resp.headers
        assert resp.headers["x-content-type-options"] == "nosniff"


def test_rate_limit_window_resets():
    now = [1000.0]
    c = TestClient(RateLimitMiddleware(_ok_app, max_requests=1, window_seconds=60, clock=lambda: now[0]))

    assert c.get("/").status_code == 200
    assert c.get("/").status_code == 429

    now[0] += 61
    assert c.get("/").status_code == 200


def test_rate_limit_disabled():
    c = TestClient(RateLimitMiddleware(_ok_app, max_requests=0, window_seconds=60))
    for _ in range(20):
        assert c.get("/").status_code == 200
