from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.utils.rate_limit import RATE_LIMIT_MESSAGE, RateLimitMiddleware


def make_client(max_requests: int) -> TestClient:
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, window_ms=60_000, max_requests=max_requests)

    @app.get("/api/ping")
    def ping():
        return {"success": True}

    @app.get("/")
    def root():
        return {"success": True}

    return TestClient(app)


def test_requests_over_the_limit_get_429():
    client = make_client(max_requests=2)

    assert client.get("/api/ping").status_code == 200
    second = client.get("/api/ping")
    assert second.status_code == 200
    assert second.headers["RateLimit-Remaining"] == "0"

    blocked = client.get("/api/ping")
    assert blocked.status_code == 429
    assert blocked.json() == {"success": False, "message": RATE_LIMIT_MESSAGE}


def test_paths_outside_api_are_not_counted():
    client = make_client(max_requests=1)

    for _ in range(3):
        assert client.get("/").status_code == 200
    assert client.get("/api/ping").status_code == 200


def test_window_resets():
    middleware = RateLimitMiddleware(FastAPI(), window_ms=1000, max_requests=1)

    assert middleware.hit("10.0.0.1", now=100.0) == 1
    assert middleware.hit("10.0.0.1", now=100.5) == 2
    assert middleware.hit("10.0.0.1", now=101.0) == 1
    assert middleware.hit("10.0.0.2", now=101.0) == 1


def test_expired_windows_are_dropped():
    middleware = RateLimitMiddleware(FastAPI(), window_ms=1000, max_requests=1)

    for index in range(10_000):
        middleware.hit(f"10.0.{index // 256}.{index % 256}", now=float(index))

    assert len(middleware.windows) == 1


def test_live_windows_survive_a_sweep():
    middleware = RateLimitMiddleware(FastAPI(), window_ms=1000, max_requests=1)

    middleware.hit("10.0.0.1", now=100.0)
    middleware.hit("10.0.0.2", now=100.6)
    middleware.hit("10.0.0.3", now=101.2)

    assert set(middleware.windows) == {"10.0.0.2", "10.0.0.3"}
    assert middleware.hit("10.0.0.2", now=101.3) == 2
