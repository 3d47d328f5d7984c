from app.core import redis_client
from app.core.rate_limit import RateLimiter


def test_root(client):
    assert client.get("/").json()["message"] == "GreenThumb Journal API"


def test_rate_limiter_per_minute_window():
    limiter = RateLimiter(requests_per_minute=2, requests_per_hour=100)

    assert limiter.check("10.0.0.1", now=1000.0) == (True, 0)
    assert limiter.check("10.0.0.1", now=1001.0) == (True, 0)
    allowed, retry_after = limiter.check("10.0.0.1", now=1002.0)
    assert not allowed
    assert retry_after == 58
    # Other clients are unaffected
    assert limiter.check("10.0.0.2", now=1002.0)[0]
    # Window slides
    assert limiter.check("10.0.0.1", now=1061.0)[0]


def test_rate_limiter_per_hour_window():
    limiter = RateLimiter(requests_per_minute=100, requests_per_hour=3)
    for i in range(3):
        assert limiter.check("c", now=100.0 * i)[0]

    assert not limiter.check("c", now=400.0)[0]
    assert limiter.check("c", now=3601.0)[0]


def test_health_reports_cache_error_without_failing(client, monkeypatch):
    def misconfigured():
        raise ValueError("Redis URL must specify one of the following schemes")

    monkeypatch.setattr(redis_client, "get_redis", misconfigured)

    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"]["connected"] is True
    assert data["cache"]["status"] == "error"
    assert data["cache"]["connected"] is False
