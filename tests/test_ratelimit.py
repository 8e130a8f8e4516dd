import pytest
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.responses import PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from eventtracker.ratelimit import RateLimiter, RateLimitMiddleware


def test_burst_then_reject():
    limiter = RateLimiter(per_second=2, burst_size=5)
    results = [limiter.check("a", now=0.0) for _ in range(5)]
    assert results == [0.0] * 5
    wait = limiter.check("a", now=0.0)
    assert 0 < wait <= limiter.per_second


def test_keys_are_independent():
    limiter = RateLimiter(per_second=2, burst_size=1)
    assert limiter.check("a", now=0.0) == 0.0
    assert limiter.check("a", now=0.0) > 0
    assert limiter.check("b", now=0.0) == 0.0


def test_quota_replenishes_after_interval():
    limiter = RateLimiter(per_second=2, burst_size=5)
    for _ in range(5):
        limiter.check("a", now=0.0)
    assert limiter.check("a", now=1.0) > 0
    assert limiter.check("a", now=2.0) == 0.0
    assert limiter.check("a", now=2.0) > 0


def test_rejected_request_does_not_consume_quota():
    limiter = RateLimiter(per_second=1, burst_size=1)
    assert limiter.check("a", now=0.0) == 0.0
    for _ in range(3):
        assert limiter.check("a", now=0.5) > 0
    assert limiter.check("a", now=1.0) == 0.0


def test_retain_recent_drops_replenished_keys():
    limiter = RateLimiter(per_second=2, burst_size=5)
    limiter.check("old", now=0.0)
    limiter.check("new", now=100.0)
    assert len(limiter) == 2
    limiter.retain_recent(now=50.0)
    assert len(limiter) == 1
    limiter.retain_recent(now=1000.0)
    assert len(limiter) == 0


@pytest.mark.parametrize("per_second, burst_size", [(0, 5), (2, 0), (-1, 1)])
def test_invalid_configuration(per_second, burst_size):
    with pytest.raises(ValueError):
        RateLimiter(per_second, burst_size)


async def _hello(request):
    return PlainTextResponse("hello")


def test_middleware_limits_requests():
    limiter = RateLimiter(per_second=60, burst_size=2)
    app = Starlette(
        routes=[Route("/", _hello)],
        middleware=[Middleware(RateLimitMiddleware, limiter=limiter)],
    )
    client = TestClient(app)
    statuses = [client.get("/").status_code for _ in range(3)]
    assert statuses == [200, 200, 429]
    rejected = client.get("/")
    assert rejected.status_code == 429
    assert rejected.headers["retry-after"] == rejected.headers["x-ratelimit-after"]
    assert rejected.text.startswith("Too Many Requests! Wait for ")


@pytest.mark.asyncio
async def test_middleware_without_client_address():
    called = []

    async def inner(scope, receive, send):
        called.append(scope)

    async def receive():
        return {"type": "http.request", "body": b"", "more_body": False}

    messages = []

    async def send(message):
        messages.append(message)

    limiter = RateLimiter(per_second=2, burst_size=5)
    middleware = RateLimitMiddleware(inner, limiter)
    scope = {"type": "http", "method": "GET", "path": "/", "headers": [], "client": None}
    await middleware(scope, receive, send)
    assert called == []
    assert messages[0]["status"] == 500
    assert messages[1]["body"] == b"Couldn't find the IP"
    assert len(limiter) == 0


@pytest.mark.asyncio
async def test_middleware_passes_other_scopes():
    called = []

    async def inner(scope, receive, send):
        called.append(scope["type"])

    limiter = RateLimiter(per_second=2, burst_size=1)
    middleware = RateLimitMiddleware(inner, limiter)
    for _ in range(3):
        await middleware({"type": "lifespan"}, None, None)
    assert called == ["lifespan"] * 3
    assert len(limiter) == 0
    assert limiter.check("a", now=0.0) == 0.0