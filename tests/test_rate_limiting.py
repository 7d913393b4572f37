import pytest

from authvault.shared.middleware.rate_limiting_middleware import AsyncRateLimiter, async_rate_limiter


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.mark.asyncio
async def test_fixed_window_allows_limit_then_blocks():
    clock = FakeClock()
    limiter = AsyncRateLimiter(max_requests=3, window_seconds=60, clock=clock)

    results = [await limiter.hit("10.0.0.1") for _ in range(4)]

    assert [allowed for allowed, _, _ in results] == [True, True, True, False]
    assert [remaining for _, remaining, _ in results] == [2, 1, 0, 0]
    assert results[-1][2] == 60


@pytest.mark.asyncio
async def test_window_resets_after_expiry():
    clock = FakeClock()
    limiter = AsyncRateLimiter(max_requests=1, window_seconds=60, clock=clock)

    assert (await limiter.hit("10.0.0.1"))[0] is True
    assert (await limiter.hit("10.0.0.1"))[0] is False

    clock.now += 60
    assert (await limiter.hit("10.0.0.1"))[0] is True


@pytest.mark.asyncio
async def test_ips_are_counted_separately():
    limiter = AsyncRateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())

    assert (await limiter.hit("10.0.0.1"))[0] is True
    assert (await limiter.hit("10.0.0.2"))[0] is True


@pytest.mark.asyncio
async def test_sweep_drops_only_expired_windows():
    clock = FakeClock()
    limiter = AsyncRateLimiter(max_requests=5, window_seconds=60, clock=clock)
    await limiter.hit("old")
    clock.now += 30
    await limiter.hit("recent")
    clock.now += 31

    removed = await limiter.sweep()

    assert removed == 1
    assert set(limiter.windows) == {"recent"}


@pytest.mark.asyncio
async def test_middleware_sets_headers_and_returns_429(client):
    original_limit = async_rate_limiter.max_requests
    async_rate_limiter.max_requests = 2
    try:
        first = await client.post("/oauth/token", json={})
        second = await client.post("/oauth/token", json={})
        third = await client.post("/oauth/token", json={})
    finally:
        async_rate_limiter.max_requests = original_limit

    assert first.headers["X-RateLimit-Limit"] == "2"
    assert first.headers["X-RateLimit-Remaining"] == "1"
    assert second.headers["X-RateLimit-Remaining"] == "0"
    assert third.status_code == 429
    assert third.json()["code"] == "RATE_LIMIT_EXCEEDED"
    assert int(third.headers["Retry-After"]) > 0


@pytest.mark.asyncio
async def test_health_is_not_rate_limited(client):
    original_limit = async_rate_limiter.max_requests
    async_rate_limiter.max_requests = 1
    try:
        responses = [await client.get("/health") for _ in range(3)]
    finally:
        async_rate_limiter.max_requests = original_limit

    assert all(response.status_code == 200 for response in responses)
    assert "X-RateLimit-Limit" not in responses[0].headers
