import asyncio
import time

import pytest

from gdax_api.rate_limit_policy import RateLimitManager, RateLimitQuota, RateLimitState, endpoint_key


def test_rate_limit_quota_allow_within_limit():
    state = RateLimitState(quota=RateLimitQuota(requests_per_window=3, window_seconds=1))

    for _ in range(3):
        assert state.is_allowed()
        state.record_request()
    assert not state.is_allowed()


def test_rate_limit_quota_window_reset():
    state = RateLimitState(quota=RateLimitQuota(requests_per_window=2, window_seconds=0.1))

    state.record_request()
    state.record_request()
    assert not state.is_allowed()

    time.sleep(0.15)
    assert state.is_allowed()


def test_endpoint_key():
    assert endpoint_key("/reports/abc123") == "/reports"
    assert endpoint_key("/fills?product_id=BTC-USD") == "/fills"
    assert endpoint_key("/orders") == "/orders"


def test_rate_limit_manager_per_endpoint():
    manager = RateLimitManager()

    for _ in range(5):
        assert manager.is_allowed("/reports")
        manager.record_request("/reports")
    assert not manager.is_allowed("/reports")

    # separate state per endpoint
    assert manager.is_allowed("/accounts")


def test_per_second_applies_one_quota():
    manager = RateLimitManager.per_second(1)
    manager.record_request("/orders")
    assert not manager.is_allowed("/orders")
    assert manager.is_allowed("/fills")


def test_time_until_allowed():
    state = RateLimitState(quota=RateLimitQuota(requests_per_window=1, window_seconds=0.2))
    state.record_request()
    assert 0 < state.time_until_allowed() <= 0.2


def test_wait_if_needed_waits_and_allows():
    manager = RateLimitManager(quotas={"default": RateLimitQuota(requests_per_window=1, window_seconds=0.1)})
    manager.record_request("/test")

    start = time.time()
    assert manager.wait_if_needed("/test", max_wait=0.5)
    assert time.time() - start >= 0.09


def test_wait_if_needed_timeout():
    manager = RateLimitManager(quotas={"default": RateLimitQuota(requests_per_window=1, window_seconds=1.0)})
    manager.record_request("/test")

    start = time.time()
    assert not manager.wait_if_needed("/test", max_wait=0.05)
    assert time.time() - start < 0.2


@pytest.mark.asyncio
async def test_wait_if_needed_async():
    manager = RateLimitManager(quotas={"default": RateLimitQuota(requests_per_window=1, window_seconds=0.1)})
    manager.record_request("/test")
    assert await manager.wait_if_needed_async("/test", max_wait=0.5)
    assert not await manager.wait_if_needed_async("/test", max_wait=0.01)
