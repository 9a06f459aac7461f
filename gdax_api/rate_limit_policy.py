"""Client-side rate-limit hook: request quotas per endpoint with a sliding window.

Transports consult a ``RateLimitManager`` (when one is configured) before
each call. Endpoints are keyed by the first path segment, e.g. ``/reports``.
"""
import asyncio
import time
from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class RateLimitQuota:
    """Per-endpoint rate-limit quota."""
    requests_per_window: int  # max requests allowed in the window
    window_seconds: float     # time window in seconds


@dataclass
class RateLimitState:
    """Track request history for a single endpoint."""
    quota: RateLimitQuota
    request_times: list = field(default_factory=list)

    def is_allowed(self) -> bool:
        """Check if a new request is allowed under the quota."""
        cutoff = time.time() - self.quota.window_seconds
        self.request_times = [t for t in self.request_times if t > cutoff]
        return len(self.request_times) < self.quota.requests_per_window

    def record_request(self) -> None:
        self.request_times.append(time.time())

    def time_until_allowed(self) -> float:
        """Return seconds until next request is allowed. 0 if allowed now."""
        if self.is_allowed():
            return 0.0
        oldest = min(self.request_times)
        return max(0.0, oldest + self.quota.window_seconds - time.time())


def endpoint_key(request_path: str) -> str:
    """Map ``/reports/abc?x=1`` to its quota key ``/reports``."""
    head = request_path.split("?", 1)[0].strip("/").split("/", 1)[0]
    return f"/{head}"


class RateLimitManager:
    """Enforce rate-limit quotas per endpoint."""

    # GDAX private endpoints: 5 requests/second per key
    DEFAULT_QUOTAS = {
        "/orders": RateLimitQuota(requests_per_window=5, window_seconds=1),
        "/reports": RateLimitQuota(requests_per_window=5, window_seconds=1),
        "default": RateLimitQuota(requests_per_window=5, window_seconds=1),
    }

    def __init__(self, quotas: Optional[Dict[str, RateLimitQuota]] = None):
        self.quotas = quotas or self.DEFAULT_QUOTAS.copy()
        self.states: Dict[str, RateLimitState] = {}

    @classmethod
    def per_second(cls, requests_per_second: int) -> "RateLimitManager":
        """Single shared quota for every endpoint."""
        return cls(quotas={"default": RateLimitQuota(requests_per_window=requests_per_second, window_seconds=1)})

    def _get_state(self, endpoint: str) -> RateLimitState:
        if endpoint not in self.states:
            quota = self.quotas.get(endpoint, self.quotas.get("default"))
            self.states[endpoint] = RateLimitState(quota=quota)
        return self.states[endpoint]

    def is_allowed(self, endpoint: str) -> bool:
        return self._get_state(endpoint).is_allowed()

    def record_request(self, endpoint: str) -> None:
        self._get_state(endpoint).record_request()

    def time_until_allowed(self, endpoint: str) -> float:
        return self._get_state(endpoint).time_until_allowed()

    def wait_if_needed(self, endpoint: str, max_wait: float = 60.0) -> bool:
        """Block until a request is allowed; return False if max_wait would be exceeded.

        A successful wait records the request against the quota.
        """
        start = time.time()
        while not self.is_allowed(endpoint):
            wait_time = self.time_until_allowed(endpoint)
            elapsed = time.time() - start
            if elapsed + wait_time > max_wait:
                return False
            time.sleep(wait_time)

        self.record_request(endpoint)
        return True

    async def wait_if_needed_async(self, endpoint: str, max_wait: float = 60.0) -> bool:
        """Non-blocking variant of ``wait_if_needed`` for the async transport."""
        start = time.time()
        while not self.is_allowed(endpoint):
            wait_time = self.time_until_allowed(endpoint)
            elapsed = time.time() - start
            if elapsed + wait_time > max_wait:
                return False
            await asyncio.sleep(wait_time)

        self.record_request(endpoint)
        return True
