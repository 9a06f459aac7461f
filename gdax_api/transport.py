import asyncio
import json
import time
from typing import Any, Optional

import aiohttp
import requests
from requests.adapters import HTTPAdapter

from .errors import ApiError, RateLimitError, TransportError
from .logging_setup import logger
from .rate_limit_policy import RateLimitManager, endpoint_key
from .request import ResourceRequest, SendableRequest
from .secrets import GDAXCredentials
from .signer import auth_headers

DEFAULT_BASE_URL = "https://api.gdax.com"
SANDBOX_BASE_URL = "https://api-public.sandbox.gdax.com"


def _error_message(text: str) -> str:
    """Pull the exchange's ``message`` (or ``error``) field out of an error body."""
    try:
        payload = json.loads(text)
    except ValueError:
        return text
    if isinstance(payload, dict):
        for key in ("message", "error"):
            if payload.get(key):
                return str(payload[key])
    return text


def decode_response(status: int, text: str) -> Any:
    """Turn a raw HTTP status/body pair into the decoded result or an ApiError."""
    if not (200 <= status < 300):
        raise ApiError(status, _error_message(text))
    if not text:
        return {}
    try:
        return json.loads(text)
    except ValueError:
        raise ApiError(status, f"Invalid JSON in response: {text[:200]}")


class Transport(SendableRequest):
    """Blocking transport: signs each request and executes it with requests.

    Features:
    - Request signing (CB-ACCESS-* headers) over the exact body bytes sent.
    - JSON decoding of 2xx responses, ApiError for everything else.
    - Optional client-side rate limiter consulted per endpoint.

    Notes:
    - No retries: the HTTP adapter is mounted with ``max_retries=0`` and
      429/5xx responses surface as ApiError for the caller to handle.
    - ``timeout`` passed to ``send`` overrides the default for that call.
    """

    def __init__(self, credentials: GDAXCredentials, *, base_url: str = DEFAULT_BASE_URL, timeout: float = 10, rate_limiter: Optional[RateLimitManager] = None, max_rate_limit_wait: float = 60.0, session: Optional[requests.Session] = None):
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.rate_limiter = rate_limiter
        self.max_rate_limit_wait = max_rate_limit_wait

        self.session = session or requests.Session()
        self.session.mount("https://", HTTPAdapter(max_retries=0))
        self.session.mount("http://", HTTPAdapter(max_retries=0))

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _throttle(self, request_path: str) -> None:
        if self.rate_limiter is None:
            return
        endpoint = endpoint_key(request_path)
        if not self.rate_limiter.wait_if_needed(endpoint, max_wait=self.max_rate_limit_wait):
            raise RateLimitError(TimeoutError(endpoint), f"Client rate limit for {endpoint} not lifted within {self.max_rate_limit_wait}s")

    def send(self, request: ResourceRequest, *, timeout: Optional[float] = None) -> Any:
        request.validate()
        method = request.method.value
        request_path = request.request_path
        self._throttle(request_path)

        body = request.serialize_body()
        timestamp = str(time.time())
        headers = auth_headers(self.credentials, timestamp, method, request_path, body)
        url = f"{self.base_url}{request_path}"

        logger.debug("{} {}", method, request_path)
        try:
            resp = self.session.request(method, url, headers=headers, data=body or None, timeout=timeout or self.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning("{} {} failed: {}", method, request_path, e)
            raise TransportError(e) from e

        logger.debug("{} {} -> {}", method, request_path, resp.status_code)
        try:
            return decode_response(resp.status_code, resp.text)
        except ApiError as e:
            logger.warning("{} {} rejected: {}", method, request_path, e)
            raise


class AsyncTransport(SendableRequest):
    """Async transport using aiohttp; ``send`` is a coroutine.

    Cancelling the awaiting task, or exceeding the per-call ``timeout``,
    raises TransportError and discards the request.

    Usage:
        async with AsyncTransport(credentials) as transport:
            report = Report(transport, report_type="fills", ...)
            await report.create()
    """

    def __init__(self, credentials: GDAXCredentials, *, base_url: str = DEFAULT_BASE_URL, timeout: float = 10, rate_limiter: Optional[RateLimitManager] = None, max_rate_limit_wait: float = 60.0, session: Optional[aiohttp.ClientSession] = None):
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.rate_limiter = rate_limiter
        self.max_rate_limit_wait = max_rate_limit_wait
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self):
        if self.session is None:
            self.session = aiohttp.ClientSession()
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        if self.session is not None and self._owns_session:
            await self.session.close()

    async def _throttle(self, request_path: str) -> None:
        if self.rate_limiter is None:
            return
        endpoint = endpoint_key(request_path)
        if not await self.rate_limiter.wait_if_needed_async(endpoint, max_wait=self.max_rate_limit_wait):
            raise RateLimitError(TimeoutError(endpoint), f"Client rate limit for {endpoint} not lifted within {self.max_rate_limit_wait}s")

    async def send(self, request: ResourceRequest, *, timeout: Optional[float] = None) -> Any:
        if self.session is None:
            raise TransportError(RuntimeError("no session"), "Session not initialized; use 'async with' context manager")

        request.validate()
        method = request.method.value
        request_path = request.request_path
        body = request.serialize_body()
        url = f"{self.base_url}{request_path}"

        try:
            await self._throttle(request_path)
            timestamp = str(time.time())
            headers = auth_headers(self.credentials, timestamp, method, request_path, body)
            logger.debug("{} {}", method, request_path)
            async with self.session.request(method, url, headers=headers, data=body or None, timeout=aiohttp.ClientTimeout(total=timeout or self.timeout)) as resp:
                status = resp.status
                text = await resp.text()
        except asyncio.CancelledError as e:
            logger.warning("{} {} cancelled", method, request_path)
            raise TransportError(e, "Request cancelled") from e
        except asyncio.TimeoutError as e:
            logger.warning("{} {} timed out", method, request_path)
            raise TransportError(e, f"Request timeout: {e}") from e
        except aiohttp.ClientError as e:
            logger.warning("{} {} failed: {}", method, request_path, e)
            raise TransportError(e) from e

        logger.debug("{} {} -> {}", method, request_path, status)
        try:
            return decode_response(status, text)
        except ApiError as e:
            logger.warning("{} {} rejected: {}", method, request_path, e)
            raise
