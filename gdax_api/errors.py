"""Error taxonomy for the GDAX client.

Every failure carries structured detail so callers can act on it without
parsing message strings:

    ValidationError   caller-fixable input problem, raised before any I/O
    ApiError          the exchange rejected a well-formed request
    TransportError    network failure, timeout or cancellation
    InvalidCredentials  credentials unusable for signing
"""
import asyncio
from typing import Optional


class GDAXError(Exception):
    """Base class for all client errors."""
    pass


class ValidationError(GDAXError, ValueError):
    """Raised when a resource operation is missing or has an invalid field."""

    def __init__(self, field: str, reason: str):
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class ApiError(GDAXError):
    """Raised for any non-2xx response from the exchange."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class TransportError(GDAXError):
    """Raised when the HTTP round trip itself fails."""

    def __init__(self, cause: BaseException, message: Optional[str] = None):
        super().__init__(message or f"Request failed: {cause!r}")
        self.cause = cause

    @property
    def cancelled(self) -> bool:
        return isinstance(self.cause, asyncio.CancelledError)


class RateLimitError(TransportError):
    """Raised when the client-side rate limiter cannot admit a request in time."""
    pass


class InvalidCredentials(GDAXError):
    pass


class ReportTimeout(GDAXError):
    """Raised by the polling helpers when a report is still pending after the last attempt."""

    def __init__(self, report_id: str, attempts: int):
        super().__init__(f"Report {report_id} not ready after {attempts} attempts")
        self.report_id = report_id
        self.attempts = attempts


class ReportExpired(GDAXError):
    def __init__(self, report_id: str):
        super().__init__(f"Report {report_id} has expired")
        self.report_id = report_id
