"""Caller-side helpers for waiting on report generation.

Nothing in the core loops: ``Report.get`` performs exactly one read. These
helpers are a convenience for callers who want the usual
"poll with backoff until ready" pattern.
"""
import asyncio
import random
import time
from typing import Any, Callable, Dict, Optional

from .errors import ReportExpired, ReportTimeout
from .logging_setup import logger
from .report import Report, ReportState, report_state


def jittered_backoff(attempt: int, base: float = 1.0, max_backoff: float = 60.0) -> float:
    """Compute jittered exponential backoff.

    Returns delay in seconds.
    """
    # exponential: base * 2^attempt, capped
    delay = min(base * (2 ** attempt), max_backoff)
    # ±25% jitter so concurrent pollers spread out
    jitter = delay * 0.25 * (2 * random.random() - 1)
    return max(0, delay + jitter)


def _check(report: Report, result: Dict[str, Any]) -> bool:
    state = report_state(result)
    if state is ReportState.EXPIRED:
        raise ReportExpired(report.report_id)
    return state is ReportState.READY


def wait_for_report(
    report: Report,
    report_id: Optional[str] = None,
    *,
    interval: float = 1.0,
    max_interval: float = 30.0,
    max_attempts: int = 60,
    sleep: Callable[[float], None] = time.sleep,
) -> Dict[str, Any]:
    """Poll ``report.get`` until the report is ready.

    Args:
        report: Report bound to a blocking transport
        report_id: Report to poll; defaults to ``report.report_id``
        interval: Initial delay between reads in seconds
        max_interval: Upper bound for the backoff delay
        max_attempts: Number of reads before giving up
        sleep: Sleep function (injectable for tests)

    Returns:
        The decoded report object with ``status == "ready"``

    Raises:
        ReportTimeout: still pending after ``max_attempts`` reads
        ReportExpired: the exchange reports the file as expired
    """
    for attempt in range(max_attempts):
        result = report.get(report_id)
        if _check(report, result):
            return result
        if attempt + 1 < max_attempts:
            delay = jittered_backoff(attempt, base=interval, max_backoff=max_interval)
            logger.debug("Report {} is {}; next check in {:.2f}s", report.report_id, result.get("status"), delay)
            sleep(delay)
    raise ReportTimeout(report.report_id, max_attempts)


async def async_wait_for_report(
    report: Report,
    report_id: Optional[str] = None,
    *,
    interval: float = 1.0,
    max_interval: float = 30.0,
    max_attempts: int = 60,
) -> Dict[str, Any]:
    """Async variant of ``wait_for_report`` for a Report bound to an AsyncTransport."""
    for attempt in range(max_attempts):
        result = await report.get(report_id)
        if _check(report, result):
            return result
        if attempt + 1 < max_attempts:
            delay = jittered_backoff(attempt, base=interval, max_backoff=max_interval)
            logger.debug("Report {} is {}; next check in {:.2f}s", report.report_id, result.get("status"), delay)
            await asyncio.sleep(delay)
    raise ReportTimeout(report.report_id, max_attempts)
