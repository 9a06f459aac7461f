import pytest

from gdax_api.errors import ReportExpired, ReportTimeout
from gdax_api.polling import async_wait_for_report, jittered_backoff, wait_for_report
from gdax_api.report import Report

from conftest import AsyncFakeTransport, FakeTransport


def test_jittered_backoff_increases_with_attempt():
    assert jittered_backoff(2, base=1.0, max_backoff=60.0) > jittered_backoff(0, base=1.0, max_backoff=60.0)


def test_jittered_backoff_respects_max():
    assert jittered_backoff(10, base=1.0, max_backoff=5.0) <= 5.0 * 1.25


def test_wait_returns_ready_result():
    api = FakeTransport({"status": "pending"}, {"status": "creating"}, {"status": "ready", "file_url": "https://x/y.pdf"})
    delays = []
    result = wait_for_report(Report(api), "abc123", interval=0.5, sleep=delays.append)

    assert result["file_url"] == "https://x/y.pdf"
    assert len(delays) == 2
    assert [r.path for r in api.requests] == ["reports/abc123"] * 3


def test_wait_gives_up_after_max_attempts():
    api = FakeTransport(*[{"status": "pending"}] * 3)
    delays = []
    with pytest.raises(ReportTimeout) as exc:
        wait_for_report(Report(api, report_id="abc123"), max_attempts=3, sleep=delays.append)
    assert exc.value.attempts == 3
    assert len(delays) == 2
    assert len(api.requests) == 3


def test_wait_raises_on_expired():
    api = FakeTransport({"status": "expired"})
    with pytest.raises(ReportExpired):
        wait_for_report(Report(api, report_id="old"), sleep=lambda _: None)


@pytest.mark.asyncio
async def test_async_wait_returns_ready_result():
    api = AsyncFakeTransport({"status": "pending"}, {"status": "ready", "file_url": "https://x/y.csv"})
    result = await async_wait_for_report(Report(api), "abc123", interval=0.001, max_interval=0.001)
    assert result["status"] == "ready"
    assert len(api.requests) == 2
