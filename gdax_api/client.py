from typing import Optional, Union

from .account import Account
from .config import ClientConfig
from .deposit import Deposit
from .fill import Fill
from .order import Order
from .rate_limit_policy import RateLimitManager
from .report import Report
from .secrets import GDAXCredentials
from .transport import AsyncTransport, Transport
from .withdrawal import Withdrawal


class GDAXClient:
    """Entry point tying one transport to the resource operations.

    The client only hands its transport to each resource; every resource
    still talks to the transport through ``SendableRequest.send``.

    Example:
        >>> client = GDAXClient.from_config(ClientConfig(), load_credentials())
        >>> report = client.report(report_type="account", account_id="a1", ...)
        >>> report.create()
    """

    def __init__(self, transport: Union[Transport, AsyncTransport]):
        self.transport = transport

    @classmethod
    def from_config(cls, config: ClientConfig, credentials: GDAXCredentials, *, use_async: bool = False) -> "GDAXClient":
        rate_limiter: Optional[RateLimitManager] = None
        if config.rate_limit.enabled:
            rate_limiter = RateLimitManager.per_second(config.rate_limit.requests_per_second)
        transport_cls = AsyncTransport if use_async else Transport
        transport = transport_cls(
            credentials,
            base_url=config.exchange.effective_base_url,
            timeout=config.exchange.timeout,
            rate_limiter=rate_limiter,
            max_rate_limit_wait=config.rate_limit.max_wait_seconds,
        )
        return cls(transport)

    def report(self, **params) -> Report:
        return Report(self.transport, **params)

    def deposit(self, **params) -> Deposit:
        return Deposit(self.transport, **params)

    def withdrawal(self, **params) -> Withdrawal:
        return Withdrawal(self.transport, **params)

    def accounts(self) -> Account:
        return Account(self.transport)

    def orders(self) -> Order:
        return Order(self.transport)

    def fills(self) -> Fill:
        return Fill(self.transport)
