"""
GDAX authenticated REST API client.

A small request core that every resource composes against:
- Resource operations validate their fields and describe a request (method, path, body)
- Requests are signed with CB-ACCESS-* headers over the exact body sent
- Blocking (requests) and async (aiohttp) transports
- Structured errors: ValidationError, ApiError, TransportError, InvalidCredentials
- Caller-driven polling for asynchronously generated reports
- Structured logging via loguru
- Configuration-driven (YAML)

Core Modules:
    request: ResourceRequest and the SendableRequest capability
    signer: Request signing
    transport: Transport and AsyncTransport
    errors: Error taxonomy
    report, deposit, withdrawal, account, order, fill: Resource operations
    polling: Report wait helpers
    config: Configuration loading
    secrets: Credential management

Example:
    >>> from gdax_api.secrets import load_credentials
    >>> from gdax_api.transport import Transport
    >>> from gdax_api.report import Report
    >>>
    >>> transport = Transport(load_credentials())
    >>> report = Report(transport, report_type="fills", product_id="BTC-USD",
    ...                 start_date="2017-06-01T00:00:00.000Z",
    ...                 end_date="2017-06-15T00:00:00.000Z")
    >>> report.create()
"""

__version__ = "0.1.0"
__all__ = [
    "request",
    "signer",
    "transport",
    "errors",
    "params",
    "report",
    "deposit",
    "withdrawal",
    "account",
    "order",
    "fill",
    "polling",
    "client",
    "config",
    "secrets",
    "rate_limit_policy",
]
