"""
Report resource: server-side generation of fills and account statements.

Reports are produced asynchronously by the exchange. ``create`` submits the
job and captures the report id; ``get`` reads the current status and can be
called any number of times. Waiting is left to the caller (see
``gdax_api.polling``).

State Transitions:
    UNSUBMITTED → PENDING (pending / creating) → READY | EXPIRED

Examples:
    >>> report = Report(transport, report_type="fills", product_id="BTC-USD",
    ...                 start_date="2017-06-01T00:00:00.000Z",
    ...                 end_date="2017-06-15T00:00:00.000Z")
    >>> report.create()["id"]
    'abc123'
    >>> report.get()["status"]
    'ready'
"""

from enum import Enum, auto
from typing import Any, Dict, Optional

from .errors import ApiError, ValidationError
from .params import ResourceParams, require, to_wire
from .request import Method, ResourceRequest, SendableRequest, dispatch


class ReportType(str, Enum):
    FILLS = "fills"
    ACCOUNT = "account"


class ReportFormat(str, Enum):
    PDF = "pdf"
    CSV = "csv"


class ReportState(Enum):
    """Report lifecycle states."""

    UNSUBMITTED = auto()  # Not yet created
    PENDING = auto()  # Exchange reports pending or creating
    READY = auto()  # file_url available
    EXPIRED = auto()  # File no longer downloadable


def report_state(result: Optional[Dict[str, Any]]) -> ReportState:
    """Map a decoded report object to its lifecycle state."""
    if not isinstance(result, dict) or not result:
        return ReportState.UNSUBMITTED
    status = result.get("status")
    if status == "ready":
        return ReportState.READY
    if status == "expired":
        return ReportState.EXPIRED
    return ReportState.PENDING


class ReportParams(ResourceParams):
    report_type: Optional[ReportType] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    report_format: ReportFormat = ReportFormat.PDF
    product_id: Optional[str] = None
    account_id: Optional[str] = None
    email: Optional[str] = None


class Report:
    """Create and fetch exchange-generated reports.

    Attributes:
        params: Frozen ReportParams
        report_id: Exchange-assigned id, set by ``create`` or by the caller
        last_result: Most recent decoded report object
    """

    WIRE_FIELDS = {
        "report_type": "type",
        "start_date": "start_date",
        "end_date": "end_date",
        "report_format": "format",
        "product_id": "product_id",
        "account_id": "account_id",
        "email": "email",
    }

    # Extra field each report type cannot be created without
    TYPE_REQUIRES = {
        ReportType.FILLS: "product_id",
        ReportType.ACCOUNT: "account_id",
    }

    def __init__(self, api: SendableRequest, *, report_id: Optional[str] = None, **params):
        self.api = api
        self.params = ReportParams.build(**params)
        self.report_id = report_id
        self.last_result: Optional[Dict[str, Any]] = None

    @property
    def state(self) -> ReportState:
        if self.last_result is None and self.report_id:
            return ReportState.PENDING
        return report_state(self.last_result)

    @property
    def file_url(self) -> Optional[str]:
        if not self.last_result:
            return None
        return self.last_result.get("file_url") or None

    @staticmethod
    def _expect_object(result: Any) -> Dict[str, Any]:
        if not isinstance(result, dict):
            raise ApiError(200, f"Expected a report object, got {type(result).__name__}")
        return result

    def _capture_id(self, result: Any) -> Dict[str, Any]:
        result = self._expect_object(result)
        if result.get("id"):
            self.report_id = result["id"]
        self.last_result = result
        return result

    def _fetched(self, report_id: str, result: Any) -> Dict[str, Any]:
        result = self._expect_object(result)
        self.report_id = report_id
        self.last_result = result
        return result

    def create(self, *, timeout: Optional[float] = None):
        """Submit a report job via ``POST reports``.

        Returns:
            The decoded report object (or an awaitable of it with an async transport)

        Raises:
            ValidationError: a required field is unset
            ApiError: the exchange rejected the job or answered with a non-object
        """
        require(self.params, "report_type", "start_date", "end_date")
        require(self.params, self.TYPE_REQUIRES[self.params.report_type])

        body = to_wire(self.params, self.WIRE_FIELDS, self.WIRE_FIELDS)
        request = ResourceRequest(Method.POST, "reports", body)
        return dispatch(self.api, request, self._capture_id, timeout=timeout)

    def get(self, report_id: Optional[str] = None, *, timeout: Optional[float] = None):
        """Fetch report status via ``GET reports/{report_id}``. Never loops.

        The instance only adopts ``report_id`` once the exchange has answered;
        a failed read leaves ``report_id`` and ``last_result`` untouched.
        """
        report_id = report_id or self.report_id
        if not report_id:
            raise ValidationError("report_id", "is required")

        request = ResourceRequest(Method.GET, f"reports/{report_id}")
        return dispatch(self.api, request, lambda result: self._fetched(report_id, result), timeout=timeout)
