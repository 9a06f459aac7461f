"""Account resource: balances, ledger history and holds."""
from typing import Optional

from .errors import ValidationError
from .request import Method, ResourceRequest, SendableRequest, dispatch


class Account:
    """Read-only views of the trading accounts behind the API key.

    Listing calls accept the exchange's cursor pagination (``before``,
    ``after``, ``limit``); unset values are left out of the query string.
    """

    def __init__(self, api: SendableRequest):
        self.api = api

    @staticmethod
    def _account_path(account_id: Optional[str], suffix: str = "") -> str:
        if not account_id:
            raise ValidationError("account_id", "is required")
        return f"accounts/{account_id}{suffix}"

    def list(self, *, timeout: Optional[float] = None):
        return dispatch(self.api, ResourceRequest(Method.GET, "accounts"), timeout=timeout)

    def get(self, account_id: str, *, timeout: Optional[float] = None):
        return dispatch(self.api, ResourceRequest(Method.GET, self._account_path(account_id)), timeout=timeout)

    def history(self, account_id: str, *, before: Optional[str] = None, after: Optional[str] = None, limit: Optional[int] = None, timeout: Optional[float] = None):
        """Ledger entries for one account (``GET accounts/{id}/ledger``)."""
        path = self._account_path(account_id, "/ledger")
        params = {"before": before, "after": after, "limit": limit}
        return dispatch(self.api, ResourceRequest(Method.GET, path, params=params), timeout=timeout)

    def holds(self, account_id: str, *, before: Optional[str] = None, after: Optional[str] = None, limit: Optional[int] = None, timeout: Optional[float] = None):
        """Funds on hold for open orders and withdrawals (``GET accounts/{id}/holds``)."""
        path = self._account_path(account_id, "/holds")
        params = {"before": before, "after": after, "limit": limit}
        return dispatch(self.api, ResourceRequest(Method.GET, path, params=params), timeout=timeout)
