"""Deposit resource: fund an exchange account from a payment method or a Coinbase wallet."""
from decimal import Decimal
from typing import Optional

from pydantic import Field

from .params import ResourceParams, require, to_wire
from .request import Method, ResourceRequest, SendableRequest, dispatch


class DepositParams(ResourceParams):
    amount: Optional[Decimal] = Field(default=None, gt=0)
    currency: Optional[str] = None
    payment_method_id: Optional[str] = None
    coinbase_account_id: Optional[str] = None


class Deposit:
    """Deposit funds into the exchange.

    ``from_payment`` and ``from_coinbase`` validate independently: each needs
    amount, currency and its own source id, nothing else.
    """

    WIRE_FIELDS = {
        "amount": "amount",
        "currency": "currency",
        "payment_method_id": "payment_method_id",
        "coinbase_account_id": "coinbase_account_id",
    }

    def __init__(self, api: SendableRequest, **params):
        self.api = api
        self.params = DepositParams.build(**params)

    def _post(self, path: str, source_field: str, timeout: Optional[float]):
        fields = ("amount", "currency", source_field)
        require(self.params, *fields)
        body = to_wire(self.params, fields, self.WIRE_FIELDS)
        return dispatch(self.api, ResourceRequest(Method.POST, path, body), timeout=timeout)

    def from_payment(self, *, timeout: Optional[float] = None):
        """Deposit from a linked payment method (``POST deposits/payment-method``)."""
        return self._post("deposits/payment-method", "payment_method_id", timeout)

    def from_coinbase(self, *, timeout: Optional[float] = None):
        """Deposit from a Coinbase wallet (``POST deposits/coinbase-account``)."""
        return self._post("deposits/coinbase-account", "coinbase_account_id", timeout)
