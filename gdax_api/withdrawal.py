"""Withdrawal resource: move funds out to a payment method, Coinbase wallet or crypto address."""
from decimal import Decimal
from typing import Optional

from pydantic import Field

from .params import ResourceParams, require, to_wire
from .request import Method, ResourceRequest, SendableRequest, dispatch


class WithdrawalParams(ResourceParams):
    amount: Optional[Decimal] = Field(default=None, gt=0)
    currency: Optional[str] = None
    payment_method_id: Optional[str] = None
    coinbase_account_id: Optional[str] = None
    crypto_address: Optional[str] = None
    destination_tag: Optional[str] = None


class Withdrawal:
    WIRE_FIELDS = {
        "amount": "amount",
        "currency": "currency",
        "payment_method_id": "payment_method_id",
        "coinbase_account_id": "coinbase_account_id",
        "crypto_address": "crypto_address",
        "destination_tag": "destination_tag",
    }

    def __init__(self, api: SendableRequest, **params):
        self.api = api
        self.params = WithdrawalParams.build(**params)

    def _post(self, path: str, required: tuple, optional: tuple = (), timeout: Optional[float] = None):
        require(self.params, "amount", "currency", *required)
        body = to_wire(self.params, ("amount", "currency") + required + optional, self.WIRE_FIELDS)
        return dispatch(self.api, ResourceRequest(Method.POST, path, body), timeout=timeout)

    def to_payment(self, *, timeout: Optional[float] = None):
        """``POST withdrawals/payment-method``"""
        return self._post("withdrawals/payment-method", ("payment_method_id",), timeout=timeout)

    def to_coinbase(self, *, timeout: Optional[float] = None):
        """``POST withdrawals/coinbase-account``"""
        return self._post("withdrawals/coinbase-account", ("coinbase_account_id",), timeout=timeout)

    def to_crypto(self, *, timeout: Optional[float] = None):
        """``POST withdrawals/crypto``; ``destination_tag`` is sent when set."""
        return self._post("withdrawals/crypto", ("crypto_address",), ("destination_tag",), timeout=timeout)
