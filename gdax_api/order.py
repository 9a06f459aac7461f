"""Order resource: place, cancel and inspect orders.

Only request mechanics live here; no pricing or matching logic.
"""
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field

from .errors import ValidationError
from .params import ResourceParams, require, to_wire
from .request import Method, ResourceRequest, SendableRequest, dispatch


class OrderSide(str, Enum):
    BUY = "buy"
    SELL = "sell"


class TimeInForce(str, Enum):
    GTC = "GTC"  # good till cancelled
    GTT = "GTT"  # good till time
    IOC = "IOC"  # immediate or cancel
    FOK = "FOK"  # fill or kill


class LimitOrderParams(ResourceParams):
    side: Optional[OrderSide] = None
    product_id: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, gt=0)
    size: Optional[Decimal] = Field(default=None, gt=0)
    time_in_force: TimeInForce = TimeInForce.GTC
    post_only: Optional[bool] = None
    client_oid: Optional[str] = None
    stop: Optional[str] = None
    stop_price: Optional[Decimal] = Field(default=None, gt=0)


class MarketOrderParams(ResourceParams):
    side: Optional[OrderSide] = None
    product_id: Optional[str] = None
    size: Optional[Decimal] = Field(default=None, gt=0)
    funds: Optional[Decimal] = Field(default=None, gt=0)
    client_oid: Optional[str] = None


class Order:
    WIRE_FIELDS = {
        "side": "side",
        "product_id": "product_id",
        "price": "price",
        "size": "size",
        "funds": "funds",
        "time_in_force": "time_in_force",
        "post_only": "post_only",
        "client_oid": "client_oid",
        "stop": "stop",
        "stop_price": "stop_price",
    }

    def __init__(self, api: SendableRequest):
        self.api = api

    def place_limit(self, side, product_id, price, size, *, time_in_force=TimeInForce.GTC, post_only=None, client_oid=None, stop=None, stop_price=None, timeout=None):
        """Place a limit order (``POST orders`` with ``type=limit``).

        ``stop``/``stop_price`` turn it into a stop-limit order; both or
        neither must be given.
        """
        params = LimitOrderParams.build(
            side=side, product_id=product_id, price=price, size=size,
            time_in_force=time_in_force, post_only=post_only, client_oid=client_oid,
            stop=stop, stop_price=stop_price,
        )
        require(params, "side", "product_id", "price", "size")
        if (params.stop is None) != (params.stop_price is None):
            raise ValidationError("stop_price" if params.stop else "stop", "stop and stop_price go together")

        body = {"type": "limit"}
        body.update(to_wire(params, [f for f in self.WIRE_FIELDS if f in LimitOrderParams.model_fields], self.WIRE_FIELDS))
        return dispatch(self.api, ResourceRequest(Method.POST, "orders", body), timeout=timeout)

    def place_market(self, side, product_id, *, size=None, funds=None, client_oid=None, timeout=None):
        """Place a market order sized by ``size`` or by ``funds`` (exactly one)."""
        params = MarketOrderParams.build(side=side, product_id=product_id, size=size, funds=funds, client_oid=client_oid)
        require(params, "side", "product_id")
        if (params.size is None) == (params.funds is None):
            raise ValidationError("size", "exactly one of size or funds is required")

        body = {"type": "market"}
        body.update(to_wire(params, [f for f in self.WIRE_FIELDS if f in MarketOrderParams.model_fields], self.WIRE_FIELDS))
        return dispatch(self.api, ResourceRequest(Method.POST, "orders", body), timeout=timeout)

    def cancel(self, order_id: str, *, timeout: Optional[float] = None):
        if not order_id:
            raise ValidationError("order_id", "is required")
        return dispatch(self.api, ResourceRequest(Method.DELETE, f"orders/{order_id}"), timeout=timeout)

    def cancel_all(self, product_id: Optional[str] = None, *, timeout: Optional[float] = None):
        return dispatch(self.api, ResourceRequest(Method.DELETE, "orders", params={"product_id": product_id}), timeout=timeout)

    def list(self, status: Optional[str] = None, product_id: Optional[str] = None, *, timeout: Optional[float] = None):
        params = {"status": status, "product_id": product_id}
        return dispatch(self.api, ResourceRequest(Method.GET, "orders", params=params), timeout=timeout)

    def get(self, order_id: str, *, timeout: Optional[float] = None):
        if not order_id:
            raise ValidationError("order_id", "is required")
        return dispatch(self.api, ResourceRequest(Method.GET, f"orders/{order_id}"), timeout=timeout)
