"""Fill resource: executed trades for an order or product."""
from typing import Optional

from .errors import ValidationError
from .request import Method, ResourceRequest, SendableRequest, dispatch


class Fill:
    def __init__(self, api: SendableRequest):
        self.api = api

    def list(self, order_id: Optional[str] = None, product_id: Optional[str] = None, *, before: Optional[str] = None, after: Optional[str] = None, limit: Optional[int] = None, timeout: Optional[float] = None):
        """``GET fills`` filtered by order and/or product; one of them is required."""
        if not order_id and not product_id:
            raise ValidationError("order_id", "order_id or product_id is required")
        params = {
            "order_id": order_id,
            "product_id": product_id,
            "before": before,
            "after": after,
            "limit": limit,
        }
        return dispatch(self.api, ResourceRequest(Method.GET, "fills", params=params), timeout=timeout)
