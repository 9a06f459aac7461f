import json
from decimal import Decimal

import pytest

from gdax_api.account import Account
from gdax_api.errors import ValidationError
from gdax_api.fill import Fill
from gdax_api.order import Order
from gdax_api.request import Method

from conftest import FakeTransport


def test_account_list_and_get():
    api = FakeTransport([{"id": "a1"}], {"id": "a1", "balance": "1.0"})
    accounts = Account(api)
    assert accounts.list() == [{"id": "a1"}]
    assert accounts.get("a1")["balance"] == "1.0"
    assert [r.request_path for r in api.requests] == ["/accounts", "/accounts/a1"]


def test_account_history_passes_pagination():
    api = FakeTransport([])
    Account(api).history("a1", limit=50)
    assert api.requests[0].request_path == "/accounts/a1/ledger?limit=50"


def test_account_holds_requires_id(fake_api):
    with pytest.raises(ValidationError) as exc:
        Account(fake_api).holds("")
    assert exc.value.field == "account_id"


def test_place_limit_order_body():
    api = FakeTransport({"id": "o1"})
    Order(api).place_limit("buy", "BTC-USD", Decimal("50000"), Decimal("0.1"))
    request = api.requests[0]
    assert request.method is Method.POST
    assert request.path == "orders"
    assert request.body == {
        "type": "limit",
        "side": "buy",
        "product_id": "BTC-USD",
        "price": Decimal("50000"),
        "size": Decimal("0.1"),
        "time_in_force": "GTC",
    }


def test_place_stop_limit_order_body():
    api = FakeTransport({"id": "o2"})
    Order(api).place_limit("sell", "BTC-USD", "49000", "0.1", stop="loss", stop_price="49500")
    body = api.requests[0].body
    assert body["stop"] == "loss"
    assert body["stop_price"] == Decimal("49500")
    assert json.loads(api.requests[0].serialize_body())["stop_price"] == 49500


def test_stop_requires_stop_price(fake_api):
    with pytest.raises(ValidationError) as exc:
        Order(fake_api).place_limit("sell", "BTC-USD", "49000", "0.1", stop="loss")
    assert exc.value.field == "stop_price"


def test_limit_order_rejects_bad_side(fake_api):
    with pytest.raises(ValidationError) as exc:
        Order(fake_api).place_limit("hold", "BTC-USD", "1", "1")
    assert exc.value.field == "side"


def test_limit_order_rejects_non_positive_price(fake_api):
    with pytest.raises(ValidationError) as exc:
        Order(fake_api).place_limit("buy", "BTC-USD", "0", "1")
    assert exc.value.field == "price"


def test_market_order_by_funds():
    api = FakeTransport({"id": "o3"})
    Order(api).place_market("buy", "BTC-USD", funds="100")
    assert api.requests[0].body == {"type": "market", "side": "buy", "product_id": "BTC-USD", "funds": Decimal("100")}


def test_market_order_needs_exactly_one_of_size_or_funds(fake_api):
    orders = Order(fake_api)
    with pytest.raises(ValidationError):
        orders.place_market("buy", "BTC-USD")
    with pytest.raises(ValidationError):
        orders.place_market("buy", "BTC-USD", size="1", funds="100")
    assert fake_api.requests == []


def test_cancel_and_get_order_paths():
    api = FakeTransport(["o1"], {"id": "o1"}, ["o1", "o2"])
    orders = Order(api)
    orders.cancel("o1")
    orders.get("o1")
    orders.cancel_all(product_id="BTC-USD")
    assert [(r.method, r.request_path) for r in api.requests] == [
        (Method.DELETE, "/orders/o1"),
        (Method.GET, "/orders/o1"),
        (Method.DELETE, "/orders?product_id=BTC-USD"),
    ]


def test_list_orders_filters():
    api = FakeTransport([])
    Order(api).list(status="open")
    assert api.requests[0].request_path == "/orders?status=open"


def test_fills_require_order_or_product(fake_api):
    with pytest.raises(ValidationError) as exc:
        Fill(fake_api).list()
    assert exc.value.field == "order_id"


def test_fills_by_product():
    api = FakeTransport([{"trade_id": 1}])
    assert Fill(api).list(product_id="BTC-USD") == [{"trade_id": 1}]
    assert api.requests[0].request_path == "/fills?product_id=BTC-USD"


def test_per_call_timeout_on_listings_and_cancel():
    api = FakeTransport([], [], {})
    Account(api).list(timeout=3)
    Fill(api).list(product_id="BTC-USD", timeout=4)
    Order(api).cancel("o1", timeout=1.5)
    assert api.timeouts == [3, 4, 1.5]
