import base64
import hashlib
import hmac

import pytest

from gdax_api.errors import InvalidCredentials
from gdax_api.secrets import GDAXCredentials
from gdax_api.signer import auth_headers, decode_secret, sign

SECRET = "dGVzdF9zZWNyZXQ="
BODY = '{"type": "fills", "start_date": "2017-06-01T00:00:00.000Z"}'


def test_sign_matches_hmac_sha256_over_prehash():
    expected = base64.b64encode(
        hmac.new(b"test_secret", ("1500000000.5POST/reports" + BODY).encode(), hashlib.sha256).digest()
    ).decode()
    assert sign(SECRET, "1500000000.5", "POST", "/reports", BODY) == expected


def test_sign_is_deterministic():
    first = sign(SECRET, 1500000000, "POST", "reports", BODY)
    second = sign(SECRET, 1500000000, "POST", "reports", BODY)
    assert first == second


@pytest.mark.parametrize("changed", [
    (SECRET, 1500000001, "POST", "reports", BODY),
    (SECRET, 1500000000, "POST", "reports/abc", BODY),
    (SECRET, 1500000000, "POST", "reports", BODY.replace("fills", "account")),
])
def test_sign_changes_with_any_single_input(changed):
    base = sign(SECRET, 1500000000, "POST", "reports", BODY)
    assert sign(*changed) != base


def test_method_is_uppercased():
    assert sign(SECRET, 1, "get", "/accounts") == sign(SECRET, 1, "GET", "/accounts")


def test_raw_bytes_secret_used_as_key():
    assert sign(b"test_secret", 1, "GET", "/accounts") == sign(SECRET, 1, "GET", "/accounts")


def test_undecodable_secret_raises_invalid_credentials():
    with pytest.raises(InvalidCredentials):
        sign("not base64!!", 1, "GET", "/accounts")


def test_empty_secret_raises_invalid_credentials():
    with pytest.raises(InvalidCredentials):
        decode_secret("")


def test_auth_headers_carry_all_fields():
    creds = GDAXCredentials(api_key="k", api_secret=SECRET, passphrase="p")
    headers = auth_headers(creds, "123.4", "GET", "/reports/abc")
    assert headers["CB-ACCESS-KEY"] == "k"
    assert headers["CB-ACCESS-PASSPHRASE"] == "p"
    assert headers["CB-ACCESS-TIMESTAMP"] == "123.4"
    assert headers["CB-ACCESS-SIGN"] == sign(SECRET, "123.4", "GET", "/reports/abc", "")
    assert headers["Content-Type"] == "application/json"
