import pytest

from gdax_api.request import SendableRequest
from gdax_api.secrets import GDAXCredentials

SECRET = "dGVzdF9zZWNyZXQ="  # base64("test_secret")


class FakeTransport(SendableRequest):
    """Records each request and replies with canned decoded results.

    A queued exception instance is raised instead of returned.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []
        self.timeouts = []

    def send(self, request, *, timeout=None):
        request.validate()
        self.requests.append(request)
        self.timeouts.append(timeout)
        response = self.responses.pop(0) if self.responses else {}
        if isinstance(response, BaseException):
            raise response
        return response


class AsyncFakeTransport(FakeTransport):
    async def send(self, request, *, timeout=None):
        return FakeTransport.send(self, request, timeout=timeout)


@pytest.fixture
def credentials():
    return GDAXCredentials(api_key="key", api_secret=SECRET, passphrase="pass")


@pytest.fixture
def fake_api():
    return FakeTransport()
