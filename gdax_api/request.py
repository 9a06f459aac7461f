"""
Resource request core.

A resource operation describes *what* to call as a ``ResourceRequest``
(method, relative path, JSON body, query params) and hands it to anything
implementing ``SendableRequest``. How the request is signed and transported
is the transport's business.

Examples:
    >>> req = ResourceRequest(Method.POST, "reports", {"type": "fills"})
    >>> req.request_path
    '/reports'
    >>> req.serialize_body()
    '{"type": "fills"}'
"""

import inspect
import json
from decimal import Decimal
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union
from urllib.parse import urlencode

from .errors import ValidationError


class Method(str, Enum):
    """HTTP methods accepted by the exchange."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


def _encode_json(value: Any) -> Any:
    # amounts, prices and sizes go out as JSON numbers
    if isinstance(value, Decimal):
        return float(value)
    return str(value)


# Methods that never carry a payload on the wire
_BODYLESS = (Method.GET, Method.DELETE)


def as_method(value: Union[Method, str]) -> Method:
    if isinstance(value, Method):
        return value
    return Method(value.upper())


@dataclass
class ResourceRequest:
    """One method/path/body triple, built fresh for a single ``send``.

    Attributes:
        method: HTTP method
        path: Path relative to the API root, e.g. ``"reports"``
        body: JSON body; empty means "no body"
        params: Query string parameters (GET listings)
    """

    method: Optional[Union[Method, str]] = None
    path: Optional[str] = None
    body: Dict[str, Any] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)

    def validate(self) -> None:
        if not self.method:
            raise ValidationError("method", "must be set before send")
        if not self.path:
            raise ValidationError("path", "must be set before send")
        try:
            self.method = as_method(self.method)
        except ValueError:
            raise ValidationError("method", f"unsupported HTTP method {self.method!r}")

    @property
    def request_path(self) -> str:
        """Absolute path plus query string, exactly as signed and requested."""
        path = "/" + self.path.lstrip("/")
        params = {k: v for k, v in self.params.items() if v is not None}
        if params:
            path = f"{path}?{urlencode(params)}"
        return path

    def serialize_body(self) -> str:
        """Serialize the body once; the result is both signed and transmitted."""
        if self.body:
            return json.dumps(self.body, default=_encode_json)
        if as_method(self.method) in _BODYLESS:
            return ""
        return "{}"


class SendableRequest(ABC):
    """Capability to execute a ``ResourceRequest`` and return the decoded JSON.

    Implementations may be blocking (returning the result) or asynchronous
    (returning an awaitable that resolves to the result).
    """

    @abstractmethod
    def send(self, request: ResourceRequest, *, timeout: Optional[float] = None) -> Any:
        """Sign and execute ``request``.

        Raises:
            ApiError: non-2xx response
            TransportError: network failure, timeout or cancellation
            InvalidCredentials: secret cannot be used for signing
        """
        pass


def dispatch(api: SendableRequest, request: ResourceRequest, on_result: Optional[Callable[[Any], Any]] = None, *, timeout: Optional[float] = None) -> Any:
    """Send ``request`` through ``api`` and apply ``on_result`` to the decoded result.

    Works for both transport flavours: if ``api.send`` returns an awaitable,
    an awaitable is returned and ``on_result`` runs once it resolves.
    ``timeout`` is the per-call deadline handed to the transport.
    """
    result = api.send(request, timeout=timeout)
    if inspect.isawaitable(result):
        return _finish(result, on_result)
    if on_result is not None:
        return on_result(result)
    return result


async def _finish(pending, on_result):
    result = await pending
    if on_result is not None:
        return on_result(result)
    return result
