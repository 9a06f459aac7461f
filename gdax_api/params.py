"""Immutable resource parameters and their wire serialization.

Each resource keeps its fields in a frozen pydantic model so successive
operations on the same instance cannot leak request state into each other.
``WIRE_FIELDS`` tables map the Python attribute names onto the exchange's
JSON keys.
"""
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Type, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

P = TypeVar("P", bound="ResourceParams")


class ResourceParams(BaseModel):
    """Base for per-resource parameter models."""

    model_config = ConfigDict(frozen=True, extra="forbid", use_enum_values=False)

    @classmethod
    def build(cls: Type[P], **values: Any) -> P:
        """Construct the model, translating pydantic errors into ValidationError."""
        try:
            return cls(**values)
        except PydanticValidationError as e:
            raise as_validation_error(e) from e


def as_validation_error(error: PydanticValidationError) -> ValidationError:
    first = error.errors()[0]
    loc = first.get("loc") or ("?",)
    return ValidationError(str(loc[0]), first.get("msg", "invalid value"))


def require(params: BaseModel, *fields: str) -> None:
    """Fail fast on the first unset field, naming it."""
    for name in fields:
        value = getattr(params, name)
        if value is None or value == "":
            raise ValidationError(name, "is required")


def wire_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


def to_wire(params: Any, fields: Iterable[str], wire_names: Mapping[str, str]) -> Dict[str, Any]:
    """Build a request body from ``fields`` of ``params``; unset fields are omitted.

    ``params`` may be a model or a plain mapping.
    """
    body = {}
    for name in fields:
        value = params.get(name) if isinstance(params, Mapping) else getattr(params, name)
        if value is None:
            continue
        body[wire_names[name]] = wire_value(value)
    return body
