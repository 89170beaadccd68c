import types
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from functools import lru_cache
from typing import Annotated, Any, Protocol, TypeVar, Union, get_args, get_origin
from pydantic import BaseModel, TypeAdapter, ValidationError

from rest_client.core.exceptions import DeserializationError
from rest_client.request_execution.models import RestResponse


T = TypeVar("T")

WILDCARD = "*"

_SEQUENCE_ORIGINS = (list, tuple, set, frozenset, Sequence)
_MAPPING_ORIGINS = (dict, Mapping)
_UNION_ORIGINS = (Union, types.UnionType)


class Deserializer(Protocol):
    """
    Structural interface for a response content handler. Hints that used to be
    mutable handler fields are passed on every call so a single handler
    instance can serve concurrent executions.
    """

    def deserialize(
        self,
        response: RestResponse,
        response_type: Any,
        *,
        root_element: str | None = None,
        date_format: str | None = None,
        namespace: str | None = None,
    ) -> Any: ...


def response_text(response: RestResponse) -> str:
    if response.content is not None:
        return response.content
    if response.raw_bytes is not None:
        return response.raw_bytes.decode(response.content_encoding or "utf-8", errors="replace")
    return ""


def _strptime(value: str, date_format: str, target: Any) -> Any:
    try:
        parsed = datetime.strptime(value, date_format)
    except ValueError:
        return value
    return parsed if target is datetime else parsed.date()


def parse_dates(payload: Any, date_format: str, target: Any = Any) -> Any:
    """
    Apply `date_format` to the string values that `target` declares as
    datetime or date. Untyped values (Any, bare dict or list) declare
    nothing, so every matching string leaf under them is converted.
    """
    if payload is None:
        return payload

    if target is Any or target is None or target is dict or target is list:
        if isinstance(payload, dict):
            return {k: parse_dates(v, date_format) for k, v in payload.items()}
        if isinstance(payload, list):
            return [parse_dates(v, date_format) for v in payload]
        if isinstance(payload, str):
            return _strptime(payload, date_format, datetime)
        return payload

    if target is datetime or target is date:
        if isinstance(payload, str):
            return _strptime(payload, date_format, target)
        return payload

    origin = get_origin(target)
    args = get_args(target)

    if origin is Annotated:
        return parse_dates(payload, date_format, args[0])

    if origin in _UNION_ORIGINS:
        for arg in args:
            if arg is type(None):
                continue
            converted = parse_dates(payload, date_format, arg)
            if converted is not payload:
                return converted
        return payload

    if origin in _SEQUENCE_ORIGINS and isinstance(payload, list):
        if origin is tuple and args and args[-1] is not Ellipsis:
            return [
                parse_dates(v, date_format, args[i]) if i < len(args) else v
                for i, v in enumerate(payload)
            ]
        item = args[0] if args else Any
        return [parse_dates(v, date_format, item) for v in payload]

    if origin in _MAPPING_ORIGINS and isinstance(payload, dict):
        value_type = args[1] if len(args) == 2 else Any
        return {k: parse_dates(v, date_format, value_type) for k, v in payload.items()}

    if isinstance(target, type) and issubclass(target, BaseModel) and isinstance(payload, dict):
        converted = dict(payload)
        for name, field in target.model_fields.items():
            key = field.alias or name
            if key in converted:
                converted[key] = parse_dates(converted[key], date_format, field.annotation)
        return converted

    return payload


@lru_cache(maxsize=256)
def _adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


def materialize(payload: Any, response_type: Any) -> Any:
    """Validate a decoded payload into `response_type` using pydantic."""
    if response_type is None or response_type is Any:
        return payload

    try:
        return _adapter(response_type).validate_python(payload)
    except ValidationError as e:
        name = getattr(response_type, "__name__", str(response_type))
        raise DeserializationError(f"Unable to materialize {name}: {e}") from e
