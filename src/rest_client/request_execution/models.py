from __future__ import annotations
import json
from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Generic, TypeVar
from typing_extensions import Self


T = TypeVar("T")


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    MERGE = "MERGE"


class ParameterType(str, Enum):
    GET_OR_POST = "get_or_post"
    QUERY_STRING = "query_string"
    URL_SEGMENT = "url_segment"
    HTTP_HEADER = "http_header"
    COOKIE = "cookie"
    REQUEST_BODY = "request_body"


class ResponseStatus(str, Enum):
    NONE = "none"
    COMPLETED = "completed"
    ERROR = "error"
    TIMED_OUT = "timed_out"
    ABORTED = "aborted"


class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    DESERIALIZATION = "deserialization"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Parameter:
    """
    A single request parameter. The `type` decides where the value ends up:
    query string, form body, header, cookie, URL segment or request body.
    For REQUEST_BODY parameters `name` holds the body content type.
    """
    name: str
    value: Any
    type: ParameterType = ParameterType.GET_OR_POST

    def collides_with(self, other: "Parameter") -> bool:
        if self.type != other.type:
            return False
        if self.type == ParameterType.HTTP_HEADER:
            return self.name.lower() == other.name.lower()
        return self.name == other.name


@dataclass(frozen=True)
class FileParameter:
    name: str
    data: bytes
    file_name: str | None = None
    content_type: str | None = None

    @property
    def content_length(self) -> int:
        return len(self.data)


@dataclass
class RestRequest:
    """
    Declarative description of a single REST call.
    • method: HTTP verb
    • resource: path appended to the client base URL, may hold {segment} tokens
    • parameters: ordered parameters of every ParameterType
    • files: multipart file attachments
    • timeout: per-request timeout in seconds, overrides the client when > 0
    • root_element / date_format / xml_namespace: deserializer hints
    • credentials: (username, password) passed to the transport
    • attempts: number of completed executions of this request
    • on_before_deserialization: hook receiving the raw response before
      typed materialization
    """
    method: Method = Method.GET
    resource: str = ""
    parameters: list[Parameter] = field(default_factory=list)
    files: list[FileParameter] = field(default_factory=list)
    timeout: float | None = None
    root_element: str | None = None
    date_format: str | None = None
    xml_namespace: str | None = None
    credentials: tuple[str, str] | None = None
    user_agent: str | None = None
    always_multipart_form_data: bool = False
    attempts: int = 0
    on_before_deserialization: Callable[[RestResponse], None] | None = None

    def add_parameter(
        self,
        name: str,
        value: Any,
        type: ParameterType = ParameterType.GET_OR_POST,
    ) -> Self:
        self.parameters.append(Parameter(name=name, value=value, type=type))
        return self

    def add_header(self, name: str, value: str) -> Self:
        return self.add_parameter(name, value, ParameterType.HTTP_HEADER)

    def add_query_parameter(self, name: str, value: Any) -> Self:
        return self.add_parameter(name, value, ParameterType.QUERY_STRING)

    def add_url_segment(self, name: str, value: Any) -> Self:
        return self.add_parameter(name, value, ParameterType.URL_SEGMENT)

    def add_cookie(self, name: str, value: str) -> Self:
        return self.add_parameter(name, value, ParameterType.COOKIE)

    def add_body(self, value: str | bytes, content_type: str = "text/plain") -> Self:
        return self.add_parameter(content_type, value, ParameterType.REQUEST_BODY)

    def add_json_body(self, obj: Any) -> Self:
        return self.add_body(json.dumps(obj, default=str), content_type="application/json")

    def add_file(
        self,
        name: str,
        data: bytes,
        file_name: str | None = None,
        content_type: str | None = None,
    ) -> Self:
        self.files.append(
            FileParameter(name=name, data=data, file_name=file_name, content_type=content_type)
        )
        return self

    def copy(self, **changes: Any) -> "RestRequest":
        """Derived request with its own parameter and file lists."""
        changes.setdefault("parameters", list(self.parameters))
        changes.setdefault("files", list(self.files))
        return replace(self, **changes)

    def with_method(self, method: Method) -> "RestRequest":
        return self.copy(method=method)

    def with_attempt(self) -> "RestRequest":
        return self.copy(attempts=self.attempts + 1)


@dataclass(frozen=True)
class ExecutionError:
    """
    Tagged failure carried by a RestResponse instead of a raised exception.
    """
    kind: ErrorKind
    message: str
    cause: BaseException | None = None

    @classmethod
    def from_exception(cls, kind: ErrorKind, exc: BaseException) -> "ExecutionError":
        return cls(kind=kind, message=str(exc) or type(exc).__name__, cause=exc)

    @property
    def response_status(self) -> ResponseStatus:
        if self.kind == ErrorKind.CANCELLED:
            return ResponseStatus.ABORTED
        return ResponseStatus.ERROR


@dataclass
class TransportRequest:
    """
    Wire-level HTTP request container for the Transport Layer.
    Built fresh for every execution by the HttpConverter and owned by the
    dispatcher for the duration of the call.
    """
    method: str
    url: str
    headers: list[tuple[str, str]] = field(default_factory=list)
    cookies: dict[str, str] = field(default_factory=dict)
    parameters: list[tuple[str, str]] = field(default_factory=list)
    files: list[FileParameter] = field(default_factory=list)
    body: str | None = None
    body_bytes: bytes | None = None
    body_content_type: str | None = None
    user_agent: str | None = None
    timeout: float | None = None
    follow_redirects: bool = True
    max_redirects: int | None = None
    cookie_jar: Any | None = None
    proxy: str | None = None
    credentials: tuple[str, str] | None = None
    always_multipart_form_data: bool = False

    @property
    def has_body(self) -> bool:
        return self.body is not None or self.body_bytes is not None


@dataclass
class ResponseCookie:
    name: str
    value: str
    comment: str | None = None
    comment_uri: str | None = None
    discard: bool = False
    domain: str | None = None
    expired: bool = False
    expires: datetime | None = None
    http_only: bool = False
    path: str | None = None
    port: str | None = None
    secure: bool = False
    timestamp: datetime | None = None
    version: int = 0


@dataclass
class TransportResponse:
    """
    Wire-level HTTP response container for the Transport Layer.
    Network-level failures are reported through response_status,
    error_message and error_exception rather than raised.
    """
    status_code: int | None = None
    status_description: str | None = None
    content: str | None = None
    content_encoding: str | None = None
    content_length: int | None = None
    content_type: str | None = None
    raw_bytes: bytes | None = None
    response_uri: str | None = None
    server: str | None = None
    headers: list[tuple[str, str]] = field(default_factory=list)
    cookies: list[ResponseCookie] = field(default_factory=list)
    response_status: ResponseStatus = ResponseStatus.NONE
    error_message: str | None = None
    error_exception: BaseException | None = None


@dataclass
class RestResponse:
    """
    Abstract response handed back to callers. Failures are data: check
    `error` (or response_status / error_exception) instead of relying on
    a raised exception.
    """
    request: RestRequest | None = None
    status_code: int | None = None
    status_description: str | None = None
    content: str | None = None
    content_encoding: str | None = None
    content_length: int | None = None
    content_type: str | None = None
    raw_bytes: bytes | None = None
    response_uri: str | None = None
    server: str | None = None
    headers: list[Parameter] = field(default_factory=list)
    cookies: list[ResponseCookie] = field(default_factory=list)
    response_status: ResponseStatus = ResponseStatus.NONE
    error: ExecutionError | None = None

    @property
    def error_message(self) -> str | None:
        return self.error.message if self.error else None

    @property
    def error_exception(self) -> BaseException | None:
        return self.error.cause if self.error else None

    @property
    def media_type(self) -> str:
        if not self.content_type:
            return ""
        return self.content_type.split(";", 1)[0].strip()

    @property
    def is_successful(self) -> bool:
        return (
            self.response_status == ResponseStatus.COMPLETED
            and self.status_code is not None
            and 200 <= self.status_code < 300
        )

    def header(self, name: str) -> str | None:
        for h in self.headers:
            if h.name.lower() == name.lower():
                return h.value
        return None

    def with_error(self, error: ExecutionError) -> Self:
        return replace(self, response_status=error.response_status, error=error)


@dataclass
class TypedRestResponse(RestResponse, Generic[T]):
    data: T | None = None

    @classmethod
    def from_response(cls, raw: RestResponse) -> "TypedRestResponse[T]":
        return cls(**{f.name: getattr(raw, f.name) for f in fields(RestResponse)})
