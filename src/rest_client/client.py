import logging
import threading
from types import TracebackType
from typing import Any, TypeVar
from typing_extensions import Self

from rest_client.auth.authenticators import Authenticator
from rest_client.core.cancellation import CancellationToken
from rest_client.core.exceptions import NoDeserializerError, OperationCancelledError
from rest_client.deserializers.base import WILDCARD, Deserializer
from rest_client.deserializers.json_deserializer import JsonDeserializer
from rest_client.deserializers.registry import DeserializerRegistry
from rest_client.deserializers.xml_deserializer import XmlDeserializer
from rest_client.request_execution.converter import HttpConverter
from rest_client.request_execution.models import (
    ErrorKind,
    ExecutionError,
    Method,
    Parameter,
    ParameterType,
    RestRequest,
    RestResponse,
    TypedRestResponse,
)
from rest_client.request_execution.strategy import dispatch
from rest_client.request_execution.transport.base import TransportEngine
from rest_client.request_execution.transport.engine import AiohttpEngine
from rest_client.version import __version__


T = TypeVar("T")


def default_user_agent() -> str:
    return f"RestClient/{__version__}"


def resolve_user_agent(override: str | None) -> str:
    return override if override else default_user_agent()


class RestClient:
    """
    The RestClient is the orchestration layer between declarative RestRequests
    and the Transport layer. It is responsible for the following:
    • Owns client-level configuration shared by every execution: base URL,
      default parameters, timeout, redirect policy, proxy, cookie jar,
      user agent and authenticator.
    • Owns the DeserializerRegistry and keeps the synthesized Accept default
      parameter in line with the registered content types.
    • Runs the pipeline authenticate -> convert -> dispatch -> convert back,
      then materializes typed results.
    • Converts every failure past argument validation into an error response.

    A single instance is safe to share between concurrent executions: registry
    and default parameters are swapped as immutable snapshots under a lock.
    """

    def __init__(
        self,
        base_url: str | None = None,
        transport: TransportEngine | None = None,
        *,
        register_default_handlers: bool = True,
        logger: logging.Logger | None = None,
    ) -> None:
        self.transport = transport or AiohttpEngine()
        self._logger = logger or logging.getLogger(self.__class__.__name__)
        self._converter = HttpConverter()
        self._registry = DeserializerRegistry()
        self._lock = threading.Lock()
        self._default_parameters: tuple[Parameter, ...] = ()

        self._base_url: str | None = None
        self.base_url = base_url
        self.timeout: float | None = None
        self.max_redirects: int | None = None
        self.follow_redirects: bool = True
        self.proxy: str | None = None
        self.cookie_jar: Any | None = None
        self.authenticator: Authenticator | None = None
        self._user_agent: str | None = None

        if register_default_handlers:
            json_deserializer = JsonDeserializer()
            xml_deserializer = XmlDeserializer()
            self.add_handler("application/json", json_deserializer)
            self.add_handler("application/xml", xml_deserializer)
            self.add_handler("text/json", json_deserializer)
            self.add_handler("text/x-json", json_deserializer)
            self.add_handler("text/javascript", json_deserializer)
            self.add_handler("text/xml", xml_deserializer)
            self.add_handler(WILDCARD, json_deserializer)

    async def __aenter__(self) -> Self:
        await self.transport.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.transport.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def base_url(self) -> str | None:
        return self._base_url

    @base_url.setter
    def base_url(self, value: str | None) -> None:
        self._base_url = value.rstrip("/") if value else value

    @property
    def user_agent(self) -> str:
        return resolve_user_agent(self._user_agent)

    @user_agent.setter
    def user_agent(self, value: str | None) -> None:
        self._user_agent = value

    @property
    def default_parameters(self) -> tuple[Parameter, ...]:
        return self._default_parameters

    @property
    def default_accept_types(self) -> tuple[str, ...]:
        return self._registry.accept_types

    # default parameters

    def add_default_parameter(
        self,
        name: str,
        value: Any,
        type: ParameterType = ParameterType.GET_OR_POST,
    ) -> Self:
        with self._lock:
            self._default_parameters = self._default_parameters + (
                Parameter(name=name, value=value, type=type),
            )
        return self

    def add_default_header(self, name: str, value: str) -> Self:
        return self.add_default_parameter(name, value, ParameterType.HTTP_HEADER)

    def add_default_url_segment(self, name: str, value: Any) -> Self:
        return self.add_default_parameter(name, value, ParameterType.URL_SEGMENT)

    def remove_default_parameter(self, name: str, type: ParameterType | None = None) -> Self:
        """
        Remove the defaults called `name`, optionally only those of one kind.
        Header names compare case-insensitively, every other kind exactly.
        """
        def matches(p: Parameter) -> bool:
            if type is not None and p.type != type:
                return False
            if p.type == ParameterType.HTTP_HEADER:
                return p.name.lower() == name.lower()
            return p.name == name

        with self._lock:
            self._default_parameters = tuple(
                p for p in self._default_parameters if not matches(p)
            )
        return self

    # deserializer handlers

    def add_handler(self, content_type: str, deserializer: Deserializer) -> None:
        with self._lock:
            self._registry.register(content_type, deserializer)
            self._sync_accept_parameter()

    def remove_handler(self, content_type: str) -> None:
        with self._lock:
            self._registry.unregister(content_type)
            self._sync_accept_parameter()

    def clear_handlers(self) -> None:
        with self._lock:
            self._registry.clear()
            self._sync_accept_parameter()

    def get_handler(self, content_type: str | None) -> Deserializer | None:
        return self._registry.lookup(content_type)

    def _sync_accept_parameter(self) -> None:
        # caller holds self._lock
        parameters = tuple(
            p for p in self._default_parameters
            if not (p.type == ParameterType.HTTP_HEADER and p.name.lower() == "accept")
        )
        accepts = self._registry.accept_header()
        if accepts:
            parameters = parameters + (
                Parameter(name="Accept", value=accepts, type=ParameterType.HTTP_HEADER),
            )
        self._default_parameters = parameters

    def build_uri(self, request: RestRequest) -> str:
        return self._converter.build_uri(self, request)

    # execution

    async def execute_get(
        self,
        request: RestRequest,
        response_type: type[T] | Any,
        token: CancellationToken | None = None,
    ) -> TypedRestResponse[T]:
        """Executes a GET-style request, whatever the request's own verb."""
        if request is None:
            raise ValueError("request must not be None")
        return await self.execute_as(request.with_method(Method.GET), response_type, token)

    async def execute_post(
        self,
        request: RestRequest,
        response_type: type[T] | Any,
        token: CancellationToken | None = None,
    ) -> TypedRestResponse[T]:
        """Executes a POST-style request, whatever the request's own verb."""
        if request is None:
            raise ValueError("request must not be None")
        return await self.execute_as(request.with_method(Method.POST), response_type, token)

    async def execute_as(
        self,
        request: RestRequest,
        response_type: type[T] | Any,
        token: CancellationToken | None = None,
    ) -> TypedRestResponse[T]:
        """Executes the request and deserializes the content into `response_type`."""
        if request is None:
            raise ValueError("request must not be None")
        raw = await self.execute(request, token)
        return self.deserialize(request, raw, response_type)

    async def execute(
        self,
        request: RestRequest,
        token: CancellationToken | None = None,
    ) -> RestResponse:
        """
        Executes the request and returns the untyped response. Never raises
        past argument validation: failures come back as an error response.
        The returned response.request is the executed copy of `request`
        with its attempt counter incremented.
        """
        if request is None:
            raise ValueError("request must not be None")
        token = token or CancellationToken.none()

        try:
            prepared = self._authenticate(request)
            transport_request = self._converter.convert_to(self, prepared)
            transport_response = await dispatch(
                self.transport, transport_request, prepared.method, token
            )
            return self._converter.convert_from(transport_response, prepared.with_attempt())
        except OperationCancelledError as e:
            return self._capture(request, ErrorKind.CANCELLED, e)
        except Exception as e:
            return self._capture(request, ErrorKind.TRANSPORT, e)

    async def download_data(
        self,
        request: RestRequest,
        token: CancellationToken | None = None,
    ) -> bytes | None:
        """Executes the request and returns only the raw response bytes."""
        if request is None:
            raise ValueError("request must not be None")
        response = await self.execute(request, token)
        return response.raw_bytes

    def deserialize(
        self,
        request: RestRequest,
        raw: RestResponse,
        response_type: type[T] | Any,
    ) -> TypedRestResponse[T]:
        response: TypedRestResponse[T] = TypedRestResponse.from_response(raw)
        if response.request is None:
            response.request = request

        try:
            if request.on_before_deserialization is not None:
                request.on_before_deserialization(raw)

            # captured failures skip deserialization, HTTP error statuses do not
            if raw.error is not None:
                return response

            media_type = raw.media_type
            handler = self.get_handler(media_type)
            if handler is None:
                raise NoDeserializerError(media_type)

            response.data = handler.deserialize(
                raw,
                response_type,
                root_element=request.root_element,
                date_format=request.date_format,
                namespace=request.xml_namespace,
            )
        except Exception as e:
            self._logger.warning(
                f"Deserialization of {request.method.value} {request.resource} failed: "
                f"{type(e).__name__}: {e}"
            )
            return response.with_error(ExecutionError.from_exception(ErrorKind.DESERIALIZATION, e))

        return response

    def _authenticate(self, request: RestRequest) -> RestRequest:
        if self.authenticator is None:
            return request
        return self.authenticator.authenticate(self, request)

    def _capture(self, request: RestRequest, kind: ErrorKind, exc: Exception) -> RestResponse:
        self._logger.warning(
            f"{request.method.value} {request.resource} failed: {type(exc).__name__}: {exc}"
        )
        return RestResponse(request=request).with_error(ExecutionError.from_exception(kind, exc))
