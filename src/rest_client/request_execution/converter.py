from typing import Any, Iterable, Protocol, Sequence

from rest_client.request_execution.models import (
    ErrorKind,
    ExecutionError,
    Parameter,
    ParameterType,
    RestRequest,
    RestResponse,
    TransportRequest,
    TransportResponse,
)
from rest_client.request_execution.strategy import CallShape, select_shape
from rest_client.utils.common import string_value, url_encode


class ClientSettings(Protocol):
    """Client-level defaults consumed by the converter."""

    base_url: str | None
    timeout: float | None
    follow_redirects: bool
    max_redirects: int | None
    proxy: str | None
    cookie_jar: Any | None

    @property
    def default_parameters(self) -> Sequence[Parameter]: ...

    @property
    def default_accept_types(self) -> Sequence[str]: ...

    @property
    def user_agent(self) -> str: ...


def merge_parameters(
    defaults: Iterable[Parameter],
    parameters: Sequence[Parameter],
) -> list[Parameter]:
    """
    Request parameters first, then every default that does not collide on
    name and kind. Parameters of different kinds never collide.
    """
    merged = list(parameters)
    for default in defaults:
        if not any(default.collides_with(p) for p in parameters):
            merged.append(default)
    return merged


def _of_type(parameters: Iterable[Parameter], *types: ParameterType) -> list[Parameter]:
    return [p for p in parameters if p.type in types]


class HttpConverter:
    """
    Translate between the abstract RestRequest/RestResponse model and the
    wire-level TransportRequest/TransportResponse.
    """

    def convert_to(self, client: ClientSettings, request: RestRequest) -> TransportRequest:
        shape = select_shape(request.method)
        parameters = self.resolve_parameters(client, request)

        timeout = request.timeout if request.timeout and request.timeout > 0 else client.timeout

        transport_request = TransportRequest(
            method=request.method.value,
            url=self.build_uri(client, request, parameters),
            headers=[
                (p.name, string_value(p.value))
                for p in _of_type(parameters, ParameterType.HTTP_HEADER)
            ],
            cookies={
                p.name: string_value(p.value)
                for p in _of_type(parameters, ParameterType.COOKIE)
            },
            files=list(request.files),
            user_agent=request.user_agent or client.user_agent,
            timeout=timeout if timeout and timeout > 0 else None,
            follow_redirects=client.follow_redirects,
            max_redirects=client.max_redirects,
            cookie_jar=client.cookie_jar,
            proxy=client.proxy,
            credentials=request.credentials,
            always_multipart_form_data=request.always_multipart_form_data,
        )

        if shape == CallShape.POST_STYLE:
            transport_request.parameters = [
                (p.name, string_value(p.value))
                for p in _of_type(parameters, ParameterType.GET_OR_POST)
                if p.value is not None
            ]

        bodies = _of_type(parameters, ParameterType.REQUEST_BODY)
        if bodies:
            body = bodies[0]
            if isinstance(body.value, (bytes, bytearray)):
                transport_request.body_bytes = bytes(body.value)
            else:
                transport_request.body = string_value(body.value)
            transport_request.body_content_type = body.name

        return transport_request

    def resolve_parameters(self, client: ClientSettings, request: RestRequest) -> list[Parameter]:
        parameters = merge_parameters(client.default_parameters, request.parameters)

        has_accept = any(
            p.name.lower() == "accept"
            for p in _of_type(parameters, ParameterType.HTTP_HEADER)
        )
        if not has_accept and client.default_accept_types:
            parameters.append(
                Parameter(
                    name="Accept",
                    value=", ".join(client.default_accept_types),
                    type=ParameterType.HTTP_HEADER,
                )
            )

        return parameters

    def build_uri(
        self,
        client: ClientSettings,
        request: RestRequest,
        parameters: Sequence[Parameter] | None = None,
    ) -> str:
        """
        Base URL + resource with {segment} tokens substituted + query string.
        GET_OR_POST parameters only land in the query for GET-style verbs.
        """
        if parameters is None:
            parameters = self.resolve_parameters(client, request)

        resource = request.resource or ""
        for p in _of_type(parameters, ParameterType.URL_SEGMENT):
            resource = resource.replace("{" + p.name + "}", url_encode(p.value))

        if resource.startswith(("http://", "https://")) or not client.base_url:
            url = resource
        elif resource:
            url = f"{client.base_url}/{resource.lstrip('/')}"
        else:
            url = client.base_url

        query_types = [ParameterType.QUERY_STRING]
        if select_shape(request.method) == CallShape.GET_STYLE:
            query_types.append(ParameterType.GET_OR_POST)

        query = [
            f"{url_encode(p.name)}={url_encode(p.value)}"
            for p in _of_type(parameters, *query_types)
            if p.value is not None
        ]
        if query:
            separator = "&" if "?" in url else "?"
            url = f"{url}{separator}{'&'.join(query)}"

        return url

    def convert_from(
        self,
        transport_response: TransportResponse,
        request: RestRequest | None = None,
    ) -> RestResponse:
        error: ExecutionError | None = None
        if transport_response.error_exception is not None or transport_response.error_message:
            error = ExecutionError(
                kind=ErrorKind.TRANSPORT,
                message=transport_response.error_message or str(transport_response.error_exception),
                cause=transport_response.error_exception,
            )

        return RestResponse(
            request=request,
            status_code=transport_response.status_code,
            status_description=transport_response.status_description,
            content=transport_response.content,
            content_encoding=transport_response.content_encoding,
            content_length=transport_response.content_length,
            content_type=transport_response.content_type,
            raw_bytes=transport_response.raw_bytes,
            response_uri=transport_response.response_uri,
            server=transport_response.server,
            headers=[
                Parameter(name=name, value=value, type=ParameterType.HTTP_HEADER)
                for name, value in transport_response.headers
            ],
            cookies=list(transport_response.cookies),
            response_status=transport_response.response_status,
            error=error,
        )
