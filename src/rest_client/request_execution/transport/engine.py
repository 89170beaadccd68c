import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from http.cookies import Morsel
from types import TracebackType
from typing import Any, AsyncIterator
from typing_extensions import Self
from aiohttp import (
    BasicAuth,
    ClientError,
    ClientResponse,
    ClientSession,
    ClientTimeout,
    FormData,
    MultipartWriter,
)
from yarl import URL

from rest_client.core.abstract_factory import TypeAbstractFactory
from rest_client.core.exceptions import TransportNotOpenError
from rest_client.request_execution.models import (
    ResponseCookie,
    ResponseStatus,
    TransportRequest,
    TransportResponse,
)
from rest_client.request_execution.transport.base import TransportEngine, TransportEngineType


class TransportEngineFactory(TypeAbstractFactory[TransportEngineType, TransportEngine]):
    pass


@TransportEngineFactory.register(TransportEngineType.AIOHTTP)
class AiohttpEngine(TransportEngine):
    """
    TransportEngine adapter that uses aiohttp.ClientSession to make HTTP requests.

    Used as an async context manager the engine keeps one session open for
    every call; outside of a context each call opens a short-lived session.
    aiohttp client errors and timeouts are reported in the TransportResponse.
    """

    def __init__(self, base_timeout: float = 100) -> None:
        self._timeout = ClientTimeout(total=base_timeout)
        self._session: ClientSession | None = None
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def session(self) -> ClientSession:
        if self._session is None:
            raise TransportNotOpenError(f"{self.__class__.__name__} aiohttp ClientSession not assigned")
        return self._session

    @property
    def is_open(self) -> bool:
        return self._session is not None and not self._session.closed

    async def __aenter__(self) -> Self:
        if not self.is_open:
            self._session = ClientSession(timeout=self._timeout)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    @asynccontextmanager
    async def _session_scope(self) -> AsyncIterator[ClientSession]:
        if self.is_open:
            yield self.session
        else:
            async with ClientSession(timeout=self._timeout) as session:
                yield session

    async def as_get(self, request: TransportRequest, method: str) -> TransportResponse:
        return await self._send(request, method, data=None)

    async def as_post(self, request: TransportRequest, method: str) -> TransportResponse:
        return await self._send(request, method, data=self._build_body(request))

    def _build_body(self, request: TransportRequest) -> Any:
        if request.files or request.always_multipart_form_data:
            writer = MultipartWriter("form-data")
            for name, value in request.parameters:
                part = writer.append(value)
                part.set_content_disposition("form-data", name=name)
            for f in request.files:
                part = writer.append(f.data, {"Content-Type": f.content_type or "application/octet-stream"})
                part.set_content_disposition("form-data", name=f.name, filename=f.file_name or f.name)
            return writer

        if request.body_bytes is not None:
            return request.body_bytes

        if request.body is not None:
            return request.body.encode("utf-8")

        if request.parameters:
            return FormData(request.parameters)

        return None

    def _build_headers(self, request: TransportRequest, data: Any) -> list[tuple[str, str]]:
        headers = list(request.headers)
        names = {name.lower() for name, _ in headers}

        if request.user_agent and "user-agent" not in names:
            headers.append(("User-Agent", request.user_agent))

        if (
            isinstance(data, bytes)
            and request.body_content_type
            and "content-type" not in names
        ):
            headers.append(("Content-Type", request.body_content_type))

        return headers

    def _build_cookies(self, request: TransportRequest) -> dict[str, str]:
        cookies: dict[str, str] = {}
        if request.cookie_jar is not None:
            for name, morsel in request.cookie_jar.filter_cookies(URL(request.url)).items():
                cookies[name] = morsel.value
        cookies.update(request.cookies)
        return cookies

    async def _send(self, request: TransportRequest, method: str, data: Any) -> TransportResponse:
        kwargs: dict[str, Any] = {
            "headers": self._build_headers(request, data),
            "cookies": self._build_cookies(request),
            "data": data,
            "allow_redirects": request.follow_redirects,
        }
        if request.max_redirects is not None:
            kwargs["max_redirects"] = request.max_redirects
        if request.timeout:
            kwargs["timeout"] = ClientTimeout(total=request.timeout)
        if request.proxy:
            kwargs["proxy"] = request.proxy
        if request.credentials is not None:
            kwargs["auth"] = BasicAuth(*request.credentials)

        self._logger.debug(f"{method} {request.url}")

        try:
            async with self._session_scope() as session:
                async with session.request(method, request.url, **kwargs) as response:
                    raw = await response.read()
                    if request.cookie_jar is not None:
                        request.cookie_jar.update_cookies(response.cookies, response.url)
                    return self._to_transport_response(response, raw)

        except asyncio.TimeoutError as e:
            return TransportResponse(
                response_status=ResponseStatus.TIMED_OUT,
                error_message=str(e) or type(e).__name__,
                error_exception=e,
            )
        except ClientError as e:
            return TransportResponse(
                response_status=ResponseStatus.ERROR,
                error_message=str(e) or type(e).__name__,
                error_exception=e,
            )

    def _to_transport_response(self, response: ClientResponse, raw: bytes) -> TransportResponse:
        charset = response.charset or "utf-8"
        try:
            content = raw.decode(charset, errors="replace")
        except LookupError:
            content = raw.decode("utf-8", errors="replace")

        return TransportResponse(
            status_code=response.status,
            status_description=response.reason,
            content=content,
            content_encoding=response.headers.get("Content-Encoding"),
            content_length=response.content_length if response.content_length is not None else len(raw),
            content_type=response.headers.get("Content-Type"),
            raw_bytes=raw,
            response_uri=str(response.url),
            server=response.headers.get("Server"),
            headers=list(response.headers.items()),
            cookies=[_to_response_cookie(m) for m in response.cookies.values()],
            response_status=ResponseStatus.COMPLETED,
        )


def _to_response_cookie(morsel: Morsel) -> ResponseCookie:
    expires: datetime | None = None
    if morsel["expires"]:
        try:
            expires = parsedate_to_datetime(morsel["expires"])
        except (TypeError, ValueError):
            expires = None

    now = datetime.now(timezone.utc)
    version = morsel["version"]

    return ResponseCookie(
        name=morsel.key,
        value=morsel.value,
        comment=morsel["comment"] or None,
        domain=morsel["domain"] or None,
        expired=expires is not None and expires.tzinfo is not None and expires <= now,
        expires=expires,
        http_only=bool(morsel["httponly"]),
        path=morsel["path"] or None,
        secure=bool(morsel["secure"]),
        timestamp=now,
        version=int(version) if str(version).isdigit() else 0,
    )
