from __future__ import annotations
from abc import ABC, abstractmethod
from enum import Enum
from types import TracebackType

from rest_client.request_execution.models import TransportRequest, TransportResponse


class TransportEngineType(str, Enum):
    AIOHTTP = "aiohttp"


class TransportEngine(ABC):
    """
    A structural interface that defines a pluggable HTTP engine abstraction.
    The engine exposes two call shapes: as_get() never serializes a request
    body, as_post() always does (form fields, files or raw body). Both return
    a TransportResponse; network-level failures may be reported inside it
    or raised. Transport is also the lifecycle manager for an HTTP session.
    """

    @abstractmethod
    async def __aenter__(self) -> "TransportEngine":
        ...

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        ...

    @abstractmethod
    async def as_get(self, request: TransportRequest, method: str) -> TransportResponse:
        ...

    @abstractmethod
    async def as_post(self, request: TransportRequest, method: str) -> TransportResponse:
        ...
