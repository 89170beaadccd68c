import base64
from enum import Enum
from typing import Any, Protocol

from rest_client.core.abstract_factory import TypeAbstractFactory
from rest_client.request_execution.models import ParameterType, RestRequest


class AuthType(str, Enum):
    NONE = "none"
    BASIC = "basic"
    BEARER = "bearer"


class Authenticator(Protocol):
    """
    Structural interface for an authentication scheme. Receives the client and
    the request about to be converted and returns the request to send; it must
    not mutate the caller's instance.
    """

    def authenticate(self, client: Any, request: RestRequest) -> RestRequest: ...


class AuthenticatorFactory(TypeAbstractFactory[AuthType, Authenticator]):
    pass


def _has_authorization(request: RestRequest) -> bool:
    return any(
        p.type == ParameterType.HTTP_HEADER and p.name.lower() == "authorization"
        for p in request.parameters
    )


@AuthenticatorFactory.register(AuthType.NONE)
class NoAuthenticator:
    """No authentication required"""

    def authenticate(self, client: Any, request: RestRequest) -> RestRequest:
        return request


@AuthenticatorFactory.register(AuthType.BASIC)
class HttpBasicAuthenticator:
    """HTTP Basic Authentication, skipped when the request carries its own Authorization header"""

    def __init__(self, username: str, password: str) -> None:
        self.username = username
        self.password = password

    def authenticate(self, client: Any, request: RestRequest) -> RestRequest:
        if _has_authorization(request):
            return request

        raw_credentials = f"{self.username}:{self.password}"
        b64_credentials = base64.b64encode(raw_credentials.encode("utf-8")).decode("utf-8")

        return request.copy().add_header("Authorization", f"Basic {b64_credentials}")


@AuthenticatorFactory.register(AuthType.BEARER)
class BearerTokenAuthenticator:
    """
    Inject a bearer token into the Authorization header.
    """

    def __init__(self, token: str) -> None:
        self.token = token

    def authenticate(self, client: Any, request: RestRequest) -> RestRequest:
        if _has_authorization(request):
            return request

        return request.copy().add_header("Authorization", f"Bearer {self.token}")
