from rest_client.auth import (
    Authenticator,
    BearerTokenAuthenticator,
    HttpBasicAuthenticator,
    NoAuthenticator,
)
from rest_client.client import RestClient, default_user_agent
from rest_client.core import (
    CancellationToken,
    DeserializationError,
    NoDeserializerError,
    OperationCancelledError,
    RestClientError,
)
from rest_client.deserializers import (
    Deserializer,
    DeserializerRegistry,
    JsonDeserializer,
    XmlDeserializer,
)
from rest_client.request_execution import (
    AiohttpEngine,
    ErrorKind,
    ExecutionError,
    Method,
    Parameter,
    ParameterType,
    ResponseStatus,
    RestRequest,
    RestResponse,
    TransportEngine,
    TypedRestResponse,
)
from rest_client.version import __version__

__all__ = [
    "Authenticator",
    "BearerTokenAuthenticator",
    "HttpBasicAuthenticator",
    "NoAuthenticator",
    "RestClient",
    "default_user_agent",
    "CancellationToken",
    "DeserializationError",
    "NoDeserializerError",
    "OperationCancelledError",
    "RestClientError",
    "Deserializer",
    "DeserializerRegistry",
    "JsonDeserializer",
    "XmlDeserializer",
    "AiohttpEngine",
    "ErrorKind",
    "ExecutionError",
    "Method",
    "Parameter",
    "ParameterType",
    "ResponseStatus",
    "RestRequest",
    "RestResponse",
    "TransportEngine",
    "TypedRestResponse",
    "__version__",
]
