from rest_client.request_execution.converter import HttpConverter, merge_parameters
from rest_client.request_execution.models import (
    ErrorKind,
    ExecutionError,
    FileParameter,
    Method,
    Parameter,
    ParameterType,
    ResponseCookie,
    ResponseStatus,
    RestRequest,
    RestResponse,
    TransportRequest,
    TransportResponse,
    TypedRestResponse,
)
from rest_client.request_execution.strategy import CallShape, dispatch, select_shape
from rest_client.request_execution.transport import (
    AiohttpEngine,
    TransportEngine,
    TransportEngineFactory,
    TransportEngineType,
)

__all__ = [
    "HttpConverter",
    "merge_parameters",
    "ErrorKind",
    "ExecutionError",
    "FileParameter",
    "Method",
    "Parameter",
    "ParameterType",
    "ResponseCookie",
    "ResponseStatus",
    "RestRequest",
    "RestResponse",
    "TransportRequest",
    "TransportResponse",
    "TypedRestResponse",
    "CallShape",
    "dispatch",
    "select_shape",
    "AiohttpEngine",
    "TransportEngine",
    "TransportEngineFactory",
    "TransportEngineType",
]
