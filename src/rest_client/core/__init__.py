from rest_client.core.abstract_factory import TypeAbstractFactory
from rest_client.core.cancellation import CancellationToken
from rest_client.core.exceptions import (
    DeserializationError,
    NoDeserializerError,
    OperationCancelledError,
    RestClientError,
    TransportNotOpenError,
)

__all__ = [
    "TypeAbstractFactory",
    "CancellationToken",
    "DeserializationError",
    "NoDeserializerError",
    "OperationCancelledError",
    "RestClientError",
    "TransportNotOpenError",
]
