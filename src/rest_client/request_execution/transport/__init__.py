from rest_client.request_execution.transport.base import TransportEngine, TransportEngineType
from rest_client.request_execution.transport.engine import AiohttpEngine, TransportEngineFactory

__all__ = [
    "TransportEngine",
    "TransportEngineType",
    "AiohttpEngine",
    "TransportEngineFactory",
]
