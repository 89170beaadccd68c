from rest_client.config.factories import ClientRuntimeFactory, TransportRuntimeFactory
from rest_client.config.loader import ConfigLoader
from rest_client.config.models import (
    AiohttpEngineConfig,
    BasicAuthConfig,
    BearerTokenConfig,
    ClientConfigModel,
    NoAuthConfig,
)

__all__ = [
    "ClientRuntimeFactory",
    "TransportRuntimeFactory",
    "ConfigLoader",
    "AiohttpEngineConfig",
    "BasicAuthConfig",
    "BearerTokenConfig",
    "ClientConfigModel",
    "NoAuthConfig",
]
