from rest_client.config.models.auth import (
    AuthConfigModel,
    AuthConfigUnion,
    BasicAuthConfig,
    BearerTokenConfig,
    NoAuthConfig,
)
from rest_client.config.models.client import ClientConfigModel
from rest_client.config.models.transport import AiohttpEngineConfig, TransportEngineModel

__all__ = [
    "AuthConfigModel",
    "AuthConfigUnion",
    "BasicAuthConfig",
    "BearerTokenConfig",
    "NoAuthConfig",
    "ClientConfigModel",
    "AiohttpEngineConfig",
    "TransportEngineModel",
]
