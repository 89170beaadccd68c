from typing import Any
from pydantic import Field, BaseModel

from rest_client.request_execution.transport.base import TransportEngineType


class TransportEngineModel(BaseModel):
    """Base config for transport engine"""
    type: TransportEngineType

    def to_runtime_args(self) -> dict[str, Any]:
        return {}


class AiohttpEngineConfig(TransportEngineModel):
    type: TransportEngineType = Field(default=TransportEngineType.AIOHTTP)
    base_timeout: float = Field(default=100, gt=0, description="Session-wide deadline in seconds")

    def to_runtime_args(self) -> dict[str, Any]:
        return {
            "base_timeout": self.base_timeout,
        }
