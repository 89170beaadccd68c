from typing import Any
from pydantic import Field, field_validator, BaseModel

from rest_client.config.models.auth import AuthConfigUnion, NoAuthConfig
from rest_client.config.models.transport import AiohttpEngineConfig


class ClientConfigModel(BaseModel):
    """REST client configuration"""
    base_url: str = Field(..., description="Base URL, combined with each request resource")
    timeout: float | None = Field(default=None, description="Default request timeout in seconds")
    max_redirects: int | None = Field(default=None, ge=0)
    follow_redirects: bool = Field(default=True)
    proxy: str | None = Field(default=None, description="Proxy URL passed to the transport")
    user_agent: str | None = Field(default=None, description="Overrides the library user agent")
    default_headers: dict[str, str] = Field(default_factory=dict, description="Headers sent with every request")
    default_params: dict[str, Any] = Field(default_factory=dict, description="Query/form params sent with every request")
    transport: AiohttpEngineConfig = Field(default_factory=AiohttpEngineConfig)
    auth: AuthConfigUnion = Field(default_factory=NoAuthConfig)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")
