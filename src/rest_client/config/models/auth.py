from typing import Annotated, Union, Any, Literal
from pydantic import Field, BaseModel

from rest_client.auth.authenticators import AuthType


class AuthConfigModel(BaseModel):
    """Base config for all auth types."""

    type: AuthType

    model_config = {"frozen": True}

    def to_runtime_args(self) -> dict[str, Any]:
        return {}


class NoAuthConfig(AuthConfigModel):
    type: Literal[AuthType.NONE] = AuthType.NONE


class BasicAuthConfig(AuthConfigModel):
    type: Literal[AuthType.BASIC] = AuthType.BASIC
    username: str
    password: str

    def to_runtime_args(self) -> dict[str, Any]:
        return {
            "username": self.username,
            "password": self.password,
        }


class BearerTokenConfig(AuthConfigModel):
    type: Literal[AuthType.BEARER] = AuthType.BEARER
    token: str

    def to_runtime_args(self) -> dict[str, Any]:
        return {
            "token": self.token,
        }


AuthConfigUnion = Annotated[
    Union[
        NoAuthConfig,
        BasicAuthConfig,
        BearerTokenConfig,
    ],
    Field(discriminator="type"),
]
