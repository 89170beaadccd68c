from rest_client.auth.authenticators import (
    Authenticator,
    AuthenticatorFactory,
    AuthType,
    BearerTokenAuthenticator,
    HttpBasicAuthenticator,
    NoAuthenticator,
)

__all__ = [
    "Authenticator",
    "AuthenticatorFactory",
    "AuthType",
    "BearerTokenAuthenticator",
    "HttpBasicAuthenticator",
    "NoAuthenticator",
]
