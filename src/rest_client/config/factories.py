from typing import Callable

from rest_client.auth.authenticators import AuthType, AuthenticatorFactory
from rest_client.client import RestClient
from rest_client.config.models.client import ClientConfigModel
from rest_client.config.models.transport import TransportEngineModel
from rest_client.request_execution.transport.base import TransportEngine
from rest_client.request_execution.transport.engine import TransportEngineFactory
from rest_client.utils.common import string_map


class TransportRuntimeFactory:

    @staticmethod
    def build_factory(cfg: TransportEngineModel) -> Callable[[], TransportEngine]:

        def factory() -> TransportEngine:
            return TransportEngineFactory.create(cfg.type, **cfg.to_runtime_args())

        return factory


class ClientRuntimeFactory:
    """Build a ready-to-use RestClient from a validated ClientConfigModel."""

    @staticmethod
    def build_client(cfg: ClientConfigModel) -> RestClient:
        transport = TransportRuntimeFactory.build_factory(cfg.transport)()
        client = RestClient(cfg.base_url, transport=transport)

        client.timeout = cfg.timeout
        client.max_redirects = cfg.max_redirects
        client.follow_redirects = cfg.follow_redirects
        client.proxy = cfg.proxy
        client.user_agent = cfg.user_agent

        for name, value in string_map(cfg.default_headers).items():
            client.add_default_header(name, value)
        for name, value in string_map(cfg.default_params).items():
            client.add_default_parameter(name, value)

        if cfg.auth.type != AuthType.NONE:
            client.authenticator = AuthenticatorFactory.create(
                cfg.auth.type, **cfg.auth.to_runtime_args()
            )

        return client

    @staticmethod
    def build_factory(cfg: ClientConfigModel) -> Callable[[], RestClient]:

        def factory() -> RestClient:
            return ClientRuntimeFactory.build_client(cfg)

        return factory
