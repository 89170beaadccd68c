from .executor import basic_rest_request
from .transport import (
    FakeTransportEngine,
    RaisingTransportEngine,
    SlowTransportEngine,
    json_transport_response,
)


__all__ = [
    'basic_rest_request',
    'FakeTransportEngine',
    'RaisingTransportEngine',
    'SlowTransportEngine',
    'json_transport_response',
]
