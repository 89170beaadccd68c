class RestClientError(Exception):
    """Base class for errors raised inside the request execution pipeline"""

    pass


class DeserializationError(RestClientError):
    """Raised when response content cannot be materialized into the target type"""

    def __init__(self, message: str, content_type: str | None = None) -> None:
        self.content_type = content_type
        super().__init__(message)


class NoDeserializerError(DeserializationError):
    """Raised when no handler is registered for a response content type"""

    def __init__(self, content_type: str | None) -> None:
        super().__init__(
            f"No deserializer registered for content type '{content_type or ''}'",
            content_type=content_type,
        )


class OperationCancelledError(RestClientError):
    """Raised when a CancellationToken fires while a transport call is in flight"""

    pass


class TransportNotOpenError(RestClientError):
    """Raised when a transport session is required but has not been opened"""

    pass
