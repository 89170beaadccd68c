import asyncio
import logging
from enum import Enum
from typing import Awaitable, TypeVar

from rest_client.core.cancellation import CancellationToken
from rest_client.core.exceptions import OperationCancelledError
from rest_client.request_execution.models import Method, TransportRequest, TransportResponse
from rest_client.request_execution.transport.base import TransportEngine


T = TypeVar("T")

logger = logging.getLogger("ExecutionStrategy")


class CallShape(str, Enum):
    GET_STYLE = "get_style"
    POST_STYLE = "post_style"


BODY_BEARING_METHODS = frozenset({Method.PATCH, Method.POST, Method.PUT})


def select_shape(method: Method) -> CallShape:
    """PATCH, POST and PUT serialize a body, every other verb does not."""
    if method in BODY_BEARING_METHODS:
        return CallShape.POST_STYLE
    return CallShape.GET_STYLE


async def dispatch(
    transport: TransportEngine,
    request: TransportRequest,
    method: Method,
    token: CancellationToken,
) -> TransportResponse:
    """
    Invoke the transport operation matching the verb's call shape and await it.
    This is the single suspension point of an execution and the only place
    that observes the cancellation token.
    """
    shape = select_shape(method)
    logger.debug(f"Dispatching {method.value} {request.url} as {shape.value}")

    if shape == CallShape.POST_STYLE:
        call = transport.as_post(request, method.value)
    else:
        call = transport.as_get(request, method.value)

    return await await_with_token(call, token)


async def await_with_token(call: Awaitable[T], token: CancellationToken) -> T:
    if token.is_cancelled:
        if asyncio.iscoroutine(call):
            call.close()
        token.raise_if_cancelled()

    if not token.can_be_cancelled:
        return await call

    call_task = asyncio.ensure_future(call)
    cancel_task = asyncio.ensure_future(token.wait())

    try:
        done, _ = await asyncio.wait(
            {call_task, cancel_task},
            return_when=asyncio.FIRST_COMPLETED,
        )
    except asyncio.CancelledError:
        call_task.cancel()
        cancel_task.cancel()
        raise

    cancel_task.cancel()
    if call_task in done:
        return call_task.result()

    call_task.cancel()
    # drain the cancelled transport task
    await asyncio.gather(call_task, return_exceptions=True)

    raise OperationCancelledError("The operation was cancelled")
