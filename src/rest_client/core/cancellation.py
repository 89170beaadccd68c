import asyncio

from rest_client.core.exceptions import OperationCancelledError


class CancellationToken:
    """
    Cooperative cancellation signal threaded through every execute call.

    • A token created with can_be_cancelled=False (see CancellationToken.none())
      never fires and lets the dispatcher await the transport call directly.
    • cancel() may be called before or during an execution; the transport call
      is the only place that observes it.
    • The underlying asyncio.Event is created lazily so a token can be built
      outside of a running event loop.
    """

    def __init__(self, can_be_cancelled: bool = True) -> None:
        self._can_be_cancelled = can_be_cancelled
        self._cancelled = False
        self._event: asyncio.Event | None = None
        self._timer: asyncio.TimerHandle | None = None

    @classmethod
    def none(cls) -> "CancellationToken":
        return NONE

    @property
    def can_be_cancelled(self) -> bool:
        return self._can_be_cancelled

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if not self._can_be_cancelled:
            raise ValueError("CancellationToken.none() cannot be cancelled")
        self._cancelled = True
        if self._event is not None:
            self._event.set()

    def cancel_after(self, delay: float) -> None:
        """Schedule cancel() on the running loop after `delay` seconds."""
        if self._timer is not None:
            self._timer.cancel()
        self._timer = asyncio.get_running_loop().call_later(delay, self.cancel)

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise OperationCancelledError("The operation was cancelled")

    async def wait(self) -> None:
        if self._cancelled:
            return
        if self._event is None:
            self._event = asyncio.Event()
        await self._event.wait()


NONE = CancellationToken(can_be_cancelled=False)
