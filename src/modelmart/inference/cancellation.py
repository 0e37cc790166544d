"""Cooperative cancellation for in-flight inference requests."""

import asyncio
import inspect
from collections.abc import Awaitable
from typing import TypeVar

from .errors import RequestCancelledError

T = TypeVar("T")


class CancellationToken:
    """Cooperative cancellation signal shared by a caller and a transport.

    The caller keeps the token and calls ``cancel()``; the transport either
    polls ``raise_if_cancelled()`` or wraps its I/O in ``run()``, which races
    the awaitable against the signal.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self) -> None:
        """Block until the token is cancelled."""
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RequestCancelledError("Request was cancelled")

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` unless the token fires first.

        On cancellation the inner task is cancelled and awaited before
        ``RequestCancelledError`` is raised, so no work outlives the call.
        A token that is already cancelled closes ``awaitable`` without running it.
        """
        if self.cancelled:
            _discard(awaitable)
            raise RequestCancelledError("Request was cancelled")

        work = asyncio.ensure_future(awaitable)
        signal = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait(
                {work, signal}, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            work.cancel()
            raise
        finally:
            signal.cancel()

        if work in done:
            return work.result()

        work.cancel()
        await asyncio.gather(work, return_exceptions=True)
        raise RequestCancelledError("Request was cancelled")


def _discard(awaitable: Awaitable) -> None:
    """Release an awaitable that will never be awaited."""
    if inspect.iscoroutine(awaitable):
        awaitable.close()
    elif isinstance(awaitable, asyncio.Future):
        awaitable.cancel()
