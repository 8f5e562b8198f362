# -*- coding: utf-8 -*-
"""Cooperative cancellation of requests."""

import asyncio
import logging
import weakref
from typing import Any, Awaitable, Optional, TypeVar

from async_dlna_control.exceptions import UpnpCancelledError

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")  # pylint: disable=invalid-name


class CancelToken:
    """
    Cancellation signal, observed by requesters while blocking on I/O.

    A token created with a parent is cancelled when its parent is cancelled.
    The parent holds its children weakly.
    """

    def __init__(self, parent: Optional["CancelToken"] = None) -> None:
        """Initialize."""
        self._event = asyncio.Event()
        self._children: "weakref.WeakSet[CancelToken]" = weakref.WeakSet()
        self._timer: Optional[asyncio.TimerHandle] = None
        if parent is not None:
            parent._children.add(self)  # pylint: disable=protected-access
            if parent.cancelled:
                self.cancel()

    @property
    def cancelled(self) -> bool:
        """Return True if cancellation was requested."""
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation, of self and all children."""
        if self._event.is_set():
            return

        _LOGGER.debug("Cancelling %s", self)
        self._event.set()
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        for child in list(self._children):
            child.cancel()

    def cancel_after(self, delay: float) -> None:
        """Request cancellation after delay seconds."""
        if self._timer is not None:
            self._timer.cancel()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(delay, self.cancel)

    async def wait(self) -> None:
        """Wait until cancellation is requested."""
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        """Raise UpnpCancelledError if cancellation was requested."""
        if self.cancelled:
            raise UpnpCancelledError("Request cancelled")

    def __repr__(self) -> str:
        """To repr."""
        return f"<CancelToken(cancelled={self.cancelled})>"


async def async_wait_cancellable(
    awaitable: Awaitable[T], cancel_token: Optional[CancelToken]
) -> T:
    """
    Await awaitable, unless cancel_token fires first.

    :raise UpnpCancelledError: cancel_token fired before awaitable completed.
    """
    if cancel_token is None:
        return await awaitable

    if cancel_token.cancelled:
        # Not awaited, close coroutines to avoid warnings.
        if asyncio.iscoroutine(awaitable):
            awaitable.close()
        cancel_token.raise_if_cancelled()

    task: "asyncio.Future[T]" = asyncio.ensure_future(awaitable)
    waiter: "asyncio.Future[Any]" = asyncio.ensure_future(cancel_token.wait())
    try:
        await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        waiter.cancel()
        if not task.done():
            task.cancel()

    if task.done() and not task.cancelled():
        return task.result()

    # Let the cancelled task clean up its resources.
    await asyncio.gather(task, return_exceptions=True)
    raise UpnpCancelledError("Request cancelled")
