"""
Cancellation and deadline signal for a distribution run.
"""
import asyncio
import time
from typing import Awaitable, Optional, TypeVar

from distributor.errors import CancelledError

T = TypeVar("T")


class Cancellation:
    """
    Cancellation flag plus an optional deadline.

    One instance is threaded through a whole run. Waits and chain calls made
    through sleep() and run() end early as soon as cancel() is called or
    the deadline passes.
    """

    def __init__(self, deadline_seconds: Optional[float] = None):
        self._event = asyncio.Event()
        self._deadline: Optional[float] = None
        if deadline_seconds is not None:
            self._deadline = time.monotonic() + deadline_seconds

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set() or self._expired()

    def remaining(self) -> Optional[float]:
        """Seconds until the deadline, or None without a deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CancelledError("cancelled")
        if self._expired():
            raise CancelledError("deadline exceeded")

    async def run(self, awaitable: Awaitable[T]) -> T:
        """
        Await `awaitable`, giving up as soon as cancelled or past the deadline.

        The awaitable is cancelled if it loses the race. If the signal has
        already fired it is never started.

        Raises:
            CancelledError: If cancelled or the deadline passes first
        """
        if self.cancelled:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            self.raise_if_cancelled()

        task = asyncio.ensure_future(awaitable)
        signal = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait(
                {task, signal},
                timeout=self.remaining(),
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            signal.cancel()
            if not task.done():
                task.cancel()

        if task in done:
            return task.result()

        self.raise_if_cancelled()
        raise CancelledError("deadline exceeded")

    async def sleep(self, seconds: float) -> None:
        """
        Sleep for up to `seconds`.

        Raises:
            CancelledError: If cancelled or the deadline passes before the sleep ends
        """
        self.raise_if_cancelled()
        timeout = seconds
        remaining = self.remaining()
        if remaining is not None and remaining < timeout:
            timeout = remaining

        try:
            await asyncio.wait_for(self._event.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            pass

        self.raise_if_cancelled()

    def _expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline
