"""
Best-effort background dispatch for fire-and-forget calls.
"""

from typing import Awaitable, Set
import asyncio
import logging

logger = logging.getLogger(__name__)


class BestEffortDispatcher:
    """
    Runs awaitables as background tasks.
    No retries; failures are logged and never reach the caller.
    """

    def __init__(self):
        self._pending: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def submit(self, awaitable: Awaitable, description: str = "background call") -> asyncio.Task:
        """Schedule an awaitable on the running loop without waiting for it."""
        task = asyncio.ensure_future(awaitable)
        self._pending.add(task)
        task.add_done_callback(lambda t: self._finished(t, description))
        return task

    def _finished(self, task: asyncio.Task, description: str) -> None:
        self._pending.discard(task)
        if task.cancelled():
            logger.debug(f"{description} cancelled")
            return
        exc = task.exception()
        if exc is not None:
            logger.warning(f"{description} failed: {exc}")

    async def drain(self) -> None:
        """Wait for every in-flight task."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
