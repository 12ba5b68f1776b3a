"""Fire-and-forget usage tracking.

Usage counters and last-used timestamps are telemetry. Updates run on
detached asyncio tasks that the categorization call never awaits; a failure
is logged and dropped. The number of in-flight updates is capped so a burst
of matches cannot pile up unbounded work.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class UsageTracker:
    """Dispatches best-effort store updates on detached tasks."""

    def __init__(self, max_pending: int = 256):
        self.max_pending = max_pending
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        """Number of updates currently in flight."""
        return len(self._tasks)

    def dispatch(
        self,
        update: Callable[[], Awaitable[None]],
        operation: str,
        **context: object,
    ) -> bool:
        """Schedule ``update()`` without waiting for it.

        Returns False when the update was dropped, either because the cap is
        reached or because no event loop is running.
        """
        if len(self._tasks) >= self.max_pending:
            logger.debug(
                "Usage update dropped, tracker saturated",
                extra={"operation": operation, "pending": len(self._tasks), **context},
            )
            return False

        try:
            task = asyncio.get_running_loop().create_task(self._run(update, operation, context))
        except RuntimeError:
            logger.debug("Usage update dropped, no running event loop", extra={"operation": operation})
            return False

        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return True

    async def _run(
        self,
        update: Callable[[], Awaitable[None]],
        operation: str,
        context: dict[str, object],
    ) -> None:
        try:
            await update()
        except Exception as e:
            logger.warning(
                "Usage update failed: %s",
                e,
                extra={"operation": operation, **context},
            )

    async def drain(self) -> None:
        """Wait for every in-flight update to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def cancel_all(self) -> None:
        """Cancel in-flight updates (used on shutdown)."""
        for task in list(self._tasks):
            task.cancel()
