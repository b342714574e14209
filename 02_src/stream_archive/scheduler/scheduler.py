"""Periodic auto-export scheduling."""

import asyncio
from typing import Any, Callable, Protocol

from ..logging_config import get_logger
from ..models import ArchiveDocument
from ..tracker import ITracker

logger = get_logger(__name__)


class IExportTarget(Protocol):
    """What the scheduler flushes on each tick."""

    def export_and_reset(
        self, reason: str, skip_empty: bool = False
    ) -> ArchiveDocument | None:
        """Snapshot, serialize, hand to the sink, reset.

        With skip_empty, the emptiness check and the export happen atomically
        and None is returned when nothing was captured.
        """
        ...


class RepeatingTask:
    """Calls a function every `interval` seconds on the running event loop."""

    def __init__(self, interval: float, callback: Callable[[], Any], name: str = "repeating"):
        self._interval = interval
        self._callback = callback
        self._name = name
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start ticking; a previous timer is cancelled first.

        Raises:
            RuntimeError: no event loop is running in this thread.
        """
        loop = asyncio.get_running_loop()
        self.cancel()
        self._task = loop.create_task(self._run(), name=self._name)

    def cancel(self) -> None:
        """Stop ticking. Safe to call when not running."""
        if self._task:
            self._task.cancel()
            self._task = None

    async def _run(self) -> None:
        while True:
            try:
                await asyncio.sleep(self._interval)
                self._callback()
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error("%s tick failed: %s", self._name, e, exc_info=True)


class AutoExportScheduler:
    """Flushes an export target every `interval_ms` milliseconds."""

    def __init__(
        self,
        target: IExportTarget,
        interval_ms: int,
        tracker: ITracker | None = None,
    ):
        self._target = target
        self._interval_ms = interval_ms
        self._tracker = tracker
        self._timer = RepeatingTask(interval_ms / 1000, self.tick, name="auto-export")

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def running(self) -> bool:
        return self._timer.running

    def start(self) -> None:
        """Start (or restart) the export timer."""
        self._timer.start()
        logger.info("Auto-export every %d ms", self._interval_ms)

    def stop(self) -> None:
        """Cancel the export timer."""
        if self._timer.running:
            logger.info("Auto-export stopped")
        self._timer.cancel()

    def tick(self) -> None:
        """Export if anything has been captured since the last export."""
        document = self._target.export_and_reset(reason="scheduled", skip_empty=True)
        if document and self._tracker:
            self._tracker.track(
                event_type="auto_export_tick",
                actor="scheduler",
                data={"message_count": len(document.messages)},
            )
