"""Timed replay of export documents."""

import asyncio
import inspect
import math
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from ..codec import decode
from ..errors import MalformedEncodingError, PreconditionError
from ..logging_config import get_logger
from ..models import ArchiveDocument, CapturedEvent
from ..serializer import deserialize
from ..tracker import ITracker

logger = get_logger(__name__)

ReplayHandler = Callable[[CapturedEvent, bytes], Awaitable[None] | None]
SleepFunc = Callable[[float], Awaitable[Any]]

# Log progress every N dispatched events
PROGRESS_EVERY = 100


@dataclass
class ReplayResult:
    """Outcome of one replay run."""

    total: int
    delivered: int = 0
    skipped: int = 0
    cancelled: bool = False


def extract_payload(event: CapturedEvent) -> bytes:
    """Raw frame bytes of an archived event."""
    return decode(event.payload)


def _check_speed(speed: float) -> float:
    if isinstance(speed, bool) or not isinstance(speed, (int, float)):
        raise PreconditionError(f"speed must be a number, got {speed!r}")
    if not math.isfinite(speed) or speed <= 0:
        raise PreconditionError(f"speed must be positive and finite, got {speed!r}")
    return float(speed)


class ReplaySession:
    """Replays one document, reproducing the gaps between events.

    The first event is delivered at once. Each following event waits
    (timestamp - previous timestamp) / speed seconds; zero or negative gaps
    are delivered immediately, in document order. cancel() stops the session
    at the next event boundary.
    """

    def __init__(
        self,
        document: ArchiveDocument,
        handler: ReplayHandler,
        speed: float = 1.0,
        tracker: ITracker | None = None,
        sleep: SleepFunc | None = None,
    ):
        self._document = document
        self._handler = handler
        self._speed = _check_speed(speed)
        self._tracker = tracker
        self._sleep = sleep or self._interruptible_sleep
        self._cancelled = asyncio.Event()
        self._result = ReplayResult(total=len(document.messages))
        self._started = False

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def result(self) -> ReplayResult:
        return self._result

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Stop before the next event; wakes a pending delay."""
        self._cancelled.set()

    async def run(self) -> ReplayResult:
        """Dispatch every event in order. A session runs only once."""
        if self._started:
            raise RuntimeError("ReplaySession already started")
        self._started = True

        messages = self._document.messages
        metadata = self._document.metadata
        logger.info(
            "Replaying room %s: %d messages (%s - %s)",
            metadata.room_num,
            len(messages),
            metadata.start_time,
            metadata.end_time if metadata.end_time is not None else "in progress",
        )
        self._track("replay_started", {"total": len(messages), "speed": self._speed})

        for i, event in enumerate(messages):
            if i > 0:
                delay_ms = (event.timestamp - messages[i - 1].timestamp) / self._speed
                if delay_ms > 0 and not self.cancelled:
                    await self._sleep(delay_ms / 1000)

            if self.cancelled:
                self._result.cancelled = True
                break

            await self._dispatch(i, event)

            if (i + 1) % PROGRESS_EVERY == 0:
                logger.info("Replay progress: %d/%d", i + 1, len(messages))

        if self._result.cancelled:
            logger.info(
                "Replay cancelled after %d/%d messages",
                self._result.delivered,
                self._result.total,
            )
        else:
            logger.info("Replay completed")
        self._track(
            "replay_cancelled" if self._result.cancelled else "replay_completed",
            {
                "total": self._result.total,
                "delivered": self._result.delivered,
                "skipped": self._result.skipped,
            },
        )
        return self._result

    async def _dispatch(self, index: int, event: CapturedEvent) -> None:
        try:
            payload = extract_payload(event)
        except MalformedEncodingError as e:
            logger.warning("Skipping message %d (%s): %s", index, event.method, e)
            self._result.skipped += 1
            self._track(
                "replay_event_skipped",
                {"index": index, "method": event.method, "error": str(e)},
            )
            return

        result = self._handler(event, payload)
        if inspect.isawaitable(result):
            await result
        self._result.delivered += 1

    async def _interruptible_sleep(self, seconds: float) -> None:
        try:
            await asyncio.wait_for(self._cancelled.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            pass

    def _track(self, event_type: str, data: dict[str, Any]) -> None:
        if self._tracker:
            self._tracker.track(event_type=event_type, actor="replay", data=data)


async def replay(
    document: ArchiveDocument,
    on_event: ReplayHandler,
    speed: float = 1.0,
    tracker: ITracker | None = None,
) -> ReplayResult:
    """Replay a document with its recorded cadence scaled by speed."""
    return await ReplaySession(document, on_event, speed=speed, tracker=tracker).run()


async def replay_json(
    text: str,
    on_event: ReplayHandler,
    speed: float = 1.0,
    tracker: ITracker | None = None,
) -> ReplayResult:
    """Parse an export document and replay it.

    A malformed document raises ParseError before any event is dispatched.
    """
    session = ReplaySession(deserialize(text), on_event, speed=speed, tracker=tracker)
    return await session.run()
