"""SIM implementation - synthetic live feed for the capture API."""

import asyncio
import os
import random
import uuid
from typing import Protocol

import httpx

from stream_archive.codec import encode
from stream_archive.logging_config import get_logger
from stream_archive.tracker import ITracker

logger = get_logger(__name__)

# (method, weight, carries a user)
FEED_METHODS = [
    ("WebcastChatMessage", 50, True),
    ("WebcastMemberMessage", 20, True),
    ("WebcastLikeMessage", 15, True),
    ("WebcastGiftMessage", 8, True),
    ("WebcastRoomUserSeqMessage", 5, False),
    ("WebcastRoomRankMessage", 2, False),
]

VIRTUAL_USERS = ["user_001", "user_002", "user_003", "user_004"]


class ISim(Protocol):
    """Generate a synthetic live feed."""

    async def start(self) -> None:
        """Start posting frames."""
        ...

    async def stop(self) -> None:
        """Stop posting frames."""
        ...


class Sim:
    """Posts random frames to /api/capture at random intervals."""

    def __init__(
        self,
        api_url: str = "http://localhost:8000",
        tracker: ITracker | None = None,
        frame_count: int = 200,
        max_gap: float = 0.5,
    ):
        self._api_url = api_url
        self._tracker = tracker
        self._frame_count = frame_count
        self._max_gap = max_gap
        self._running = False
        self._task: asyncio.Task | None = None
        self._client: httpx.AsyncClient | None = None

    def set_tracker(self, tracker: ITracker) -> None:
        """Inject tracker for SIM trace events."""
        self._tracker = tracker

    async def start(self) -> None:
        """Start posting frames."""
        if self._running:
            return

        self._running = True
        self._client = httpx.AsyncClient()
        self._task = asyncio.create_task(self._run_feed())

    async def stop(self) -> None:
        """Stop posting frames."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        if self._client:
            await self._client.aclose()
            self._client = None

    def make_frame(self) -> dict:
        """Build one random capture request body."""
        weights = [m[1] for m in FEED_METHODS]
        index = random.choices(range(len(FEED_METHODS)), weights=weights)[0]
        method, _, has_user = FEED_METHODS[index]

        raw = os.urandom(random.randint(0, 256))
        frame = {
            "method": method,
            "msg_id": str(uuid.uuid4()),
            "payload": encode(raw),
            "decoded": {"count": random.randint(1, 10), "noise": "dropped"},
            "processed": method != "WebcastRoomRankMessage",
        }
        if has_user:
            frame["display_id"] = random.choice(VIRTUAL_USERS)
        return frame

    async def _run_feed(self) -> None:
        sent = 0
        try:
            if self._tracker:
                self._tracker.track(
                    "sim_started", "sim", {"frame_count": self._frame_count}
                )

            while self._running and sent < self._frame_count:
                await self._send_frame(self.make_frame())
                sent += 1
                await asyncio.sleep(random.uniform(0, self._max_gap))

        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error("SIM feed error: %s", e)
        finally:
            if self._tracker:
                self._tracker.track("sim_completed", "sim", {"sent": sent})

    async def _send_frame(self, frame: dict) -> None:
        """Post a frame via HTTP API."""
        if not self._client:
            return

        try:
            response = await self._client.post(
                f"{self._api_url}/api/capture",
                json=frame,
                timeout=10.0,
            )

            if response.status_code == 200:
                logger.debug("SIM: %s -> %s", frame["method"], response.json())
            else:
                logger.error("SIM: Error sending frame: %s", response.status_code)

        except httpx.HTTPError as e:
            logger.error("SIM: Failed to send frame: %s", e)
