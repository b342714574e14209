"""MessageDebugger: per-method statistics of live messages."""

import json
from dataclasses import asdict
from typing import Any, Callable

from ..clock import now_ms
from ..logging_config import get_logger
from ..models import MessageSample, MessageStat
from ..redaction import DEBUG_FIELDS, redact
from ..tracker import ITracker

logger = get_logger(__name__)


class MessageDebugger:
    """Counts messages per method and keeps a few redacted samples of each."""

    def __init__(
        self,
        enabled: bool = False,
        max_samples: int = 3,
        tracker: ITracker | None = None,
        clock: Callable[[], int] = now_ms,
    ):
        self._enabled = enabled
        self._max_samples = max_samples
        self._tracker = tracker
        self._clock = clock
        self._stats: dict[str, MessageStat] = {}

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        self._enabled = True
        logger.info("Message debugger enabled")

    def disable(self) -> None:
        self._enabled = False
        logger.info("Message debugger disabled")

    def record(self, method: str, message: Any, processed: bool = False) -> None:
        """Count one message; unprocessed methods are reported."""
        if not self._enabled:
            return

        now = self._clock()
        stat = self._stats.get(method)
        if stat is None:
            stat = MessageStat(method=method, count=0, last_seen=now)
            self._stats[method] = stat

        stat.count += 1
        stat.last_seen = now

        simplified = redact(message, DEBUG_FIELDS)
        if len(stat.samples) < self._max_samples:
            stat.samples.append(
                MessageSample(timestamp=now, data=simplified, processed=processed)
            )

        if not processed:
            logger.warning(
                "Unprocessed message type: %s",
                method,
                extra={"context": simplified},
            )
            if self._tracker:
                self._tracker.track(
                    event_type="unprocessed_message",
                    actor="debugger",
                    data={"method": method, "count": stat.count},
                )

    def get_stats(self) -> list[MessageStat]:
        """All stats, most frequent method first."""
        return sorted(self._stats.values(), key=lambda s: -s.count)

    def get_unprocessed_types(self) -> list[str]:
        """Methods with at least one unprocessed sample."""
        return [
            stat.method
            for stat in self.get_stats()
            if any(not sample.processed for sample in stat.samples)
        ]

    def get_samples(self, method: str) -> list[dict[str, Any] | None]:
        stat = self._stats.get(method)
        return [sample.data for sample in stat.samples] if stat else []

    def clear(self) -> None:
        self._stats.clear()
        logger.info("Message debugger stats cleared")

    def export_json(self) -> str:
        """Stats as a JSON document."""
        data = {
            "timestamp": self._clock(),
            "stats": [asdict(stat) for stat in self.get_stats()],
        }
        return json.dumps(data, indent=2, ensure_ascii=False, default=str)

    def format_report(self) -> list[str]:
        """Render the stats as text lines, unprocessed types listed last."""
        stats = self.get_stats()
        lines = [
            "Message statistics",
            f"Message types: {len(stats)}",
            "Distribution:",
        ]
        for rank, stat in enumerate(stats, start=1):
            status = "ok" if any(s.processed for s in stat.samples) else "--"
            lines.append(f"{rank}. [{status}] {stat.method}: {stat.count}")

        lines.append("Unprocessed types:")
        unprocessed = [
            stat for stat in stats if any(not s.processed for s in stat.samples)
        ]
        if not unprocessed:
            lines.append("none")
        for rank, stat in enumerate(unprocessed, start=1):
            sample = stat.samples[0].data if stat.samples else None
            lines.append(f"{rank}. {stat.method} ({stat.count}) sample: {sample}")
        return lines
