"""Replay engine module."""

from .engine import (
    ReplayHandler,
    ReplayResult,
    ReplaySession,
    extract_payload,
    replay,
    replay_json,
)

__all__ = [
    "ReplayHandler",
    "ReplayResult",
    "ReplaySession",
    "extract_payload",
    "replay",
    "replay_json",
]
