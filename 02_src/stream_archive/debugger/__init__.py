"""Message debugger module."""

from .debugger import MessageDebugger

__all__ = ["MessageDebugger"]
