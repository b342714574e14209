"""Archive store module."""

from .store import ArchiveStore, IArchiveStore

__all__ = ["ArchiveStore", "IArchiveStore"]
