"""Archive sink module."""

from .sink import FileSink, ISink, SqliteSink, StoredArchive

__all__ = ["ISink", "FileSink", "SqliteSink", "StoredArchive"]
