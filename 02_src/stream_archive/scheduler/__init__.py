"""Auto-export scheduler module."""

from .scheduler import AutoExportScheduler, IExportTarget, RepeatingTask

__all__ = ["AutoExportScheduler", "IExportTarget", "RepeatingTask"]
