"""Archive analysis module."""

from .analyzer import analyze, format_report

__all__ = ["analyze", "format_report"]
