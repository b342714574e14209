"""Field redaction module."""

from .redactor import ARCHIVE_FIELDS, DEBUG_FIELDS, redact

__all__ = ["redact", "ARCHIVE_FIELDS", "DEBUG_FIELDS"]
