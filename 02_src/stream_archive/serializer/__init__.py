"""Serializer module."""

from .serializer import (
    deserialize,
    document_from_dict,
    document_to_dict,
    event_from_dict,
    event_to_dict,
    serialize,
)

__all__ = [
    "serialize",
    "deserialize",
    "document_to_dict",
    "document_from_dict",
    "event_to_dict",
    "event_from_dict",
]
