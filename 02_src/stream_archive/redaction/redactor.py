"""Field allow-listing for decoded message copies."""

from collections.abc import Mapping, Sequence
from typing import Any

# Fields kept when storing decoded copies in an archive
ARCHIVE_FIELDS: tuple[str, ...] = (
    "common",
    "user",
    "content",
    "gift",
    "count",
    "total",
    "memberCount",
    "followCount",
    "action",
    "status",
    "fansLevel",
    "fansClubName",
    "title",
    "describe",
)

# The debugger also keeps banner/effect fields
DEBUG_FIELDS: tuple[str, ...] = ARCHIVE_FIELDS + ("bannerId", "effectId", "effectType")

_MISSING = object()


def _lookup(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name, _MISSING)
    value = getattr(obj, name, _MISSING)
    # Methods are not data fields
    if callable(value):
        return _MISSING
    return value


def redact(
    obj: Any, fields: tuple[str, ...] = ARCHIVE_FIELDS
) -> dict[str, Any] | None:
    """Reduce obj to the allow-listed fields it actually carries.

    Works on mappings and on plain objects (attribute lookup). Matching is
    case-sensitive and output keys follow the allow-list order. A present key
    whose value is None is kept. Strings and sequences carry no fields.
    """
    if obj is None:
        return None
    if isinstance(obj, (str, bytes, bytearray, Sequence)):
        return {}

    simplified: dict[str, Any] = {}
    for name in fields:
        value = _lookup(obj, name)
        if value is not _MISSING:
            simplified[name] = value
    return simplified
