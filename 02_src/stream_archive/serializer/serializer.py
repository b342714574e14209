"""JSON serialization of export documents.

Wire format::

    {
      "metadata": {"roomNum", "roomId", "startTime", "endTime"?, "messageCount",
                   "version"},
      "messages": [{"timestamp", "method", "msgId", "displayId"?, "payload",
                    "decoded"?}, ...]
    }

Optional keys are omitted when absent and come back as None.
"""

import base64
import dataclasses
import json
from typing import Any

from ..errors import ParseError
from ..models import ArchiveDocument, ArchiveMetadata, CapturedEvent


def _json_default(value: Any) -> Any:
    """Fallback for values found in decoded copies."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    return str(value)


def event_to_dict(event: CapturedEvent) -> dict[str, Any]:
    """Convert a CapturedEvent to its wire dict."""
    data: dict[str, Any] = {
        "timestamp": event.timestamp,
        "method": event.method,
        "msgId": event.msg_id,
    }
    if event.display_id is not None:
        data["displayId"] = event.display_id
    data["payload"] = event.payload
    if event.decoded is not None:
        data["decoded"] = event.decoded
    return data


def document_to_dict(document: ArchiveDocument) -> dict[str, Any]:
    """Convert an ArchiveDocument to a JSON-compatible tree."""
    meta = document.metadata
    metadata: dict[str, Any] = {
        "roomNum": meta.room_num,
        "roomId": meta.room_id,
        "startTime": meta.start_time,
    }
    if meta.end_time is not None:
        metadata["endTime"] = meta.end_time
    metadata["messageCount"] = meta.message_count
    metadata["version"] = meta.version

    return {
        "metadata": metadata,
        "messages": [event_to_dict(event) for event in document.messages],
    }


def serialize(document: ArchiveDocument, indent: int | None = 2) -> str:
    """Serialize an export document to JSON text."""
    return json.dumps(
        document_to_dict(document),
        indent=indent,
        ensure_ascii=False,
        default=_json_default,
    )


def _require(data: dict, key: str, types: tuple[type, ...], where: str) -> Any:
    if key not in data:
        raise ParseError(f"{where}: missing field {key!r}")
    return _optional(data, key, types, where)


def _optional(data: dict, key: str, types: tuple[type, ...], where: str) -> Any:
    value = data.get(key)
    if value is None:
        return None
    # bool is an int subclass; never accept it as a number
    if isinstance(value, bool) and bool not in types:
        raise ParseError(f"{where}: field {key!r} has invalid type bool")
    if not isinstance(value, types):
        raise ParseError(
            f"{where}: field {key!r} has invalid type {type(value).__name__}"
        )
    return value


_NUMBER = (int, float)


def metadata_from_dict(data: Any) -> ArchiveMetadata:
    """Build ArchiveMetadata from its wire dict."""
    if not isinstance(data, dict):
        raise ParseError("metadata must be an object")

    where = "metadata"
    room_num = _require(data, "roomNum", (str, int), where)
    room_id = _require(data, "roomId", (str, int), where)
    start_time = _require(data, "startTime", _NUMBER, where)
    message_count = _require(data, "messageCount", (int,), where)
    version = _require(data, "version", (str,), where)
    if None in (room_num, room_id, start_time, message_count, version):
        raise ParseError(f"{where}: required field is null")

    return ArchiveMetadata(
        room_num=str(room_num),
        room_id=str(room_id),
        start_time=start_time,
        end_time=_optional(data, "endTime", _NUMBER, where),
        message_count=message_count,
        version=version,
    )


def event_from_dict(data: Any, index: int = 0) -> CapturedEvent:
    """Build a CapturedEvent from its wire dict."""
    where = f"messages[{index}]"
    if not isinstance(data, dict):
        raise ParseError(f"{where} must be an object")

    timestamp = _require(data, "timestamp", _NUMBER, where)
    method = _require(data, "method", (str,), where)
    msg_id = _require(data, "msgId", (str, int), where)
    payload = _require(data, "payload", (str,), where)
    if None in (timestamp, method, msg_id, payload):
        raise ParseError(f"{where}: required field is null")

    decoded = _optional(data, "decoded", (dict,), where)
    return CapturedEvent(
        timestamp=timestamp,
        method=method,
        msg_id=str(msg_id),
        payload=payload,
        display_id=_optional(data, "displayId", (str,), where),
        decoded=decoded,
    )


def document_from_dict(data: Any) -> ArchiveDocument:
    """Build an ArchiveDocument from a JSON-compatible tree."""
    if not isinstance(data, dict):
        raise ParseError("export document must be an object")
    if "metadata" not in data:
        raise ParseError("export document has no metadata")

    metadata = metadata_from_dict(data["metadata"])

    messages = data.get("messages", [])
    if not isinstance(messages, list):
        raise ParseError("messages must be an array")

    return ArchiveDocument(
        metadata=metadata,
        messages=[event_from_dict(item, i) for i, item in enumerate(messages)],
    )


def deserialize(text: str | bytes) -> ArchiveDocument:
    """Parse JSON text into an export document.

    Raises:
        ParseError: text is not JSON or does not have the document shape.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
        raise ParseError(f"invalid export document: {e}") from e
    return document_from_dict(data)
