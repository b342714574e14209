"""Reversible binary <-> text codec for archived payloads.

Payloads are stored as standard base64 (RFC 4648, with padding) so that arbitrary
frames embed safely in a JSON document.
"""

import base64
import binascii

from ..errors import MalformedEncodingError


def encode(data: bytes | bytearray | memoryview) -> str:
    """Encode raw bytes to base64 text."""
    return base64.b64encode(bytes(data)).decode("ascii")


def decode(text: str) -> bytes:
    """Decode base64 text back to raw bytes.

    Raises:
        MalformedEncodingError: text contains characters outside the base64
            alphabet (whitespace included) or has invalid padding.
    """
    if not isinstance(text, str):
        raise MalformedEncodingError(
            f"payload must be text, got {type(text).__name__}"
        )
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedEncodingError(f"invalid base64 payload: {e}") from e
