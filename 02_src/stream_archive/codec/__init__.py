"""Binary codec module."""

from .codec import decode, encode

__all__ = ["encode", "decode"]
