# MIT License © 2025 Motohiro Suzuki
"""
hash_core.errors

Error types raised by the hash_core primitives.
SHA-256 / HMAC are total over bytes; only size ceilings are errors.
"""

from __future__ import annotations


class HashCoreError(Exception):
    pass


class MessageTooLongError(HashCoreError, ValueError):
    """Message bit length does not fit in the 64-bit length field."""


class HkdfLengthError(HashCoreError, ValueError):
    """Requested OKM length is negative or needs more than 255 blocks."""
