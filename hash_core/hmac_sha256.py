# MIT License © 2025 Motohiro Suzuki
"""
hash_core/hmac_sha256.py

HMAC-SHA256 (RFC 2104) over hash_core.sha256:

    HMAC(K, m) = H((K0 ^ opad) || H((K0 ^ ipad) || m))

K0 is the key normalized to the 64-byte block size.
"""

from __future__ import annotations

import hmac

from hash_core.sha256 import BLOCK_SIZE, DIGEST_SIZE, Sha256Hasher, sha256

_IPAD = 0x36
_OPAD = 0x5C


def normalize_key(key: bytes) -> bytes:
    """
    Bring `key` to exactly BLOCK_SIZE bytes:
    - longer than a block: hashed first, then zero-padded
    - shorter: zero-padded on the right
    - exactly a block: unchanged
    """
    if not isinstance(key, (bytes, bytearray, memoryview)):
        raise TypeError("key must be bytes")
    key = bytes(key)

    if len(key) > BLOCK_SIZE:
        key = sha256(key)
    if len(key) < BLOCK_SIZE:
        key = key + b"\x00" * (BLOCK_SIZE - len(key))
    return key


def _xor_pad(key: bytes, pad: int) -> bytes:
    return bytes(b ^ pad for b in key)


class HmacSha256:
    """Incremental HMAC-SHA256; mirrors Sha256Hasher's update/finish interface."""

    name = "hmac-sha256"
    digest_size = DIGEST_SIZE
    block_size = BLOCK_SIZE

    def __init__(self, key: bytes, message: bytes = b"") -> None:
        k0 = normalize_key(key)
        self._outer_pad = _xor_pad(k0, _OPAD)
        self._inner = Sha256Hasher(_xor_pad(k0, _IPAD))
        self.update(message)

    def update(self, message: bytes) -> "HmacSha256":
        self._inner.update(message)
        return self

    def finish(self) -> bytes:
        return sha256(self._outer_pad + self._inner.finish())

    digest = finish

    def hexdigest(self) -> str:
        return self.finish().hex()

    def copy(self) -> "HmacSha256":
        other = HmacSha256.__new__(HmacSha256)
        other._outer_pad = self._outer_pad
        other._inner = self._inner.copy()
        return other

    @classmethod
    def mac(cls, key: bytes, message: bytes) -> bytes:
        return cls(key, message).finish()


def hmac_sha256(key: bytes, message: bytes) -> bytes:
    return HmacSha256.mac(key, message)


def verify_hmac_sha256(key: bytes, message: bytes, tag: bytes) -> bool:
    if not isinstance(tag, (bytes, bytearray, memoryview)):
        raise TypeError("tag must be bytes")
    return hmac.compare_digest(hmac_sha256(key, message), bytes(tag))
