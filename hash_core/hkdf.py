# MIT License © 2025 Motohiro Suzuki
"""
hash_core/hkdf.py

HKDF-SHA256 (RFC 5869) over hash_core.hmac_sha256.

- extract: PRK = HMAC(salt, IKM); empty salt -> HASH_LEN zero bytes
- expand : T(i) = HMAC(PRK, T(i-1) || info || i), i = 1..N (N <= 255)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from hash_core.errors import HkdfLengthError
from hash_core.hmac_sha256 import hmac_sha256
from hash_core.sha256 import DIGEST_SIZE

logger = logging.getLogger(__name__)

HASH_LEN = DIGEST_SIZE
MAX_BLOCKS = 255
MAX_OKM_LENGTH = MAX_BLOCKS * HASH_LEN


def _as_bytes(name: str, value: object) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be bytes")
    return bytes(value)


def hkdf_extract(salt: bytes | None, ikm: bytes) -> bytes:
    if salt is None:
        salt = b""
    salt = _as_bytes("salt", salt)
    ikm = _as_bytes("ikm", ikm)

    if not salt:
        salt = b"\x00" * HASH_LEN
    return hmac_sha256(salt, ikm)


def _block_count(length: int) -> int:
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError("length must be int")
    if length < 0:
        raise HkdfLengthError(f"length must be >= 0, got {length}")

    n = (length + HASH_LEN - 1) // HASH_LEN
    if n > MAX_BLOCKS:
        logger.warning("rejected HKDF request: %d bytes needs %d blocks (max %d)", length, n, MAX_BLOCKS)
        raise HkdfLengthError(f"length {length} exceeds HKDF maximum of {MAX_OKM_LENGTH} bytes")
    return n


def hkdf_expand(prk: bytes, info: bytes | None, length: int) -> bytes:
    prk = _as_bytes("prk", prk)
    info = _as_bytes("info", b"" if info is None else info)
    n = _block_count(length)

    logger.debug("HKDF expand: length=%d blocks=%d", length, n)

    okm = bytearray()
    t = b""
    for i in range(1, n + 1):
        t = hmac_sha256(prk, t + info + bytes([i]))
        okm.extend(t)
    return bytes(okm[:length])


def hkdf(length: int, ikm: bytes, salt: bytes | None = b"", info: bytes | None = b"") -> bytes:
    """
    Derive `length` bytes of output keying material.

    Raises HkdfLengthError for negative lengths or lengths above
    MAX_OKM_LENGTH (8160 bytes); nothing is computed in that case.
    """
    _block_count(length)  # reject before extract
    prk = hkdf_extract(salt, ikm)
    return hkdf_expand(prk, info, length)


@dataclass(frozen=True)
class Hkdf:
    """
    Reusable derivation context: salt and info fixed, IKM supplied per call.

        kdf = Hkdf(salt=b"...", info=b"session")
        key = kdf.derive(32, ikm)
    """
    salt: bytes | None = b""
    info: bytes | None = b""

    def __post_init__(self) -> None:
        # None means empty, as in hkdf_extract / hkdf_expand
        object.__setattr__(self, "salt", _as_bytes("salt", b"" if self.salt is None else self.salt))
        object.__setattr__(self, "info", _as_bytes("info", b"" if self.info is None else self.info))

    def extract(self, ikm: bytes) -> bytes:
        return hkdf_extract(self.salt, ikm)

    def derive(self, length: int, ikm: bytes) -> bytes:
        return hkdf(length, ikm, self.salt, self.info)
