# MIT License © 2025 Motohiro Suzuki
"""
hash_core/sha256.py

SHA-256 (FIPS 180-4), pure Python, no hashlib.

Pipeline:
- pad_message(): 0x80 || zeros || 64-bit big-endian bit length
- split into 64-byte blocks, processed strictly in order
- compress(): 64-word schedule + 64 rounds, folded into the chaining state

Sha256Hasher is incremental (update/finish) so HMAC can stream key pad and
message through one object. Length ceiling: total input must be < 2**64 bits.
"""

from __future__ import annotations

import struct
from typing import Tuple

from hash_core.errors import MessageTooLongError

DIGEST_SIZE = 32
BLOCK_SIZE = 64

MASK_32 = 0xFFFFFFFF
MAX_BIT_LENGTH = (1 << 64) - 1

_BLOCK_WORDS = struct.Struct(">16I")
_STATE_WORDS = struct.Struct(">8I")
_BIT_LENGTH = struct.Struct(">Q")

State = Tuple[int, int, int, int, int, int, int, int]

# FIPS 180-4 5.3.3: square roots of the first 8 primes
INITIAL_STATE: State = (
    0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
    0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
)

# FIPS 180-4 4.2.2: cube roots of the first 64 primes
K: Tuple[int, ...] = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5, 0x3956C25B, 0x59F111F1, 0x923F82A4, 0xAB1C5ED5,
    0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3, 0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174,
    0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC, 0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7, 0xC6E00BF3, 0xD5A79147, 0x06CA6351, 0x14292967,
    0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13, 0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3, 0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5, 0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F, 0x682E6FF3,
    0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208, 0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & MASK_32


def _small_sigma0(x: int) -> int:
    return _rotr(x, 7) ^ _rotr(x, 18) ^ (x >> 3)


def _small_sigma1(x: int) -> int:
    return _rotr(x, 17) ^ _rotr(x, 19) ^ (x >> 10)


def _big_sigma0(x: int) -> int:
    return _rotr(x, 2) ^ _rotr(x, 13) ^ _rotr(x, 22)


def _big_sigma1(x: int) -> int:
    return _rotr(x, 6) ^ _rotr(x, 11) ^ _rotr(x, 25)


def _ch(x: int, y: int, z: int) -> int:
    return (x & y) ^ (~x & z & MASK_32)


def _maj(x: int, y: int, z: int) -> int:
    return (x & y) ^ (x & z) ^ (y & z)


def _require_bytes(name: str, data: object) -> bytes:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be bytes")
    return bytes(data)


def encode_bit_length(bit_length: int) -> bytes:
    """64-bit big-endian length field appended by the padding step."""
    if bit_length < 0:
        raise ValueError("bit_length must be >= 0")
    if bit_length > MAX_BIT_LENGTH:
        raise MessageTooLongError(f"message of {bit_length} bits exceeds the 64-bit length field")
    return _BIT_LENGTH.pack(bit_length)


def pad_message(message: bytes, bit_length: int | None = None) -> bytes:
    """
    Return `message` padded to a multiple of BLOCK_SIZE.

    `bit_length` defaults to the length of `message`; the incremental hasher
    passes the total stream length while handing over only the unprocessed tail.
    """
    message = _require_bytes("message", message)
    if bit_length is None:
        bit_length = len(message) * 8

    zeros = (BLOCK_SIZE - 9 - len(message)) % BLOCK_SIZE
    padded = message + b"\x80" + b"\x00" * zeros + encode_bit_length(bit_length)

    assert len(padded) % BLOCK_SIZE == 0, f"padded length {len(padded)} is not a multiple of {BLOCK_SIZE}"
    return padded


def message_schedule(block: bytes) -> list[int]:
    """Expand one 64-byte block into the 64-word message schedule."""
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"block must be {BLOCK_SIZE} bytes, got {len(block)}")

    w = list(_BLOCK_WORDS.unpack(block))
    for i in range(16, 64):
        w.append((w[i - 16] + _small_sigma0(w[i - 15]) + w[i - 7] + _small_sigma1(w[i - 2])) & MASK_32)
    return w


def compress(state: State, block: bytes) -> State:
    """Fold one block into the chaining state (FIPS 180-4 6.2.2)."""
    w = message_schedule(block)
    a, b, c, d, e, f, g, h = state

    for i in range(64):
        t1 = (h + _big_sigma1(e) + _ch(e, f, g) + K[i] + w[i]) & MASK_32
        t2 = (_big_sigma0(a) + _maj(a, b, c)) & MASK_32
        h = g
        g = f
        f = e
        e = (d + t1) & MASK_32
        d = c
        c = b
        b = a
        a = (t1 + t2) & MASK_32

    return tuple((x + y) & MASK_32 for x, y in zip(state, (a, b, c, d, e, f, g, h)))  # type: ignore[return-value]


class Sha256Hasher:
    """
    Incremental SHA-256.

        h = Sha256Hasher()
        h.update(b"ab")
        h.update(b"c")
        h.finish()  # 32 bytes

    finish() does not consume the object; more data may be fed afterwards.
    Instances are not meant to be shared between threads.
    """

    name = "sha256"
    digest_size = DIGEST_SIZE
    block_size = BLOCK_SIZE

    def __init__(self, data: bytes = b"") -> None:
        self._state: State = INITIAL_STATE
        self._buf = b""
        self._length = 0
        self.update(data)

    def update(self, data: bytes) -> "Sha256Hasher":
        data = _require_bytes("data", data)
        if (self._length + len(data)) * 8 > MAX_BIT_LENGTH:
            raise MessageTooLongError("total input exceeds 2**64 - 1 bits")

        self._length += len(data)
        buf = self._buf + data

        full = len(buf) - (len(buf) % BLOCK_SIZE)
        state = self._state
        for off in range(0, full, BLOCK_SIZE):
            state = compress(state, buf[off : off + BLOCK_SIZE])

        self._state = state
        self._buf = buf[full:]
        return self

    def finish(self) -> bytes:
        state = self._state
        tail = pad_message(self._buf, bit_length=self._length * 8)
        for off in range(0, len(tail), BLOCK_SIZE):
            state = compress(state, tail[off : off + BLOCK_SIZE])
        return _STATE_WORDS.pack(*state)

    digest = finish

    def hexdigest(self) -> str:
        return self.finish().hex()

    def copy(self) -> "Sha256Hasher":
        other = Sha256Hasher()
        other._state = self._state
        other._buf = self._buf
        other._length = self._length
        return other

    @classmethod
    def hash(cls, message: bytes) -> bytes:
        """One-shot digest: pad once, then fold every block in order."""
        padded = pad_message(message)
        state = INITIAL_STATE
        for off in range(0, len(padded), BLOCK_SIZE):
            state = compress(state, padded[off : off + BLOCK_SIZE])
        return _STATE_WORDS.pack(*state)


def sha256(message: bytes) -> bytes:
    return Sha256Hasher.hash(message)
