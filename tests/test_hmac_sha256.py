# MIT License © 2025 Motohiro Suzuki
from __future__ import annotations

import hashlib
import hmac

import pytest

from hash_core.hmac_sha256 import HmacSha256, hmac_sha256, normalize_key, verify_hmac_sha256
from hash_core.sha256 import sha256

# RFC 4231 test cases 1, 2, 3, 6, 7
RFC4231 = [
    (b"\x0b" * 20, b"Hi There", "b0344c61d8db38535ca8afceaf0bf12b881dc200c9833da726e9376c2e32cff7"),
    (b"Jefe", b"what do ya want for nothing?", "5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"),
    (b"\xaa" * 20, b"\xdd" * 50, "773ea91e36800e46854db8ebd09181a72959098b3ef8c122d9635514ced565fe"),
    (
        b"\xaa" * 131,
        b"Test Using Larger Than Block-Size Key - Hash Key First",
        "60e431591ee0b67f0d8a26aacbf5b77f8e0bc6213728c5140546040f0ee37f54",
    ),
    (
        b"\xaa" * 131,
        b"This is a test using a larger than block-size key and a larger than block-size data. "
        b"The key needs to be hashed before being used by the HMAC algorithm.",
        "9b09ffa71b942fcb27635fbcd5b0e944bfdc63644f0713938a7f51535c3a35e2",
    ),
]


@pytest.mark.parametrize("key, msg, expected", RFC4231)
def test_rfc4231(key: bytes, msg: bytes, expected: str) -> None:
    assert hmac_sha256(key, msg).hex() == expected


def test_quick_brown_fox() -> None:
    mac = hmac_sha256(b"key", b"The quick brown fox jumps over the lazy dog")
    assert mac.hex() == "f7bc83f430538424b13298e6aa6fb143ef4d59a14946175997479dbc2d1a3cd8"


@pytest.mark.parametrize("key_len", [0, 1, 32, 63, 64, 65, 128, 200])
@pytest.mark.parametrize("msg_len", [0, 1, 64, 100])
def test_matches_stdlib(key_len: int, msg_len: int) -> None:
    key = bytes((i * 13 + 1) & 0xFF for i in range(key_len))
    msg = bytes((i * 5 + 9) & 0xFF for i in range(msg_len))
    assert hmac_sha256(key, msg) == hmac.new(key, msg, hashlib.sha256).digest()


def test_normalize_key_block_size_is_noop() -> None:
    key = bytes(range(64))
    assert normalize_key(key) == key


def test_normalize_key_short_is_zero_padded() -> None:
    assert normalize_key(b"abc") == b"abc" + b"\x00" * 61
    assert normalize_key(b"") == b"\x00" * 64


def test_normalize_key_long_is_hashed_then_padded() -> None:
    key = b"k" * 65
    assert normalize_key(key) == sha256(key) + b"\x00" * 32


def test_empty_key_equals_zero_block_key() -> None:
    assert hmac_sha256(b"", b"m") == hmac_sha256(b"\x00" * 64, b"m")


def test_incremental_equals_one_shot() -> None:
    m = HmacSha256(b"key")
    m.update(b"The quick brown fox ")
    c = m.copy()
    m.update(b"jumps over the lazy dog")
    assert m.finish() == hmac_sha256(b"key", b"The quick brown fox jumps over the lazy dog")
    assert c.finish() == hmac_sha256(b"key", b"The quick brown fox ")


def test_mac_classmethod_and_digest_size() -> None:
    tag = HmacSha256.mac(b"k", b"m")
    assert len(tag) == HmacSha256.digest_size == 32
    assert tag == hmac_sha256(b"k", b"m")


def test_verify() -> None:
    tag = hmac_sha256(b"k", b"m")
    assert verify_hmac_sha256(b"k", b"m", tag)
    assert not verify_hmac_sha256(b"k", b"m2", tag)
    assert not verify_hmac_sha256(b"k", b"m", tag[:-1])


def test_rejects_str_key() -> None:
    with pytest.raises(TypeError):
        hmac_sha256("key", b"m")  # type: ignore[arg-type]


@pytest.mark.parametrize("message", ["", "m"])
def test_constructor_rejects_str_message_even_when_empty(message: str) -> None:
    with pytest.raises(TypeError):
        HmacSha256(b"k", message)  # type: ignore[arg-type]
