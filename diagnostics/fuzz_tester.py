# MIT License © 2025 Motohiro Suzuki
"""
diagnostics/fuzz_tester.py

Differential fuzz (ALWAYS prints results):
- sha256       vs hashlib.sha256
- hmac_sha256  vs hmac.new(..., hashlib.sha256)
- hkdf         vs cryptography's HKDF

Message lengths are biased toward the padding boundaries (55/56/63/64 mod 64)
and key lengths toward the HMAC block size. Exit code is 1 on any mismatch.

Run:
  python3 -m diagnostics.fuzz_tester
  python3 -m diagnostics.fuzz_tester --iters 2000 --seed 1
"""

from __future__ import annotations

import argparse
import hashlib
import hmac
import logging
import random
import sys
from dataclasses import dataclass, field
from typing import List

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from diagnostics.config import DiagnosticsConfig
from diagnostics.logging_config import setup_logging
from hash_core.hkdf import MAX_OKM_LENGTH, hkdf
from hash_core.hmac_sha256 import hmac_sha256
from hash_core.sha256 import BLOCK_SIZE, sha256

logger = logging.getLogger(__name__)

_BOUNDARY_OFFSETS = (0, 1, 54, 55, 56, 57, 63)


@dataclass
class FuzzStats:
    iters: int = 0
    sha256_ok: int = 0
    hmac_ok: int = 0
    hkdf_ok: int = 0
    mismatches: List[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return bool(self.mismatches)


def _rand_len(rng: random.Random, limit: int) -> int:
    if rng.random() < 0.5:
        return rng.randrange(0, 4) * BLOCK_SIZE + rng.choice(_BOUNDARY_OFFSETS)
    return rng.randint(0, limit)


def _rand_bytes(rng: random.Random, n: int) -> bytes:
    return bytes(rng.getrandbits(8) for _ in range(n))


def reference_hkdf(length: int, ikm: bytes, salt: bytes, info: bytes) -> bytes:
    kdf = HKDF(algorithm=hashes.SHA256(), length=length, salt=salt or None, info=info)
    return kdf.derive(ikm)


def fuzz_sha256(stats: FuzzStats, rng: random.Random, iters: int) -> None:
    for _ in range(iters):
        stats.iters += 1
        msg = _rand_bytes(rng, _rand_len(rng, 1024))
        if sha256(msg) == hashlib.sha256(msg).digest():
            stats.sha256_ok += 1
        else:
            stats.mismatches.append(f"sha256 len={len(msg)} msg={msg.hex()}")


def fuzz_hmac(stats: FuzzStats, rng: random.Random, iters: int) -> None:
    for _ in range(iters):
        stats.iters += 1
        key = _rand_bytes(rng, rng.choice((0, 1, 32, 63, 64, 65, 131, rng.randint(0, 200))))
        msg = _rand_bytes(rng, _rand_len(rng, 512))
        if hmac_sha256(key, msg) == hmac.new(key, msg, hashlib.sha256).digest():
            stats.hmac_ok += 1
        else:
            stats.mismatches.append(f"hmac key={key.hex()} msg={msg.hex()}")


def fuzz_hkdf(stats: FuzzStats, rng: random.Random, iters: int) -> None:
    for _ in range(iters):
        stats.iters += 1
        # cryptography rejects length 0; start at 1
        length = rng.choice((1, 16, 31, 32, 33, 64, rng.randint(1, 1024), MAX_OKM_LENGTH))
        ikm = _rand_bytes(rng, rng.randint(0, 80))
        salt = _rand_bytes(rng, rng.choice((0, 13, 32, 80)))
        info = _rand_bytes(rng, rng.randint(0, 40))
        if hkdf(length, ikm, salt, info) == reference_hkdf(length, ikm, salt, info):
            stats.hkdf_ok += 1
        else:
            stats.mismatches.append(f"hkdf L={length} ikm={ikm.hex()} salt={salt.hex()} info={info.hex()}")


def run_fuzz(iters: int, seed: int) -> FuzzStats:
    rng = random.Random(seed)
    stats = FuzzStats()
    fuzz_sha256(stats, rng, iters)
    fuzz_hmac(stats, rng, iters)
    fuzz_hkdf(stats, rng, max(1, iters // 10))
    return stats


def main() -> None:
    env = DiagnosticsConfig.from_env()
    ap = argparse.ArgumentParser(description="hash_core differential fuzzer")
    ap.add_argument("--iters", type=int, default=env.fuzz_iters, help="random cases per primitive")
    ap.add_argument("--seed", type=int, default=env.fuzz_seed, help="RNG seed")
    args = ap.parse_args()

    if args.iters <= 0:
        raise SystemExit("--iters must be > 0")

    setup_logging(env)
    logger.info("fuzz start iters=%d seed=%d", args.iters, args.seed)

    print("=== hash_core Fuzz Tester ===")
    print("")

    stats = run_fuzz(args.iters, args.seed)
    print(f"  cases      ={stats.iters}")
    print(f"  sha256_ok  ={stats.sha256_ok}")
    print(f"  hmac_ok    ={stats.hmac_ok}")
    print(f"  hkdf_ok    ={stats.hkdf_ok}")
    print(f"  mismatches ={len(stats.mismatches)}")
    for m in stats.mismatches[:10]:
        logger.error("mismatch: %s", m)

    print("")
    print("=== DONE ===")

    if stats.failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
