# MIT License © 2025 Motohiro Suzuki
"""
diagnostics/bench_runner.py

Throughput of the pure-Python primitives (ALWAYS prints results):
- sha256       (ops/sec, MB/sec over a fixed payload)
- hmac_sha256  (same payload, 32-byte key)
- hkdf         (32-byte and 255-block outputs)

Run:
  python3 -m diagnostics.bench_runner
  python3 -m diagnostics.bench_runner --ops 500 --payload 4096 2>&1 | tee bench.txt
"""

from __future__ import annotations

import argparse
import logging
import os
import time
from dataclasses import dataclass
from typing import Callable, List

from diagnostics.config import DiagnosticsConfig
from diagnostics.logging_config import setup_logging
from hash_core.hkdf import MAX_OKM_LENGTH, hkdf
from hash_core.hmac_sha256 import hmac_sha256
from hash_core.sha256 import sha256

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BenchResult:
    name: str
    ops: int
    seconds: float
    bytes_total: int

    @property
    def ops_per_sec(self) -> float:
        return self.ops / self.seconds if self.seconds > 0 else 0.0

    @property
    def mb_per_sec(self) -> float:
        return (self.bytes_total / (1024 * 1024)) / self.seconds if self.seconds > 0 else 0.0


def _bench_loop(name: str, ops: int, bytes_per_op: int, fn: Callable[[], None]) -> BenchResult:
    t0 = time.perf_counter()
    for _ in range(ops):
        fn()
    t1 = time.perf_counter()
    return BenchResult(name=name, ops=ops, seconds=(t1 - t0), bytes_total=ops * bytes_per_op)


def bench_sha256(ops: int, payload_len: int) -> BenchResult:
    msg = os.urandom(payload_len)

    def _run() -> None:
        _ = sha256(msg)

    return _bench_loop(f"sha256 ({payload_len}B)", ops=ops, bytes_per_op=payload_len, fn=_run)


def bench_hmac(ops: int, payload_len: int) -> BenchResult:
    key = os.urandom(32)
    msg = os.urandom(payload_len)

    def _run() -> None:
        _ = hmac_sha256(key, msg)

    return _bench_loop(f"hmac_sha256 ({payload_len}B)", ops=ops, bytes_per_op=payload_len, fn=_run)


def bench_hkdf(ops: int, length: int) -> BenchResult:
    ikm = os.urandom(32)
    salt = os.urandom(16)
    info = b"bench"

    def _run() -> None:
        _ = hkdf(length, ikm, salt, info)

    return _bench_loop(f"hkdf (L={length})", ops=ops, bytes_per_op=length, fn=_run)


def run_all(cfg: DiagnosticsConfig) -> List[BenchResult]:
    return [
        bench_sha256(cfg.bench_ops, cfg.bench_payload),
        bench_hmac(cfg.bench_ops, cfg.bench_payload),
        bench_hkdf(cfg.bench_ops, 32),
        # full-size expansion is ~255x the work; scale ops down
        bench_hkdf(max(1, cfg.bench_ops // 100), MAX_OKM_LENGTH),
    ]


def _parse_args(cfg: DiagnosticsConfig) -> DiagnosticsConfig:
    ap = argparse.ArgumentParser(description="hash_core throughput benchmark")
    ap.add_argument("--ops", type=int, default=cfg.bench_ops, help="iterations per benchmark")
    ap.add_argument("--payload", type=int, default=cfg.bench_payload, help="message size in bytes")
    args = ap.parse_args()

    if args.ops <= 0:
        raise SystemExit("--ops must be > 0")
    if args.payload < 0:
        raise SystemExit("--payload must be >= 0")

    return DiagnosticsConfig(
        bench_ops=args.ops,
        bench_payload=args.payload,
        fuzz_iters=cfg.fuzz_iters,
        fuzz_seed=cfg.fuzz_seed,
        log_level=cfg.log_level,
    )


def main() -> None:
    cfg = _parse_args(DiagnosticsConfig.from_env())
    setup_logging(cfg)
    logger.info("bench start ops=%d payload=%d", cfg.bench_ops, cfg.bench_payload)

    print("=== hash_core Bench Runner ===")
    print("")

    for r in run_all(cfg):
        print(f"  {r.name}: ops={r.ops} time={r.seconds:.4f}s ops/s={r.ops_per_sec:,.0f} MB/s={r.mb_per_sec:,.3f}")

    print("")
    print("=== DONE ===")


if __name__ == "__main__":
    main()
