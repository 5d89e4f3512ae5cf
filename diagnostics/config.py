# MIT License © 2025 Motohiro Suzuki
"""
diagnostics/config.py

Environment-driven settings for bench_runner / fuzz_tester.

  HASH_CORE_BENCH_OPS      iterations per benchmark       (default 2000)
  HASH_CORE_BENCH_PAYLOAD  message size in bytes          (default 1024)
  HASH_CORE_FUZZ_ITERS     random cases per primitive     (default 500)
  HASH_CORE_FUZZ_SEED      RNG seed                       (default 155)
  HASH_CORE_LOG_LEVEL      DEBUG/INFO/WARNING/ERROR       (default INFO)

Command line flags in each runner override these.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _read_int_env(name: str, default: int, *, minimum: int) -> int:
    v = os.environ.get(name, "").strip()
    if not v:
        return default

    try:
        n = int(v)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {v!r}") from e

    if n < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {n}")
    return n


def _read_level_env(name: str, default: str) -> str:
    v = os.environ.get(name, "").strip().upper() or default
    if v not in _LOG_LEVELS:
        raise ValueError(f"{name} must be one of {', '.join(_LOG_LEVELS)}, got {v!r}")
    return v


@dataclass(frozen=True)
class DiagnosticsConfig:
    bench_ops: int = 2000
    bench_payload: int = 1024
    fuzz_iters: int = 500
    fuzz_seed: int = 155
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "DiagnosticsConfig":
        return cls(
            bench_ops=_read_int_env("HASH_CORE_BENCH_OPS", cls.bench_ops, minimum=1),
            bench_payload=_read_int_env("HASH_CORE_BENCH_PAYLOAD", cls.bench_payload, minimum=0),
            fuzz_iters=_read_int_env("HASH_CORE_FUZZ_ITERS", cls.fuzz_iters, minimum=1),
            fuzz_seed=_read_int_env("HASH_CORE_FUZZ_SEED", cls.fuzz_seed, minimum=0),
            log_level=_read_level_env("HASH_CORE_LOG_LEVEL", cls.log_level),
        )
