# MIT License © 2025 Motohiro Suzuki
from __future__ import annotations

import logging
import sys

import pytest

from diagnostics.bench_runner import bench_hkdf, bench_sha256, run_all
from diagnostics.config import DiagnosticsConfig
from diagnostics.fuzz_tester import run_fuzz
from diagnostics.logging_config import setup_logging


def test_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("HASH_CORE_BENCH_OPS", "HASH_CORE_FUZZ_ITERS", "HASH_CORE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    cfg = DiagnosticsConfig.from_env()
    assert cfg.bench_ops == 2000
    assert cfg.fuzz_iters == 500
    assert cfg.log_level == "INFO"


def test_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HASH_CORE_BENCH_OPS", "7")
    monkeypatch.setenv("HASH_CORE_FUZZ_SEED", "42")
    monkeypatch.setenv("HASH_CORE_LOG_LEVEL", "debug")
    cfg = DiagnosticsConfig.from_env()
    assert cfg.bench_ops == 7
    assert cfg.fuzz_seed == 42
    assert cfg.log_level == "DEBUG"


@pytest.mark.parametrize(
    "name, value",
    [
        ("HASH_CORE_BENCH_OPS", "many"),
        ("HASH_CORE_BENCH_OPS", "0"),
        ("HASH_CORE_LOG_LEVEL", "LOUD"),
    ],
)
def test_config_rejects_bad_env(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        DiagnosticsConfig.from_env()


def test_bench_results_are_sane() -> None:
    r = bench_sha256(ops=3, payload_len=100)
    assert r.ops == 3
    assert r.bytes_total == 300
    assert r.seconds >= 0.0

    h = bench_hkdf(ops=2, length=64)
    assert h.bytes_total == 128


def test_run_all_small() -> None:
    results = run_all(DiagnosticsConfig(bench_ops=2, bench_payload=10))
    assert len(results) == 4
    assert all(r.ops >= 1 for r in results)


def test_fuzz_finds_no_mismatch() -> None:
    stats = run_fuzz(iters=40, seed=1)
    assert not stats.failed, stats.mismatches
    assert stats.sha256_ok == 40
    assert stats.hmac_ok == 40
    assert stats.hkdf_ok == 4


def test_setup_logging_uses_configured_level(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: seen.update(kw))

    setup_logging(DiagnosticsConfig(log_level="WARNING"))
    assert seen["level"] == logging.WARNING
    assert seen["stream"] is sys.stdout
    assert seen["format"] == "%(asctime)s %(levelname)s %(name)s: %(message)s"


def test_setup_logging_reads_env_when_no_config(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: seen.update(kw))
    monkeypatch.setenv("HASH_CORE_LOG_LEVEL", "debug")

    setup_logging()
    assert seen["level"] == logging.DEBUG
