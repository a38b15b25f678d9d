from __future__ import annotations

import logging

from chainsim.config import load_config


def test_defaults(monkeypatch):
    for k in ("TOKENSALE_STRICT", "TOKENSALE_MAX_CALL_DEPTH", "TOKENSALE_LOG_LEVEL"):
        monkeypatch.delenv(k, raising=False)
    load_config.cache_clear()
    cfg = load_config()
    assert cfg.strict_mode is True
    assert cfg.max_call_depth == 64
    assert cfg.address_len == 20
    assert cfg.uint_max == 2**256 - 1
    assert cfg.numeric_log_level() == logging.WARNING


def test_env_overrides_and_clamping(monkeypatch):
    monkeypatch.setenv("TOKENSALE_STRICT", "off")
    monkeypatch.setenv("TOKENSALE_MAX_CALL_DEPTH", "1")
    monkeypatch.setenv("TOKENSALE_MAX_CALLDATA_BYTES", "0x10000000")
    monkeypatch.setenv("TOKENSALE_LOG_LEVEL", "debug")
    load_config.cache_clear()
    cfg = load_config()
    assert cfg.strict_mode is False
    assert cfg.max_call_depth == 4
    assert cfg.max_calldata_bytes == 8_388_608
    assert cfg.log_level == "DEBUG"


def test_garbage_values_fall_back(monkeypatch):
    monkeypatch.setenv("TOKENSALE_MAX_CALL_DEPTH", "lots")
    monkeypatch.setenv("TOKENSALE_LOG_LEVEL", "chatty")
    load_config.cache_clear()
    cfg = load_config()
    assert cfg.max_call_depth == 64
    assert cfg.log_level == "WARNING"
    assert cfg.as_dict()["max_call_depth"] == 64
