"""
chainsim.config — host limits, address width and logging level.

This module centralizes configuration for the local execution host. It has
NO third-party deps and is safe to import very early.

Configuration precedence:
  1) Environment variables (TOKENSALE_*)
  2) Hardcoded safe defaults below

Key env vars (case-insensitive where boolean):
  - TOKENSALE_STRICT                  (bool)   default: true
  - TOKENSALE_MAX_CALL_DEPTH          (int)    default: 64
  - TOKENSALE_MAX_CALLDATA_BYTES      (int)    default: 65_536
  - TOKENSALE_MAX_STORAGE_KEY_BYTES   (int)    default: 96
  - TOKENSALE_MAX_STORAGE_VAL_BYTES   (int)    default: 4_096
  - TOKENSALE_MAX_EVENT_NAME_BYTES    (int)    default: 64
  - TOKENSALE_LOG_LEVEL               (str)    default: WARNING

The address width (20 bytes) and word size (256 bits) are fixed by the call
encoding and are not configurable.

Usage:
    from chainsim.config import load_config
    CFG = load_config()
    if CFG.max_call_depth < depth: ...
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict

ADDRESS_LEN = 20
WORD_BYTES = 32
UINT_BITS = 256

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


# ----------------------------- helpers ---------------------------------------


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    return val in ("1", "true", "t", "yes", "y", "on")


def _env_int(name: str, default: int, *, min_v: int, max_v: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        v = int(raw, 0)
    except ValueError:
        return default
    if v < min_v:
        return min_v
    if v > max_v:
        return max_v
    return v


def _env_level(name: str, default: str) -> str:
    raw = (os.getenv(name) or "").strip().upper()
    return raw if raw in _LOG_LEVELS else default


# ------------------------------- config --------------------------------------


@dataclass(frozen=True)
class HostConfig:
    # Rejects value sent to non-payable entry points and dirty ABI padding.
    strict_mode: bool

    address_len: int
    uint_bits: int

    max_call_depth: int
    max_calldata_bytes: int
    max_storage_key_bytes: int
    max_storage_value_bytes: int
    max_event_name_bytes: int

    log_level: str

    @property
    def uint_max(self) -> int:
        return (1 << self.uint_bits) - 1

    def numeric_log_level(self) -> int:
        return getattr(logging, self.log_level, logging.WARNING)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "strict_mode": self.strict_mode,
            "address_len": self.address_len,
            "uint_bits": self.uint_bits,
            "max_call_depth": self.max_call_depth,
            "max_calldata_bytes": self.max_calldata_bytes,
            "max_storage_key_bytes": self.max_storage_key_bytes,
            "max_storage_value_bytes": self.max_storage_value_bytes,
            "max_event_name_bytes": self.max_event_name_bytes,
            "log_level": self.log_level,
        }


@lru_cache(maxsize=1)
def load_config() -> HostConfig:
    """
    Build and cache a HostConfig from environment + safe defaults.
    """
    return HostConfig(
        strict_mode=_env_bool("TOKENSALE_STRICT", True),
        address_len=ADDRESS_LEN,
        uint_bits=UINT_BITS,
        max_call_depth=_env_int("TOKENSALE_MAX_CALL_DEPTH", 64, min_v=4, max_v=1024),
        max_calldata_bytes=_env_int("TOKENSALE_MAX_CALLDATA_BYTES", 65_536, min_v=1_024, max_v=8_388_608),
        max_storage_key_bytes=_env_int("TOKENSALE_MAX_STORAGE_KEY_BYTES", 96, min_v=16, max_v=256),
        max_storage_value_bytes=_env_int("TOKENSALE_MAX_STORAGE_VAL_BYTES", 4_096, min_v=32, max_v=1_048_576),
        max_event_name_bytes=_env_int("TOKENSALE_MAX_EVENT_NAME_BYTES", 64, min_v=8, max_v=256),
        log_level=_env_level("TOKENSALE_LOG_LEVEL", "WARNING"),
    )


__all__ = ["HostConfig", "load_config", "ADDRESS_LEN", "WORD_BYTES", "UINT_BITS"]
