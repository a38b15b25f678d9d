# -*- coding: utf-8 -*-
"""
chainsim.tests.conftest
=======================

Fixtures for exercising the host with tiny contracts built in-process.

`make_contract(name, **attrs)` returns a fresh module object carrying the given
functions, which is exactly what `Host.deploy` expects:

    def test_counter(host, make_contract, alice):
        @external("inc()")
        def inc(): storage.set_int(b"n", storage.get_int(b"n") + 1)
        mod = make_contract("counter", inc=inc)
        host.deploy(ADDR, mod)
"""
from __future__ import annotations

import os
import types
from typing import Any, Callable

import pytest
from hypothesis import HealthCheck, settings

from chainsim.config import load_config
from chainsim.runtime import Host

os.environ.setdefault("PYTHONHASHSEED", "0")


# The config cache reset below is autouse, so property tests see it too.
settings.register_profile("chainsim", deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
settings.load_profile("chainsim")


def addr(n: int) -> bytes:
    """Stable 20-byte test address."""
    return n.to_bytes(20, "big")


@pytest.fixture(autouse=True)
def _fresh_config():
    load_config.cache_clear()
    yield
    load_config.cache_clear()


@pytest.fixture
def host() -> Host:
    return Host()


@pytest.fixture
def alice() -> bytes:
    return addr(0xA11CE)


@pytest.fixture
def bob() -> bytes:
    return addr(0xB0B)


@pytest.fixture
def make_contract() -> Callable[..., types.ModuleType]:
    def _make(name: str, **attrs: Any) -> types.ModuleType:
        mod = types.ModuleType(f"chainsim_test_{name}")
        for k, v in attrs.items():
            setattr(mod, k, v)
        return mod

    return _make
