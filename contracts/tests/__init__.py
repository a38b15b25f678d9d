# -*- coding: utf-8 -*-
"""
contracts.tests
================

Contract-level tests for the Ledger and the Sale Controller.

Importing the package pins a few environment defaults so local runs behave
like CI:
- hash seed and timezone are fixed
- the host runs in strict mode (dirty ABI padding and value sent to a
  non-payable entry point are rejected)

Property tests import `PROJECT_TEST_SEED` to make hypothesis runs repeatable.
"""
from __future__ import annotations

import os


def _set_if_absent(key: str, value: str) -> None:
    """Set environment variable only if it's not already present."""
    if key not in os.environ or os.environ.get(key) in ("", None):
        os.environ[key] = value


_set_if_absent("PYTHONHASHSEED", "0")
_set_if_absent("TZ", "UTC")
_set_if_absent("TOKENSALE_STRICT", "1")

PROJECT_TEST_SEED: int = 1337

__all__ = ["PROJECT_TEST_SEED"]
