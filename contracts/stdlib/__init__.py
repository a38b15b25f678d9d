# -*- coding: utf-8 -*-
"""
contracts.stdlib
================

Helpers shared by contract modules:

- `math`    checked U256 arithmetic (raises ArithmeticOverflow)
- `access`  one-shot owner and single minter role
- `token`   storage prefixes, event names, TokenConfig, remote ledger client
"""
