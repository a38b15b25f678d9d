# -*- coding: utf-8 -*-
"""
contracts — the token Ledger and the Sale Controller, written against the
chainsim contract API (`chainsim.stdlib`, `chainsim.abi.external`).

Layout
------
- contracts.token.contract        Ledger
- contracts.token_sale.contract   Sale Controller
- contracts.errors                structured error taxonomy shared by both
- contracts.stdlib                math, access and token helpers
- contracts.tools                 deploy/call helpers and the CLI
"""
