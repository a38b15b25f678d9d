"""Ledger contract: balances, allowances, supply and the owner/minter roles of one token."""
