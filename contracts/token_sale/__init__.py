"""Sale Controller contract: sells pre-funded ledger tokens for native currency."""
