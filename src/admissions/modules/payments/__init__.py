"""Payment ledger module."""
