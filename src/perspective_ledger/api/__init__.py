"""HTTP API for the perspective ledger."""
