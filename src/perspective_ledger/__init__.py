"""Versioned perspective feedback ledger."""

__version__ = "0.1.0"
