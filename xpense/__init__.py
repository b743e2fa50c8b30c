"""Xpense — personal income/expense ledger with spreadsheet import/export."""

__version__ = "1.0.0"
