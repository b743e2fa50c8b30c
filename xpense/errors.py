"""
Error taxonomy for the ledger core.
"""
from __future__ import annotations

from typing import Any


class LedgerError(Exception):
    """Base class for all ledger errors."""


class ValidationError(LedgerError):
    """A single field failed normalization."""

    def __init__(self, field: str, value: Any = None, reason: str | None = None) -> None:
        self.field = field
        self.value = value
        self.reason = reason or "invalid value"
        super().__init__(f"{field}: {self.reason} ({value!r})")


class TransactionNotFound(LedgerError):
    def __init__(self, tx_id: str) -> None:
        self.tx_id = tx_id
        super().__init__(f"Transaction not found: {tx_id}")


class CodecUnavailable(LedgerError):
    """The spreadsheet codec cannot be used; export falls back to CSV."""


class CodecFailure(LedgerError):
    """The import payload could not be decoded."""


class EmptyResult(LedgerError):
    """An import produced no valid rows."""


class PersistenceError(LedgerError):
    """The blob store rejected a write; the mutation was rolled back."""
