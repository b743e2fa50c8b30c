"""
LedgerStore — in-memory transaction ledger persisted to a blob store.

Loaded once at startup; every mutation rewrites the whole collection before
returning, so derived views never see state that was not saved.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Mapping, Optional

from xpense.data.blob import BlobStore, FileBlobStore
from xpense.data.merge import merge_transactions
from xpense.data.normalize import build_transaction
from xpense.data.schemas import Transaction
from xpense.errors import PersistenceError, TransactionNotFound, ValidationError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def encode_transactions(transactions: Iterable[Transaction]) -> bytes:
    return json.dumps([tx.to_dict() for tx in transactions]).encode("utf-8")


def decode_transactions(raw: bytes) -> list[Transaction]:
    """Decode a saved ledger, dropping records that no longer validate."""
    try:
        items = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        logger.warning("Ledger blob is unreadable, starting empty: %s", exc)
        return []
    if not isinstance(items, list):
        logger.warning("Ledger blob is not a list, starting empty")
        return []

    transactions: list[Transaction] = []
    seen_ids: set[str] = set()
    for item in items:
        if not isinstance(item, dict):
            continue
        tx_id = str(item.get("id") or "") or None
        if tx_id in seen_ids:
            logger.warning("Dropping stored record with duplicate id %s", tx_id)
            continue
        try:
            tx = build_transaction(item, tx_id=tx_id, allow_negative=True)
        except ValidationError as exc:
            logger.warning("Dropping invalid stored record %s: %s", tx_id, exc)
            continue
        seen_ids.add(tx.id)
        transactions.append(tx)
    return transactions


class LedgerStore:
    """Ordered transaction collection with whole-ledger persistence."""

    def __init__(self, blob: BlobStore | None = None) -> None:
        self.blob = blob if blob is not None else FileBlobStore()
        self._transactions: list[Transaction] = []
        self._loaded = False

    # ------------------------------------------------------------------
    # Loading / persistence
    # ------------------------------------------------------------------

    def load(self) -> "LedgerStore":
        """Replace the in-memory ledger with the blob store contents."""
        raw = self.blob.load()
        self._transactions = decode_transactions(raw) if raw else []
        self._loaded = True
        logger.info("Loaded %d transaction(s) from %r", len(self._transactions), self.blob)
        return self

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def persist(self) -> None:
        """Write the whole collection to the blob store."""
        try:
            self.blob.save(encode_transactions(self._transactions))
        except Exception as exc:
            raise PersistenceError(f"Could not save ledger: {exc}") from exc

    def _commit(self, transactions: list[Transaction]) -> None:
        previous = self._transactions
        self._transactions = transactions
        try:
            self.persist()
        except PersistenceError:
            self._transactions = previous
            logger.error("Save failed, mutation rolled back")
            raise

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def all(self) -> list[Transaction]:
        """Every record in insertion order."""
        return list(self._transactions)

    def get(self, tx_id: str) -> Optional[Transaction]:
        return next((tx for tx in self._transactions if tx.id == tx_id), None)

    def _index_of(self, tx_id: str) -> int:
        for idx, tx in enumerate(self._transactions):
            if tx.id == tx_id:
                return idx
        raise TransactionNotFound(tx_id)

    def __len__(self) -> int:
        return len(self._transactions)

    def categories(self) -> list[str]:
        """Distinct categories, sorted alphabetically."""
        return sorted({tx.category for tx in self._transactions if tx.category})

    def months(self) -> list[str]:
        """Distinct YYYY-MM months with data, ascending."""
        return sorted({tx.month for tx in self._transactions})

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, raw: Mapping[str, Any]) -> Transaction:
        """Create a record from raw form fields. Negative amounts are refused."""
        tx = build_transaction(raw)
        self._commit(self._transactions + [tx])
        logger.info("Added %s %s %.2f on %s", tx.id, tx.type.value, tx.amount, tx.date)
        return tx

    def update(self, tx_id: str, raw: Mapping[str, Any]) -> Transaction:
        """Edit a record in place; fields left as None keep their current value.

        Every field is re-validated, the id is preserved and the amount is
        stored as its magnitude.
        """
        idx = self._index_of(tx_id)
        current = self._transactions[idx].to_dict()
        fields = {**current, **{k: v for k, v in raw.items() if v is not None and k != "id"}}
        tx = build_transaction(fields, tx_id=tx_id, allow_negative=True)

        updated = list(self._transactions)
        updated[idx] = tx
        self._commit(updated)
        logger.info("Updated %s", tx_id)
        return tx

    def delete(self, tx_id: str) -> Transaction:
        idx = self._index_of(tx_id)
        removed = self._transactions[idx]
        self._commit(self._transactions[:idx] + self._transactions[idx + 1:])
        logger.info("Deleted %s", tx_id)
        return removed

    def merge(self, candidates: Iterable[Transaction]) -> int:
        """Merge normalized import candidates; returns how many were added."""
        before = len(self._transactions)
        merged = merge_transactions(self._transactions, candidates)
        self._commit(merged)
        added = len(merged) - before
        logger.info("Merged import: %d new record(s), %d total", added, len(merged))
        return added
