"""
FastAPI dependencies — LedgerStore singleton, filter parsing.
"""
from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Query

from xpense.data.schemas import TransactionFilter, TypeFilter
from xpense.data.store import LedgerStore

# ---------------------------------------------------------------------------
# Global store singleton (set during startup)
# ---------------------------------------------------------------------------
_store: LedgerStore | None = None


def set_store(store: LedgerStore | None) -> None:
    global _store
    _store = store


def peek_store() -> LedgerStore | None:
    return _store


def get_store() -> LedgerStore:
    if _store is None or not _store.is_loaded:
        raise HTTPException(503, "Ledger not loaded yet")
    return _store


# ---------------------------------------------------------------------------
# Filter parsing from query params
# ---------------------------------------------------------------------------

def parse_filter(
    month: Optional[str] = Query(None, description="YYYY-MM"),
    q: Optional[str] = Query(None, description="Text matched against description or category"),
    type: Optional[str] = Query(None, description="all|expense|income"),
) -> TransactionFilter:
    """Parse table filter query parameters into a TransactionFilter."""
    try:
        tx_type = TypeFilter(type.strip().lower()) if type else TypeFilter.ALL
    except ValueError:
        raise HTTPException(400, f"Invalid type filter: {type}")
    return TransactionFilter(month=(month or "").strip(), query=q or "", tx_type=tx_type)
