"""
Filtered, date-sorted views of the ledger for the transaction table.
"""
from __future__ import annotations

from typing import Iterable

from xpense.data.schemas import Transaction, TransactionFilter, TypeFilter


def _matches(tx: Transaction, month: str, query: str, tx_type: TypeFilter) -> bool:
    by_month = tx.date.startswith(month) if month else True
    by_query = (query in tx.desc.lower() or query in tx.category.lower()) if query else True
    by_type = True if tx_type == TypeFilter.ALL else tx.type.value == tx_type.value
    return by_month and by_query and by_type


def filter_transactions(
    transactions: Iterable[Transaction],
    month: str = "",
    query: str = "",
    tx_type: TypeFilter | str = TypeFilter.ALL,
) -> list[Transaction]:
    """Records passing all three filters, newest date first.

    Empty filters match everything. The sort is keyed on ``date`` only and
    is stable, so records sharing a date keep their ledger order.
    """
    month = (month or "").strip()
    query = (query or "").strip().lower()
    tx_type = TypeFilter(tx_type or TypeFilter.ALL)

    filtered = [tx for tx in transactions if _matches(tx, month, query, tx_type)]
    return sorted(filtered, key=lambda tx: tx.date, reverse=True)


def apply_filter(transactions: Iterable[Transaction], flt: TransactionFilter | None) -> list[Transaction]:
    if flt is None:
        return filter_transactions(transactions)
    return filter_transactions(transactions, flt.month, flt.query, flt.tx_type)
