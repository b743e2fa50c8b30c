"""
Merge imported transactions into the ledger, dropping exact duplicates.
"""
from __future__ import annotations

import logging
from typing import Iterable

from xpense.data.schemas import Transaction

logger = logging.getLogger(__name__)

DedupKey = tuple[str, str, str, str, float]


def dedup_key(tx: Transaction) -> DedupKey:
    """Composite identity used on import: every field except ``id``."""
    return (tx.date, tx.desc, tx.category, tx.type.value, tx.amount)


def merge_transactions(
    existing: Iterable[Transaction],
    candidates: Iterable[Transaction],
) -> list[Transaction]:
    """Existing records followed by the candidates not seen before.

    A candidate is dropped when its key matches an existing record or an
    earlier candidate of the same batch (first occurrence wins). Existing
    records are kept as they are, duplicates among them included.
    """
    merged = list(existing)
    seen = {dedup_key(tx) for tx in merged}

    dropped = 0
    for tx in candidates:
        key = dedup_key(tx)
        if key in seen:
            dropped += 1
            continue
        seen.add(key)
        merged.append(tx)

    if dropped:
        logger.debug("Dedup dropped %d duplicate candidate(s)", dropped)
    return merged
