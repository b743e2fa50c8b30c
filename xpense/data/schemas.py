"""
Transaction record and filter schemas.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum


class TxType(str, Enum):
    EXPENSE = "expense"
    INCOME = "income"


class TypeFilter(str, Enum):
    ALL = "all"
    EXPENSE = "expense"
    INCOME = "income"


@dataclass(frozen=True)
class Transaction:
    """A single canonical ledger entry.

    ``amount`` is always the magnitude; the direction of the money flow comes
    from ``type`` only.
    """
    id: str
    date: str            # YYYY-MM-DD
    desc: str
    category: str
    type: TxType
    amount: float

    @property
    def month(self) -> str:
        """Month bucket label (YYYY-MM)."""
        return self.date[:7]

    @property
    def signed_amount(self) -> float:
        """Income positive, expense negative."""
        return self.amount if self.type == TxType.INCOME else -self.amount

    def to_dict(self) -> dict:
        data = asdict(self)
        data["type"] = self.type.value
        return data


@dataclass
class TransactionFilter:
    """The three independent inputs of the transaction table view."""
    month: str = ""                       # YYYY-MM prefix, empty = any
    query: str = ""                       # matched against desc or category
    tx_type: TypeFilter = TypeFilter.ALL
