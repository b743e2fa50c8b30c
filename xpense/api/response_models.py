"""
Pydantic request/response schemas for the API.
"""
from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel

from xpense.data.schemas import Transaction

Scalar = Union[str, float, int, None]


class HealthResponse(BaseModel):
    status: str
    transactions: int
    months: int


class TransactionIn(BaseModel):
    """Raw form fields; normalization happens in the ledger, not here."""
    date: Scalar = None
    desc: Scalar = None
    category: Scalar = None
    type: Scalar = None
    amount: Scalar = None

    def raw(self, *, exclude_unset: bool = False) -> dict[str, Any]:
        return self.model_dump(exclude_unset=exclude_unset)


class TransactionOut(BaseModel):
    id: str
    date: str
    desc: str
    category: str
    type: str
    amount: float

    @classmethod
    def from_tx(cls, tx: Transaction) -> "TransactionOut":
        return cls(**tx.to_dict())


class TransactionListResponse(BaseModel):
    count: int
    transactions: list[TransactionOut]


class CategoriesResponse(BaseModel):
    categories: list[str]


class ImportResponse(BaseModel):
    status: str
    filename: str
    accepted: int
    added: int
    message: str
    total: Optional[int] = None
