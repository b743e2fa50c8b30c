"""
Transaction endpoints: filtered table view, create, edit, delete.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from xpense.api.dependencies import get_store, parse_filter
from xpense.api.response_models import (
    CategoriesResponse, TransactionIn, TransactionListResponse, TransactionOut,
)
from xpense.data.query import apply_filter
from xpense.data.schemas import TransactionFilter
from xpense.data.store import LedgerStore
from xpense.errors import PersistenceError, TransactionNotFound, ValidationError

router = APIRouter(prefix="/api", tags=["transactions"])


def _raise_for(exc: Exception) -> None:
    if isinstance(exc, TransactionNotFound):
        raise HTTPException(404, str(exc))
    if isinstance(exc, ValidationError):
        raise HTTPException(422, {"field": exc.field, "message": str(exc)})
    if isinstance(exc, PersistenceError):
        raise HTTPException(500, str(exc))
    raise exc


@router.get("/transactions", response_model=TransactionListResponse)
def list_transactions(
    store: LedgerStore = Depends(get_store),
    flt: TransactionFilter = Depends(parse_filter),
):
    """Filtered view, newest first."""
    rows = apply_filter(store.all(), flt)
    return TransactionListResponse(
        count=len(rows),
        transactions=[TransactionOut.from_tx(tx) for tx in rows],
    )


@router.post("/transactions", response_model=TransactionOut, status_code=201)
def create_transaction(body: TransactionIn, store: LedgerStore = Depends(get_store)):
    try:
        tx = store.add(body.raw())
    except (ValidationError, PersistenceError) as exc:
        _raise_for(exc)
    return TransactionOut.from_tx(tx)


@router.get("/transactions/{tx_id}", response_model=TransactionOut)
def get_transaction(tx_id: str, store: LedgerStore = Depends(get_store)):
    tx = store.get(tx_id)
    if tx is None:
        raise HTTPException(404, f"Transaction not found: {tx_id}")
    return TransactionOut.from_tx(tx)


@router.put("/transactions/{tx_id}", response_model=TransactionOut)
def update_transaction(tx_id: str, body: TransactionIn, store: LedgerStore = Depends(get_store)):
    """Edit a record; omitted fields keep their current value."""
    try:
        tx = store.update(tx_id, body.raw(exclude_unset=True))
    except (TransactionNotFound, ValidationError, PersistenceError) as exc:
        _raise_for(exc)
    return TransactionOut.from_tx(tx)


@router.delete("/transactions/{tx_id}")
def delete_transaction(tx_id: str, store: LedgerStore = Depends(get_store)):
    try:
        removed = store.delete(tx_id)
    except (TransactionNotFound, PersistenceError) as exc:
        _raise_for(exc)
    return {"status": "deleted", "id": removed.id}


@router.get("/categories", response_model=CategoriesResponse)
def list_categories(store: LedgerStore = Depends(get_store)):
    return CategoriesResponse(categories=store.categories())
