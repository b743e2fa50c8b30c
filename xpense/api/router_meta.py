"""
Meta endpoints: health, months with data.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from xpense.api.dependencies import get_store
from xpense.api.response_models import HealthResponse
from xpense.data.store import LedgerStore

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: LedgerStore = Depends(get_store)):
    return HealthResponse(status="ok", transactions=len(store), months=len(store.months()))


@router.get("/months")
def list_months(store: LedgerStore = Depends(get_store)):
    return {"months": store.months()}
