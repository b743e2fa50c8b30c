"""
Dashboard endpoint — KPI cards and chart series.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from xpense.analytics.dashboard import dashboard
from xpense.api.dependencies import get_store
from xpense.data.store import LedgerStore

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/dashboard")
def dashboard_view(store: LedgerStore = Depends(get_store)):
    """All-time totals, this month's expense and the chart series."""
    return JSONResponse(content=dashboard(store.all()))
