"""
Import/export endpoints: upload a CSV or workbook, download the ledger.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import Response

from xpense.api.dependencies import get_store
from xpense.api.response_models import ImportResponse
from xpense.data.importer import import_file
from xpense.data.store import LedgerStore
from xpense.errors import PersistenceError
from xpense.reports.export import export_csv, export_ledger

router = APIRouter(prefix="/api", tags=["import-export"])


@router.post("/import", response_model=ImportResponse)
async def import_upload(file: UploadFile = File(...), store: LedgerStore = Depends(get_store)):
    """Import one .csv or spreadsheet file; duplicates of existing rows are skipped."""
    if not file.filename:
        raise HTTPException(400, "Missing filename")
    data = await file.read()

    try:
        outcome = import_file(store, file.filename, data)
    except PersistenceError as exc:
        raise HTTPException(500, str(exc))
    if not outcome.ok:
        raise HTTPException(400, outcome.message)

    return ImportResponse(
        status=outcome.status,
        filename=outcome.filename,
        accepted=outcome.accepted,
        added=outcome.added,
        message=outcome.message,
        total=len(store),
    )


@router.get("/export")
def export_download(
    format: str = Query("xlsx", description="xlsx|csv"),
    store: LedgerStore = Depends(get_store),
):
    """Download the ledger; falls back to CSV when the workbook cannot be built."""
    fmt = format.lower()
    if fmt not in ("xlsx", "csv"):
        raise HTTPException(400, f"Invalid format: {format}")

    result = export_csv(store.all()) if fmt == "csv" else export_ledger(store.all())
    headers = {
        "Content-Disposition": f'attachment; filename="{result.filename}"',
        "X-Export-Fallback": "true" if result.fallback else "false",
    }
    if result.notice:
        headers["X-Export-Notice"] = result.notice
    return Response(content=result.content, media_type=result.media_type, headers=headers)
