"""
Xpense — FastAPI app factory with startup ledger loading.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from xpense.api.dependencies import peek_store, set_store
from xpense.api.router_dashboard import router as dashboard_router
from xpense.api.router_io import router as io_router
from xpense.api.router_meta import router as meta_router
from xpense.api.router_transactions import router as transactions_router
from xpense.data.blob import FileBlobStore
from xpense.data.store import LedgerStore
from xpense.logging_setup import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the ledger at startup unless a store was injected."""
    if peek_store() is None:
        from xpense.config import DATA_FOLDER, LEDGER_FILE
        configure_logging()
        DATA_FOLDER.mkdir(parents=True, exist_ok=True)
        logger.info("Ledger file: %s", LEDGER_FILE)

        store = LedgerStore(FileBlobStore(LEDGER_FILE)).load()
        set_store(store)
        logger.info("Xpense ready — %d transaction(s), %d month(s)", len(store), len(store.months()))
    yield


def create_app(store: LedgerStore | None = None) -> FastAPI:
    if store is not None:
        set_store(store if store.is_loaded else store.load())

    app = FastAPI(
        title="Xpense API",
        description="Personal income/expense ledger with spreadsheet import and export",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "X-Export-Fallback", "X-Export-Notice"],
    )

    app.include_router(meta_router)
    app.include_router(transactions_router)
    app.include_router(dashboard_router)
    app.include_router(io_router)
    return app


app = create_app()
