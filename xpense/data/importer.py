"""
Import of delimited text and spreadsheet files into the ledger.
"""
from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

import pandas as pd

from xpense.config import CSV_DELIMITER, HEADER_ALIASES
from xpense.data.normalize import build_transaction
from xpense.data.schemas import Transaction
from xpense.data.store import LedgerStore
from xpense.errors import CodecFailure, EmptyResult, ValidationError

logger = logging.getLogger(__name__)

_LINE_SPLIT_RE = re.compile(r"\r?\n")

Row = Mapping[str, Any]


@dataclass(frozen=True)
class ImportOutcome:
    """Single reported result of one import call."""
    status: str              # "imported" | "empty" | "failed"
    filename: str
    accepted: int = 0        # rows that passed normalization
    added: int = 0           # new records after dedup
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status != "failed"


# ---------------------------------------------------------------------------
# Codecs
# ---------------------------------------------------------------------------

def parse_delimited(text: str, delimiter: str = CSV_DELIMITER) -> list[dict[str, Any]]:
    """Split delimited text into header-keyed rows.

    Intentionally naive: fields must not contain the delimiter or quotes.
    Blank lines are skipped and missing trailing cells read as None.
    """
    lines = [line for line in _LINE_SPLIT_RE.split(text) if line]
    if not lines:
        return []
    headers = [h.strip() for h in lines[0].split(delimiter)]
    rows = []
    for line in lines[1:]:
        cells = [c.strip() for c in line.split(delimiter)]
        rows.append({h: (cells[i] if i < len(cells) else None) for i, h in enumerate(headers)})
    return rows


def read_workbook_rows(data: bytes) -> list[dict[str, Any]]:
    """Rows of the first sheet as loosely-typed dicts, empty cells as None."""
    df = pd.read_excel(io.BytesIO(data), sheet_name=0, engine="openpyxl", dtype=object)
    if df.empty:
        return []
    df = df.astype(object).where(df.notna(), None)
    df.columns = [str(c).strip() for c in df.columns]
    return df.to_dict("records")


def decode_rows(filename: str, data: bytes) -> list[dict[str, Any]]:
    """Pick the codec by extension; any codec error becomes CodecFailure."""
    try:
        if filename.lower().endswith(".csv"):
            return parse_delimited(data.decode("utf-8-sig"))
        return read_workbook_rows(data)
    except Exception as exc:
        raise CodecFailure(f"Could not read {filename}: {exc}") from exc


# ---------------------------------------------------------------------------
# Header mapping
# ---------------------------------------------------------------------------

def resolve_headers(headers: Iterable[str]) -> dict[str, str]:
    """Canonical field → header present in the file (first alias wins)."""
    available = set(headers)
    resolved = {}
    for field, aliases in HEADER_ALIASES.items():
        match = next((alias for alias in aliases if alias in available), None)
        if match is not None:
            resolved[field] = match
    return resolved


def rows_to_transactions(rows: Sequence[Row]) -> list[Transaction]:
    """Normalize raw rows, silently skipping the ones that fail validation."""
    if not rows:
        return []
    headers: dict[str, None] = {}
    for row in rows:
        headers.update(dict.fromkeys(row.keys()))
    mapping = resolve_headers(headers)

    transactions = []
    skipped = 0
    for row in rows:
        raw = {field: row.get(header) for field, header in mapping.items()}
        try:
            transactions.append(build_transaction(raw, allow_negative=True))
        except ValidationError as exc:
            skipped += 1
            logger.debug("Skipping import row: %s", exc)
    if skipped:
        logger.info("Skipped %d invalid row(s)", skipped)
    return transactions


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def load_candidates(filename: str, data: bytes) -> list[Transaction]:
    """Decode and normalize a file; raises CodecFailure or EmptyResult."""
    rows = decode_rows(filename, data)
    candidates = rows_to_transactions(rows)
    if not candidates:
        raise EmptyResult(f"No valid rows found in {filename}")
    return candidates


def import_file(store: LedgerStore, filename: str, data: bytes) -> ImportOutcome:
    """Import one file into ``store`` and report a single outcome.

    The store is only touched once the whole file decoded and at least one
    row validated.
    """
    try:
        candidates = load_candidates(filename, data)
    except CodecFailure as exc:
        logger.warning("Import failed: %s", exc)
        return ImportOutcome("failed", filename, message=str(exc))
    except EmptyResult:
        return ImportOutcome("empty", filename, message="No valid rows found to import.")

    added = store.merge(candidates)
    return ImportOutcome(
        "imported",
        filename,
        accepted=len(candidates),
        added=added,
        message=f"Imported {len(candidates)} row(s), {added} new.",
    )
