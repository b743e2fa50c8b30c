"""
Ledger export — three-sheet workbook, or a flat CSV when the spreadsheet
codec cannot be used.
"""
from __future__ import annotations

import csv
import importlib.util
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Sequence

from xpense.analytics.dashboard import category_breakdown, monthly_totals
from xpense.config import (
    BY_MONTH_COLUMNS, BY_MONTH_SHEET, CSV_FILENAME, CSV_MEDIA_TYPE,
    SUMMARY_COLUMNS, SUMMARY_SHEET, SUMMARY_TOTAL_LABEL,
    TRANSACTION_COLUMNS, TRANSACTIONS_SHEET, XLSX_FILENAME, XLSX_MEDIA_TYPE,
)
from xpense.data.schemas import Transaction
from xpense.errors import CodecUnavailable

logger = logging.getLogger(__name__)

ColSpec = tuple[str, str, str]  # (key, col_type, label)
Table = tuple[str, Sequence[ColSpec], list[dict]]  # (sheet title, columns, rows)
WorkbookCodec = Callable[[Sequence[Table]], bytes]

# Notices are sent as HTTP headers, so they stay fixed ASCII text
NOTICE_UNAVAILABLE = "Spreadsheet export unavailable; exported transactions as CSV."
NOTICE_FAILED = "Spreadsheet export failed; exported transactions as CSV."


@dataclass(frozen=True)
class ExportResult:
    filename: str
    media_type: str
    content: bytes
    fallback: bool = False
    notice: str = ""

    def save(self, folder: str | Path) -> Path:
        path = Path(folder) / self.filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.content)
        return path


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

def transactions_table(transactions: Iterable[Transaction]) -> list[dict]:
    """One row per record, in ledger order."""
    return [
        {
            "Date": tx.date,
            "Description": tx.desc,
            "Category": tx.category,
            "Type": tx.type.value,
            "Amount": tx.amount,
        }
        for tx in transactions
    ]


def summary_table(transactions: Iterable[Transaction]) -> list[dict]:
    """Expense per category followed by a TOTAL row summing the rows above."""
    breakdown = category_breakdown(transactions)
    rows = [
        {"Category": label, "Expense": value}
        for label, value in zip(breakdown.labels, breakdown.series)
    ]
    rows.append({"Category": SUMMARY_TOTAL_LABEL, "Expense": sum(r["Expense"] for r in rows)})
    return rows


def month_pivot(transactions: Iterable[Transaction]) -> list[dict]:
    """Income, expense and net per month, months ascending."""
    totals = monthly_totals(transactions)
    return [
        {
            "Month": str(month),
            "Income": float(row["income"]),
            "Expense": float(row["expense"]),
            "Net": float(row["net"]),
        }
        for month, row in totals.iterrows()
    ]


def _columns(labels: Sequence[str], currency: Sequence[str]) -> list[ColSpec]:
    return [(label, "currency" if label in currency else "text", label) for label in labels]


def workbook_tables(transactions: Iterable[Transaction]) -> list[Table]:
    transactions = list(transactions)
    return [
        (TRANSACTIONS_SHEET, _columns(TRANSACTION_COLUMNS, ["Amount"]), transactions_table(transactions)),
        (SUMMARY_SHEET, _columns(SUMMARY_COLUMNS, ["Expense"]), summary_table(transactions)),
        (BY_MONTH_SHEET, _columns(BY_MONTH_COLUMNS, ["Income", "Expense", "Net"]), month_pivot(transactions)),
    ]


# ---------------------------------------------------------------------------
# Codecs
# ---------------------------------------------------------------------------

def write_workbook(tables: Sequence[Table]) -> bytes:
    """Render each table on its own sheet with the openpyxl writer."""
    from xpense.excel.writer import ExcelWriter

    writer = ExcelWriter()
    for title, columns, rows in tables:
        writer.write_table(
            writer.add_sheet(title), columns, rows,
            type_key="Type",
            total_last=title == SUMMARY_SHEET,
        )
    return writer.to_bytes()


def resolve_codec() -> WorkbookCodec:
    """The workbook codec, or CodecUnavailable when openpyxl is missing."""
    if importlib.util.find_spec("openpyxl") is None:
        raise CodecUnavailable("openpyxl is not installed")
    return write_workbook


def write_csv(rows: Sequence[dict], columns: Sequence[str] = TRANSACTION_COLUMNS) -> bytes:
    """Flat CSV; fields holding a comma, quote or newline are quoted, quotes doubled."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(columns), lineterminator="\r\n")
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def export_csv(transactions: Iterable[Transaction], *, fallback: bool = False, notice: str = "") -> ExportResult:
    content = write_csv(transactions_table(transactions))
    return ExportResult(CSV_FILENAME, CSV_MEDIA_TYPE, content, fallback=fallback, notice=notice)


def export_ledger(transactions: Iterable[Transaction], codec: WorkbookCodec | None = None) -> ExportResult:
    """Build ``expenses.xlsx``; falls back to ``expenses.csv`` instead of raising."""
    transactions = list(transactions)
    try:
        codec = codec or resolve_codec()
        content = codec(workbook_tables(transactions))
    except CodecUnavailable as exc:
        logger.info("Workbook export unavailable, using CSV: %s", exc)
        return export_csv(transactions, fallback=True, notice=NOTICE_UNAVAILABLE)
    except Exception as exc:
        logger.warning("Workbook export failed, using CSV: %s", exc)
        return export_csv(transactions, fallback=True, notice=NOTICE_FAILED)
    return ExportResult(XLSX_FILENAME, XLSX_MEDIA_TYPE, content)
