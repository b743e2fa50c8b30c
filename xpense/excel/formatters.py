"""
Cell and column formatting for ledger worksheets.
"""
from __future__ import annotations

from typing import Any, Sequence

from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from xpense.excel import styles


def write_header(ws: Worksheet, row: int, labels: Sequence[str]) -> None:
    """Write column labels on ``row`` with the header look."""
    for col, label in enumerate(labels, 1):
        cell = ws.cell(row=row, column=col, value=label)
        cell.font = styles.HEADER_FONT
        cell.fill = styles.HEADER_FILL
        cell.border = styles.HEADER_BORDER
        cell.alignment = styles.HEADER_ALIGN


def write_cell(
    ws: Worksheet,
    row: int,
    col: int,
    value: Any,
    *,
    currency: bool = False,
    total: bool = False,
    tx_type: str | None = None,
) -> None:
    """Store ``value`` raw; currency columns only change the number format.

    Text is always stored as a literal string with control characters
    removed, so a leading "=" never becomes a formula.
    """
    if isinstance(value, str):
        value = ILLEGAL_CHARACTERS_RE.sub("", value)
    cell = ws.cell(row=row, column=col, value=value)
    if isinstance(value, str):
        cell.data_type = "s"
    if currency:
        cell.number_format = styles.AMOUNT_FORMAT
        cell.alignment = styles.AMOUNT_ALIGN
    else:
        cell.alignment = styles.TEXT_ALIGN

    if total:
        cell.font = styles.TOTAL_FONT
        cell.fill = styles.TOTAL_FILL
        cell.border = styles.TOTAL_BORDER
        return
    cell.font = styles.TYPE_FONTS.get(tx_type or "", styles.BODY_FONT)
    cell.border = styles.BODY_BORDER
    if row % 2 == 0:
        cell.fill = styles.STRIPE_FILL


def fit_columns(ws: Worksheet, floor: int = 10, ceiling: int = 48) -> None:
    """Size each column to its longest rendered value."""
    for idx, column in enumerate(ws.iter_cols(), 1):
        longest = max((len(str(c.value)) for c in column if c.value is not None), default=0)
        ws.column_dimensions[get_column_letter(idx)].width = min(max(longest + 2, floor), ceiling)
