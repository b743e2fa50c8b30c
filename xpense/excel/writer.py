"""
ExcelWriter — one styled sheet per table, rendered to bytes.
"""
from __future__ import annotations

import io
from typing import Mapping, Sequence

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from xpense.excel.formatters import fit_columns, write_cell, write_header

ColSpec = tuple[str, str, str]  # (key, col_type, label)


class ExcelWriter:
    """Accumulates sheets in an in-memory workbook."""

    def __init__(self) -> None:
        self.wb = Workbook()
        # openpyxl starts with one blank sheet; the first table takes it over
        self._blank = self.wb.active

    def add_sheet(self, title: str) -> Worksheet:
        if self._blank is not None:
            ws, self._blank = self._blank, None
            ws.title = title
            return ws
        return self.wb.create_sheet(title=title)

    def write_table(
        self,
        ws: Worksheet,
        columns: Sequence[ColSpec],
        rows: Sequence[Mapping],
        *,
        type_key: str | None = None,
        total_last: bool = False,
    ) -> int:
        """Header on row 1, one row per mapping below it, header frozen.

        ``type_key`` names the field whose value ("income"/"expense") tints
        the row. With ``total_last`` the final row is styled as a total.
        Returns the number of data rows written.
        """
        write_header(ws, 1, [label for _, _, label in columns])
        last_row = len(rows) + 1
        for row_num, row_data in enumerate(rows, 2):
            total = total_last and row_num == last_row
            tx_type = row_data.get(type_key) if type_key else None
            for col, (key, col_type, _) in enumerate(columns, 1):
                write_cell(ws, row_num, col, row_data.get(key),
                           currency=col_type == "currency", total=total, tx_type=tx_type)

        fit_columns(ws)
        ws.freeze_panes = "A2"
        return len(rows)

    def to_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.wb.save(buffer)
        return buffer.getvalue()
