"""
Xpense — Configuration: paths, constants, header aliases.
"""
import datetime as dt
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths: XPENSE_DATA_DIR overrides the data directory
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("XPENSE_DATA_DIR", str(Path.home() / ".xpense")))
DATA_FOLDER = _data_dir
LEDGER_FILE = _data_dir / "transactions.json"

LOG_LEVEL = os.environ.get("XPENSE_LOG_LEVEL", "INFO")

# ---------------------------------------------------------------------------
# Field defaults
# ---------------------------------------------------------------------------
UNCATEGORIZED = "Uncategorized"

# Spreadsheet serial dates: exclusive bounds keep currency amounts out while
# accepting dates from 1954 to 2119.
SERIAL_DATE_MIN = 20000
SERIAL_DATE_MAX = 80000
SERIAL_DATE_EPOCH = dt.date(1899, 12, 30)

# ---------------------------------------------------------------------------
# Import header aliases (first match wins, resolved once per import)
# ---------------------------------------------------------------------------
HEADER_ALIASES = {
    "date": ["date", "Date"],
    "desc": ["desc", "Description"],
    "category": ["category", "Category"],
    "type": ["type", "Type"],
    "amount": ["amount", "Amount"],
}

CSV_DELIMITER = ","

# ---------------------------------------------------------------------------
# Export layout
# ---------------------------------------------------------------------------
TRANSACTIONS_SHEET = "Transactions"
SUMMARY_SHEET = "Summary"
BY_MONTH_SHEET = "By Month"

TRANSACTION_COLUMNS = ["Date", "Description", "Category", "Type", "Amount"]
SUMMARY_COLUMNS = ["Category", "Expense"]
BY_MONTH_COLUMNS = ["Month", "Income", "Expense", "Net"]
SUMMARY_TOTAL_LABEL = "TOTAL"

XLSX_FILENAME = "expenses.xlsx"
CSV_FILENAME = "expenses.csv"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
CSV_MEDIA_TYPE = "text/csv"
