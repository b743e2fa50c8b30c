"""Ledger export (workbook or CSV fallback)."""
from .export import ExportResult, export_csv, export_ledger
