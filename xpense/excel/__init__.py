"""Workbook styling and writing for ledger exports."""
from .formatters import fit_columns, write_cell, write_header
from .writer import ExcelWriter
