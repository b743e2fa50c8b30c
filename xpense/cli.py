#!/usr/bin/env python3
"""
Xpense CLI — ledger entry, browsing, import/export, and the API server.

USAGE:
  python -m xpense.cli add 2024-01-05 "Groceries" 42.10 --category Food
  python -m xpense.cli add 2024-01-10 "Salary" 3000 --type income
  python -m xpense.cli list --month 2024-01 --query food --type expense
  python -m xpense.cli edit <id> --amount 40
  python -m xpense.cli delete <id>

  python -m xpense.cli import bank.csv                  # .csv or any workbook
  python -m xpense.cli export                           # expenses.xlsx in ./
  python -m xpense.cli export --csv --output ./out

  python -m xpense.cli summary                          # KPIs + monthly table
  python -m xpense.cli serve --port 8000
"""
from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Sequence

from xpense.analytics.dashboard import category_breakdown, compute_kpis, monthly_series
from xpense.config import LEDGER_FILE
from xpense.data.blob import FileBlobStore
from xpense.data.importer import import_file
from xpense.data.query import filter_transactions
from xpense.data.store import LedgerStore
from xpense.errors import LedgerError
from xpense.logging_setup import configure_logging
from xpense.reports.export import export_csv, export_ledger


def format_currency(value: float) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def _open_store(args) -> LedgerStore:
    return LedgerStore(FileBlobStore(args.ledger)).load()


def _print_rows(rows) -> None:
    for tx in rows:
        print(f"  {tx.date}  {tx.desc[:32]:<34}{tx.category[:18]:<20}{tx.type.value:<9}"
              f"{format_currency(tx.amount):>14}  {tx.id}")


def cmd_add(args):
    """Record a new transaction."""
    store = _open_store(args)
    tx = store.add({
        "date": args.date,
        "desc": args.desc,
        "category": args.category,
        "type": args.type,
        "amount": args.amount,
    })
    print(f"Added {tx.type.value} {format_currency(tx.amount)} on {tx.date} ({tx.id})")


def cmd_list(args):
    """Print the filtered table, newest first."""
    store = _open_store(args)
    rows = filter_transactions(store.all(), args.month or "", args.query or "", args.type)
    print(f"\n{len(rows)} transaction(s)\n")
    _print_rows(rows)


def cmd_edit(args):
    store = _open_store(args)
    tx = store.update(args.id, {
        "date": args.date,
        "desc": args.desc,
        "category": args.category,
        "type": args.type,
        "amount": args.amount,
    })
    print(f"Updated {tx.id}: {tx.date} {tx.desc} {tx.category} {tx.type.value} {format_currency(tx.amount)}")


def cmd_delete(args):
    store = _open_store(args)
    removed = store.delete(args.id)
    print(f"Deleted {removed.id} ({removed.desc})")


def cmd_import(args):
    """Import a CSV or spreadsheet file, skipping duplicates."""
    path = Path(args.file)
    if not path.exists():
        raise SystemExit(f"File not found: {path}")
    store = _open_store(args)
    outcome = import_file(store, path.name, path.read_bytes())
    if not outcome.ok:
        raise SystemExit(f"Import failed: {outcome.message}")
    print(outcome.message)


def cmd_export(args):
    store = _open_store(args)
    result = export_csv(store.all()) if args.csv else export_ledger(store.all())
    if result.notice:
        print(f"  Note: {result.notice}")
    path = result.save(args.output)
    print(f"Exported {len(store)} transaction(s) to {path}")


def cmd_summary(args):
    """KPI cards, category breakdown and the monthly net table."""
    store = _open_store(args)
    txs = store.all()
    kpis = compute_kpis(txs)

    print("\n" + "=" * 60)
    print("  XPENSE — SUMMARY")
    print("=" * 60)
    print(f"  Total expense:         {format_currency(kpis.total_expense):>16}")
    print(f"  Total income:          {format_currency(kpis.total_income):>16}")
    print(f"  Expense in {kpis.month}:   {format_currency(kpis.month_expense):>16}")

    breakdown = category_breakdown(txs)
    if breakdown.labels:
        print("\n  Expense by category")
        for label, value in zip(breakdown.labels, breakdown.series):
            print(f"    {label[:30]:<32}{format_currency(value):>16}")

    monthly = monthly_series(txs)
    if monthly.months:
        print("\n  Month      Expense          Net              Cumulative")
        for month, exp, net, cum in zip(monthly.months, monthly.expense, monthly.net, monthly.cumulative):
            print(f"  {month}  {format_currency(exp):>14}  {format_currency(net):>14}  {format_currency(cum):>14}")
    print("=" * 60 + "\n")


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Xpense API on port {args.port}...")
    if args.reload:
        # Reloading needs an import string, so the ledger comes from XPENSE_DATA_DIR
        uvicorn.run("xpense.main:app", host="0.0.0.0", port=args.port, reload=True,
                    timeout_keep_alive=65)
        return
    from xpense.main import create_app
    uvicorn.run(create_app(_open_store(args)), host="0.0.0.0", port=args.port,
                timeout_keep_alive=65)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Xpense — personal income/expense ledger",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--ledger", type=Path, default=LEDGER_FILE,
                        help=f"Ledger file (default: {LEDGER_FILE})")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    add_parser = subparsers.add_parser("add", help="Record a transaction")
    add_parser.add_argument("date", help="Date (YYYY-MM-DD or any parseable date)")
    add_parser.add_argument("desc", help="Description")
    add_parser.add_argument("amount", help="Amount (non-negative)")
    add_parser.add_argument("--category", default="", help="Category (default: Uncategorized)")
    add_parser.add_argument("--type", default="expense", help="expense or income")
    add_parser.set_defaults(func=cmd_add)

    list_parser = subparsers.add_parser("list", help="List transactions")
    list_parser.add_argument("--month", help="Month prefix YYYY-MM")
    list_parser.add_argument("--query", help="Text in description or category")
    list_parser.add_argument("--type", choices=["all", "expense", "income"], default="all")
    list_parser.set_defaults(func=cmd_list)

    edit_parser = subparsers.add_parser("edit", help="Edit a transaction")
    edit_parser.add_argument("id", help="Transaction id")
    edit_parser.add_argument("--date")
    edit_parser.add_argument("--desc")
    edit_parser.add_argument("--category")
    edit_parser.add_argument("--type")
    edit_parser.add_argument("--amount")
    edit_parser.set_defaults(func=cmd_edit)

    delete_parser = subparsers.add_parser("delete", help="Delete a transaction")
    delete_parser.add_argument("id", help="Transaction id")
    delete_parser.set_defaults(func=cmd_delete)

    import_parser = subparsers.add_parser("import", help="Import a .csv or spreadsheet file")
    import_parser.add_argument("file", help="File to import")
    import_parser.set_defaults(func=cmd_import)

    export_parser = subparsers.add_parser("export", help="Export the ledger")
    export_parser.add_argument("--output", default=".", help="Output directory (default: .)")
    export_parser.add_argument("--csv", action="store_true", help="Write expenses.csv instead of a workbook")
    export_parser.set_defaults(func=cmd_export)

    summary_parser = subparsers.add_parser("summary", help="Show KPIs and monthly totals")
    summary_parser.set_defaults(func=cmd_summary)

    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return

    configure_logging(args.log_level)
    try:
        args.func(args)
    except LedgerError as exc:
        raise SystemExit(f"Error: {exc}")


if __name__ == "__main__":
    main()
