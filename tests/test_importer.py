import datetime as dt
import io

from openpyxl import Workbook

from xpense.data.blob import MemoryBlobStore
from xpense.data.importer import (
    import_file,
    parse_delimited,
    resolve_headers,
    rows_to_transactions,
)
from xpense.data.store import LedgerStore
from xpense.reports.export import export_csv, export_ledger


def _workbook_bytes(rows):
    wb = Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def test_parse_delimited_is_a_plain_split():
    text = "date,desc,amount\r\n2024-01-05, Coffee ,3.5\n\n2024-01-06,Tea\n"
    assert parse_delimited(text) == [
        {"date": "2024-01-05", "desc": "Coffee", "amount": "3.5"},
        {"date": "2024-01-06", "desc": "Tea", "amount": None},
    ]
    assert parse_delimited("") == []


def test_header_aliases_prefer_canonical_names():
    assert resolve_headers(["Date", "desc", "Description", "Amount"]) == {
        "date": "Date", "desc": "desc", "amount": "Amount",
    }


def test_invalid_rows_are_skipped_silently():
    rows = [
        {"date": "2024-01-05", "desc": "Coffee", "category": "Food", "type": "expense", "amount": "3.5"},
        {"date": None, "desc": "No date", "amount": "1"},
        {"date": "2024-01-06", "desc": "  ", "amount": "2"},
        {"date": "2024-01-07", "desc": "Bad amount", "amount": "abc"},
    ]
    txs = rows_to_transactions(rows)
    assert [tx.desc for tx in txs] == ["Coffee"]


def test_csv_import_with_capitalized_headers(store):
    data = (
        "Date,Description,Category,Type,Amount\n"
        "2024-01-05,Rent,Housing,Expense,100\n"
        "2024-01-10,Salary,,INCOME,50\n"
        "2024-01-10,Salary,,INCOME,50\n"
    ).encode("utf-8")

    outcome = import_file(store, "bank.CSV", data)

    assert outcome.status == "imported"
    assert outcome.accepted == 3
    assert outcome.added == 2
    salary = store.all()[1]
    assert salary.type.value == "income"
    assert salary.category == "Uncategorized"


def test_reimporting_the_same_file_adds_nothing(store):
    data = b"\xef\xbb\xbfdate,desc,category,type,amount\n2024-01-05,Coffee,Food,expense,3.5\n"
    assert import_file(store, "a.csv", data).added == 1
    again = import_file(store, "a.csv", data)
    assert again.status == "imported"
    assert again.added == 0
    assert len(store) == 1


def test_workbook_import_handles_serial_and_typed_dates(store):
    data = _workbook_bytes([
        ["Date", "Description", "Category", "Type", "Amount"],
        [45292, "New year", "Fun", "expense", 12],
        [dt.datetime(2024, 3, 5), "Refund", "Shop", "income", -8.5],
        [None, "No date", "Fun", "expense", 1],
    ])

    outcome = import_file(store, "statement.xlsx", data)

    assert outcome.status == "imported"
    assert outcome.added == 2
    first, second = store.all()
    assert (first.date, first.amount) == ("2024-01-01", 12.0)
    assert (second.date, second.amount, second.type.value) == ("2024-03-05", 8.5, "income")


def test_no_valid_rows_is_reported_as_empty(store, blob):
    outcome = import_file(store, "empty.csv", b"date,desc,amount\n,,\n")
    assert outcome.status == "empty"
    assert outcome.ok
    assert blob.saves == 0


def test_corrupt_workbook_fails_without_touching_the_store(store, blob):
    store.add({"date": "2024-01-05", "desc": "Rent", "amount": 100})
    saves = blob.saves

    outcome = import_file(store, "broken.xlsx", b"this is not a zip file")

    assert outcome.status == "failed"
    assert not outcome.ok
    assert len(store) == 1
    assert blob.saves == saves


def test_undecodable_csv_fails(store):
    outcome = import_file(store, "latin.csv", b"date,desc\n2024-01-05,Caf\xe9\n")
    assert outcome.status == "failed"


def test_workbook_export_then_import_is_idempotent(sample_transactions):
    store = LedgerStore(MemoryBlobStore()).load()
    store.merge(sample_transactions)

    exported = export_ledger(store.all())
    outcome = import_file(store, exported.filename, exported.content)

    assert outcome.accepted == 3
    assert outcome.added == 0
    assert store.all() == sample_transactions


def test_csv_export_then_import_is_idempotent(sample_transactions):
    store = LedgerStore(MemoryBlobStore()).load()
    store.merge(sample_transactions)

    exported = export_csv(store.all())
    outcome = import_file(store, exported.filename, exported.content)

    assert outcome.added == 0
    assert len(store) == 3


def test_exported_workbook_loads_into_an_empty_ledger(sample_transactions):
    exported = export_ledger(sample_transactions)
    fresh = LedgerStore(MemoryBlobStore()).load()

    outcome = import_file(fresh, exported.filename, exported.content)

    assert outcome.added == 3
    assert [tx.to_dict() | {"id": None} for tx in fresh.all()] == [
        tx.to_dict() | {"id": None} for tx in sample_transactions
    ]


def test_formula_like_text_survives_a_workbook_round_trip(make_tx):
    store = LedgerStore(MemoryBlobStore()).load()
    store.merge([
        make_tx(desc="=Refund"),
        make_tx(desc="Split bill", category="=1+1"),
        make_tx(desc="+44 transfer", category="-fees"),
    ])

    exported = export_ledger(store.all())
    outcome = import_file(store, exported.filename, exported.content)

    assert outcome.accepted == 3
    assert outcome.added == 0
    assert [(tx.desc, tx.category) for tx in store.all()] == [
        ("=Refund", "Food"), ("Split bill", "=1+1"), ("+44 transfer", "-fees"),
    ]
