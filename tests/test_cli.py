import json

import pytest

from xpense.cli import format_currency, main


@pytest.fixture
def ledger(tmp_path):
    return tmp_path / "transactions.json"


def test_format_currency():
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(-70) == "-$70.00"


def test_add_list_and_summary(ledger, capsys):
    main(["--ledger", str(ledger), "add", "2024-01-05", "Rent", "100", "--category", "Housing"])
    main(["--ledger", str(ledger), "add", "2024-01-10", "Salary", "50", "--type", "income"])

    saved = json.loads(ledger.read_text())
    assert [t["desc"] for t in saved] == ["Rent", "Salary"]

    capsys.readouterr()
    main(["--ledger", str(ledger), "list", "--type", "income"])
    out = capsys.readouterr().out
    assert "1 transaction(s)" in out
    assert "Salary" in out
    assert "Rent" not in out

    main(["--ledger", str(ledger), "summary"])
    out = capsys.readouterr().out
    assert "$100.00" in out
    assert "-$50.00" in out


def test_invalid_entry_exits_with_message(ledger):
    with pytest.raises(SystemExit) as excinfo:
        main(["--ledger", str(ledger), "add", "2024-01-05", "Rent", "-1"])
    assert "amount" in str(excinfo.value)


def test_export_then_import_round_trip(ledger, tmp_path, capsys):
    main(["--ledger", str(ledger), "add", "2024-01-05", "Rent", "100"])
    main(["--ledger", str(ledger), "export", "--output", str(tmp_path)])
    assert (tmp_path / "expenses.xlsx").exists()

    capsys.readouterr()
    main(["--ledger", str(ledger), "import", str(tmp_path / "expenses.xlsx")])
    assert "0 new" in capsys.readouterr().out
    assert len(json.loads(ledger.read_text())) == 1


def test_edit_and_delete(ledger):
    main(["--ledger", str(ledger), "add", "2024-01-05", "Rent", "100"])
    tx_id = json.loads(ledger.read_text())[0]["id"]

    main(["--ledger", str(ledger), "edit", tx_id, "--amount", "90"])
    assert json.loads(ledger.read_text())[0]["amount"] == 90.0

    main(["--ledger", str(ledger), "delete", tx_id])
    assert json.loads(ledger.read_text()) == []
