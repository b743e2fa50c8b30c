import datetime as dt

from xpense.analytics.common import to_frame
from xpense.analytics.dashboard import (
    category_breakdown,
    compute_kpis,
    dashboard,
    monthly_series,
    monthly_totals,
)


def test_monthly_net_and_cumulative(sample_transactions):
    monthly = monthly_series(sample_transactions)

    assert monthly.months == ["2024-01", "2024-02"]
    assert dict(zip(monthly.months, monthly.net)) == {"2024-01": -50.0, "2024-02": -20.0}
    assert monthly.cumulative == [-50.0, -70.0]
    assert monthly.expense == [100.0, 20.0]


def test_category_breakdown_counts_expenses_only(sample_transactions):
    breakdown = category_breakdown(sample_transactions)
    assert breakdown.labels == ["Housing", "Food"]
    assert breakdown.series == [100.0, 20.0]
    assert "Job" not in breakdown.labels


def test_income_only_month_still_on_the_axis(make_tx):
    txs = [
        make_tx(date="2024-01-05", type="expense", amount=10),
        make_tx(date="2024-03-01", type="income", amount=25),
    ]
    monthly = monthly_series(txs)
    assert monthly.months == ["2024-01", "2024-03"]
    assert monthly.expense == [10.0, 0.0]
    assert monthly.net == [-10.0, 25.0]
    assert monthly.cumulative == [-10.0, 15.0]


def test_kpis_use_the_month_of_today(sample_transactions):
    kpis = compute_kpis(sample_transactions, today=dt.date(2024, 1, 20))
    assert kpis.total_expense == 120.0
    assert kpis.total_income == 50.0
    assert kpis.month_expense == 100.0
    assert kpis.month == "2024-01"

    later = compute_kpis(sample_transactions, today=dt.date(2024, 3, 1))
    assert later.month_expense == 0.0


def test_empty_ledger_produces_zeroes_and_empty_series():
    kpis = compute_kpis([], today=dt.date(2024, 1, 1))
    assert (kpis.total_expense, kpis.total_income, kpis.month_expense) == (0.0, 0.0, 0.0)
    assert category_breakdown([]).labels == []
    assert monthly_series([]).months == []
    assert monthly_totals([]).empty


def test_monthly_totals_pivot(sample_transactions):
    totals = monthly_totals(sample_transactions)
    assert list(totals.index) == ["2024-01", "2024-02"]
    assert totals.loc["2024-01", "income"] == 50.0
    assert totals.loc["2024-01", "expense"] == 100.0
    assert totals.loc["2024-01", "net"] == -50.0
    assert totals.loc["2024-02", "income"] == 0.0


def test_dashboard_payload_is_plain_json(sample_transactions):
    payload = dashboard(sample_transactions, today=dt.date(2024, 2, 10))
    assert payload["count"] == 3
    assert payload["kpis"]["month_expense"] == 20.0
    assert payload["charts"]["cumulative"] == {"labels": ["2024-01", "2024-02"], "series": [-50.0, -70.0]}
    assert payload["charts"]["category"]["labels"] == ["Housing", "Food"]
    assert all(type(v) is float for v in payload["charts"]["monthly"]["series"])


def test_frame_signed_column_follows_the_record(sample_transactions):
    df = to_frame(sample_transactions)
    assert list(df["signed"]) == [tx.signed_amount for tx in sample_transactions] == [-100.0, 50.0, -20.0]
    assert list(df["month"]) == ["2024-01", "2024-01", "2024-02"]
    assert to_frame([]).empty
