"""
Dashboard analytics — KPI cards and chart series over the whole ledger.

Computed from every record regardless of the table filters.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import asdict, dataclass, field
from typing import Iterable, Optional

import pandas as pd

from xpense.analytics.common import sanitize_for_json, to_frame
from xpense.data.schemas import Transaction


@dataclass(frozen=True)
class Kpis:
    total_expense: float
    total_income: float
    month_expense: float
    month: str                 # YYYY-MM used for month_expense


@dataclass(frozen=True)
class ChartSeries:
    """Labeled numeric series handed to a chart."""
    labels: list[str] = field(default_factory=list)
    series: list[float] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"labels": list(self.labels), "series": list(self.series)}


@dataclass(frozen=True)
class MonthlySeries:
    months: list[str]
    expense: list[float]
    net: list[float]
    cumulative: list[float]

    def expense_chart(self) -> ChartSeries:
        return ChartSeries(list(self.months), list(self.expense))

    def net_chart(self) -> ChartSeries:
        return ChartSeries(list(self.months), list(self.net))

    def cumulative_chart(self) -> ChartSeries:
        return ChartSeries(list(self.months), list(self.cumulative))


# ---------------------------------------------------------------------------
# KPIs
# ---------------------------------------------------------------------------

def compute_kpis(transactions: Iterable[Transaction], today: Optional[dt.date] = None) -> Kpis:
    """All-time expense and income totals plus this month's expense."""
    today = today or dt.date.today()
    current = f"{today:%Y-%m}"

    df = to_frame(transactions)
    expense = df[df["type"] == "expense"]
    income = df[df["type"] == "income"]
    return Kpis(
        total_expense=float(expense["amount"].sum()),
        total_income=float(income["amount"].sum()),
        month_expense=float(expense.loc[expense["month"] == current, "amount"].sum()),
        month=current,
    )


# ---------------------------------------------------------------------------
# Series
# ---------------------------------------------------------------------------

def category_breakdown(transactions: Iterable[Transaction]) -> ChartSeries:
    """Expense totals per category, in order of first appearance."""
    df = to_frame(transactions)
    expense = df[df["type"] == "expense"]
    if expense.empty:
        return ChartSeries()
    by_cat = expense.groupby("category", sort=False)["amount"].sum()
    return ChartSeries([str(c) for c in by_cat.index], [float(v) for v in by_cat.values])


def monthly_series(transactions: Iterable[Transaction]) -> MonthlySeries:
    """Per-month expense, signed net flow and running net.

    The month axis is every month with any record, ascending; months without
    expenses carry 0.
    """
    df = to_frame(transactions)
    if df.empty:
        return MonthlySeries([], [], [], [])

    months = sorted(df["month"].unique())
    expense = (
        df[df["type"] == "expense"]
        .groupby("month")["amount"].sum()
        .reindex(months, fill_value=0.0)
    )
    net = df.groupby("month")["signed"].sum().reindex(months, fill_value=0.0)
    cumulative = net.cumsum()
    return MonthlySeries(
        months=[str(m) for m in months],
        expense=[float(v) for v in expense.values],
        net=[float(v) for v in net.values],
        cumulative=[float(v) for v in cumulative.values],
    )


def monthly_totals(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Month-indexed frame with ``income``, ``expense`` and ``net`` columns."""
    df = to_frame(transactions)
    if df.empty:
        return pd.DataFrame(columns=["income", "expense", "net"], dtype=float)

    pivot = df.pivot_table(
        index="month", columns="type", values="amount", aggfunc="sum", fill_value=0.0,
    ).reindex(columns=["income", "expense"], fill_value=0.0)
    pivot = pivot.sort_index()
    pivot["net"] = pivot["income"] - pivot["expense"]
    pivot.columns.name = None
    return pivot


# ---------------------------------------------------------------------------
# Dashboard payload
# ---------------------------------------------------------------------------

def dashboard(transactions: Iterable[Transaction], today: Optional[dt.date] = None) -> dict:
    """KPIs and chart payloads for the dashboard page, JSON-safe."""
    transactions = list(transactions)
    kpis = compute_kpis(transactions, today)
    monthly = monthly_series(transactions)
    return sanitize_for_json({
        "count": len(transactions),
        "kpis": asdict(kpis),
        "charts": {
            "category": category_breakdown(transactions).to_dict(),
            "monthly": monthly.expense_chart().to_dict(),
            "net": monthly.net_chart().to_dict(),
            "cumulative": monthly.cumulative_chart().to_dict(),
        },
    })
