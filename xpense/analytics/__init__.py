"""KPIs and chart series computed over the whole ledger."""
from .dashboard import category_breakdown, compute_kpis, dashboard, monthly_series, monthly_totals
