"""
Shared helpers for the analytics modules.
"""
from __future__ import annotations

import math
from typing import Iterable

import numpy as np
import pandas as pd

from xpense.data.schemas import Transaction

FRAME_COLUMNS = ["id", "date", "desc", "category", "type", "amount", "month", "signed"]


def to_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Ledger records as a DataFrame with ``month`` and ``signed`` columns.

    ``signed`` is the amount with income positive and expense negative.
    """
    records = [
        {**tx.to_dict(), "month": tx.month, "signed": tx.signed_amount}
        for tx in transactions
    ]
    if not records:
        return pd.DataFrame(columns=FRAME_COLUMNS).astype({"amount": float, "signed": float})

    df = pd.DataFrame.from_records(records, columns=FRAME_COLUMNS)
    return df.astype({"amount": float, "signed": float})


def sanitize_for_json(obj):
    """Recursively convert numpy/pandas types to native Python for JSON serialization."""
    if isinstance(obj, dict):
        return {str(k): sanitize_for_json(v) for k, v in obj.items() if k is not None}
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        v = float(obj)
        return 0.0 if (math.isnan(v) or math.isinf(v)) else v
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())
    if isinstance(obj, float):
        return 0.0 if (math.isnan(obj) or math.isinf(obj)) else obj
    if pd.api.types.is_scalar(obj) and pd.isna(obj):
        return None
    return obj
