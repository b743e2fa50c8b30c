"""
Field normalization: dates, amounts, transaction type, text fields.

Every normalizer returns a canonical value or ``None`` (refused);
``build_transaction`` turns a refusal into a ``ValidationError``.
"""
from __future__ import annotations

import datetime as dt
import math
import re
import uuid
from typing import Any, Mapping

import numpy as np
import pandas as pd

from xpense.config import SERIAL_DATE_EPOCH, SERIAL_DATE_MAX, SERIAL_DATE_MIN, UNCATEGORIZED
from xpense.data.schemas import Transaction, TxType
from xpense.errors import ValidationError

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_CURRENCY_RE = re.compile(r"[\$,\s]")


def new_id() -> str:
    return uuid.uuid4().hex


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _as_number(value: Any) -> float | None:
    """Numeric reading of a cell value, or None when it is not a number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, np.number)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

def serial_to_iso(serial: float) -> str:
    """Spreadsheet serial day count → YYYY-MM-DD (time of day is dropped)."""
    return (SERIAL_DATE_EPOCH + dt.timedelta(days=int(serial))).isoformat()


def _datetime_to_iso(value: dt.date) -> str:
    if isinstance(value, dt.datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date().isoformat()
    return value.isoformat()


def normalize_date(value: Any) -> str | None:
    """Canonical ``YYYY-MM-DD`` date, or None.

    Tries, in order: a value already typed as a date by the spreadsheet
    codec, a canonical string, a spreadsheet serial number inside
    ``(SERIAL_DATE_MIN, SERIAL_DATE_MAX)``, and finally a general calendar
    string parse (timezone-aware results are converted to local time).
    """
    if _is_missing(value) or isinstance(value, bool):
        return None
    if isinstance(value, (dt.datetime, dt.date)):
        return _datetime_to_iso(value)

    text = str(value).strip()
    if _ISO_DATE_RE.match(text):
        try:
            dt.date.fromisoformat(text)
        except ValueError:
            return None
        return text

    number = _as_number(value)
    if number is not None and SERIAL_DATE_MIN < number < SERIAL_DATE_MAX:
        return serial_to_iso(number)
    if not isinstance(value, str):
        # Bare numbers outside the serial range are amounts, not dates
        return None

    try:
        parsed = pd.to_datetime(text, errors="coerce")
    except (ValueError, OverflowError, TypeError):
        return None
    if pd.isna(parsed):
        return None
    return _datetime_to_iso(parsed.to_pydatetime())


# ---------------------------------------------------------------------------
# Amounts
# ---------------------------------------------------------------------------

def normalize_amount(value: Any) -> float | None:
    """Float amount with currency symbols and separators stripped, or None.

    The sign is kept; callers decide whether a negative value is refused or
    folded into its magnitude.
    """
    if _is_missing(value) or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, np.number)):
        number = float(value)
    else:
        try:
            number = float(_CURRENCY_RE.sub("", str(value)))
        except ValueError:
            return None
    if not math.isfinite(number):
        return None
    return number


# ---------------------------------------------------------------------------
# Type / text fields
# ---------------------------------------------------------------------------

def classify_type(value: Any) -> TxType:
    """Anything mentioning "inc" (Income, INCOME, inc.) is income."""
    if isinstance(value, TxType):
        return value
    if _is_missing(value):
        return TxType.EXPENSE
    return TxType.INCOME if "inc" in str(value).lower() else TxType.EXPENSE


def normalize_category(value: Any) -> str:
    if _is_missing(value):
        return UNCATEGORIZED
    return str(value).strip() or UNCATEGORIZED


def normalize_desc(value: Any) -> str | None:
    if _is_missing(value):
        return None
    return str(value).strip() or None


# ---------------------------------------------------------------------------
# Record assembly
# ---------------------------------------------------------------------------

def build_transaction(
    raw: Mapping[str, Any],
    *,
    tx_id: str | None = None,
    allow_negative: bool = False,
) -> Transaction:
    """Normalize a raw ``{date, desc, category, type, amount}`` mapping.

    Raises ``ValidationError`` on the first refused field, so a partially
    valid record never comes out. ``allow_negative`` folds a negative amount
    into its magnitude instead of refusing it.
    """
    date = normalize_date(raw.get("date"))
    if date is None:
        raise ValidationError("date", raw.get("date"), "not a recognizable date")

    desc = normalize_desc(raw.get("desc"))
    if desc is None:
        raise ValidationError("desc", raw.get("desc"), "description is required")

    amount = normalize_amount(raw.get("amount"))
    if amount is None:
        raise ValidationError("amount", raw.get("amount"), "not a number")
    if amount < 0 and not allow_negative:
        raise ValidationError("amount", raw.get("amount"), "must not be negative")

    return Transaction(
        id=tx_id or new_id(),
        date=date,
        desc=desc,
        category=normalize_category(raw.get("category")),
        type=classify_type(raw.get("type")),
        amount=abs(amount),
    )
