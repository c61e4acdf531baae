"""
utils.py
Form parsing/validation, display formatting, table frames and CSV exports.
"""

from __future__ import annotations

import math
import re
from collections.abc import MutableMapping
from dataclasses import asdict
from datetime import date, datetime

import pandas as pd

from config import settings

TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$")


def format_currency(amount) -> str:
    return f"{settings.CURRENCY_SYMBOL}{float(amount or 0):,.2f}"


def format_date(value: str | None) -> str:
    """Calendar date in the viewer's format, e.g. '19 Oct 2026'. Accepts dates and timestamps."""
    if not value:
        return ""
    try:
        d: date = datetime.fromisoformat(str(value)).date()
    except ValueError:
        return str(value)
    return f"{d.day} {d:%b %Y}"


def format_time(value: str | None) -> str:
    """HH:MM for display (the store keeps whatever was submitted, seconds included)."""
    return (value or "")[:5]


def parse_amount(text: str) -> float:
    try:
        amount = float(str(text).strip())
    except ValueError:
        raise ValueError("Amount must be numeric.") from None
    if not math.isfinite(amount):
        raise ValueError("Amount must be numeric.")
    return amount


def parse_quantity(text: str) -> int:
    try:
        return int(str(text).strip())
    except ValueError:
        raise ValueError("Quantity must be a whole number.") from None


def validate_time(text: str) -> str:
    value = str(text).strip()
    if not TIME_RE.match(value):
        raise ValueError("Time must be HH:MM or HH:MM:SS.")
    return value


def missing_fields(**values) -> list[str]:
    """
    Required-field check for a submitted form.
    missing_fields(title="", amount="5") -> ["Title is required."]
    """
    errors: list[str] = []
    for name, value in values.items():
        if not str(value or "").strip():
            label = name.replace("_", " ").capitalize()
            errors.append(f"{label} is required.")
    return errors


def reset_fields(state: MutableMapping, keys) -> None:
    # dropping a widget's key makes it render with its default value next run
    for key in keys:
        state.pop(key, None)


def sum_amounts(rows) -> float:
    return sum(float(r.amount) for r in rows)


def rows_to_frame(rows, columns: dict) -> pd.DataFrame:
    """
    Display frame: `columns` maps a label to a callable taking one row.
    An empty list still yields the column headers.
    """
    if not rows:
        return pd.DataFrame(columns=list(columns))
    return pd.DataFrame([{label: get(r) for label, get in columns.items()} for r in rows])


def rows_to_csv_bytes(rows) -> bytes:
    df = pd.DataFrame([asdict(r) for r in rows])
    return df.to_csv(index=False).encode("utf-8")
