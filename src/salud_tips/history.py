"""Vista tabular del historial de registros (preview y exportación)."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime

import pandas as pd

from salud_tips.model import LogEntry, to_flag, to_number

HISTORY_COLUMNS: list[str] = [
    "entry",
    "recorded_at",
    "bmi",
    "sleep_hours",
    "heart_rate",
    "cycle_tracking",
    "cycle_length",
]


def log_to_frame(log: Sequence[LogEntry]) -> pd.DataFrame:
    """Convert log entries to a DataFrame, one row per entry, log order kept.

    Raw values are coerced; anything that is not numeric becomes NA.
    """
    rows = [
        {
            "entry": idx,
            "recorded_at": entry.recorded_at,
            "bmi": to_number(entry.bmi),
            "sleep_hours": to_number(entry.sleep_hours),
            "heart_rate": to_number(entry.heart_rate),
            "cycle_tracking": to_flag(entry.cycle_tracking),
            "cycle_length": to_number(entry.cycle_length),
        }
        for idx, entry in enumerate(log, start=1)
    ]
    if not rows:
        return pd.DataFrame(columns=HISTORY_COLUMNS)
    df = pd.DataFrame(rows, columns=HISTORY_COLUMNS)
    for col in ("bmi", "sleep_hours", "heart_rate", "cycle_length"):
        df[col] = pd.to_numeric(df[col], errors="coerce")
    return df


def history_summary(df: pd.DataFrame) -> dict[str, float | int | None]:
    """Count and averages for the metric columns."""
    if df.empty:
        return {
            "entries": 0,
            "avg_sleep_hours": None,
            "avg_heart_rate": None,
            "latest_bmi": None,
        }

    def mean_or_none(col: str) -> float | None:
        result = df[col].mean()
        if pd.isna(result):
            return None
        return round(float(result), 2)

    latest_bmi = df["bmi"].iloc[-1]
    return {
        "entries": int(len(df)),
        "avg_sleep_hours": mean_or_none("sleep_hours"),
        "avg_heart_rate": mean_or_none("heart_rate"),
        "latest_bmi": None if pd.isna(latest_bmi) else float(latest_bmi),
    }


def display_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Prepare a string-renderable DataFrame for aligned preview."""
    if df.empty:
        return df.copy()
    out = df.copy()
    for col in out.columns:
        out[col] = out[col].map(_format_preview_value)
    return out


def _format_preview_value(value: object) -> str:
    """Format preview values without NaN/scientific notation."""
    if value is None:
        return ""
    if pd.api.types.is_bool(value):
        return "si" if value else "no"
    if isinstance(value, float | int) and pd.isna(value):
        return ""
    if value is pd.NaT:
        return ""
    if isinstance(value, pd.Timestamp):
        ts = value.tz_localize(None) if value.tzinfo is not None else value
        return ts.strftime("%d/%m/%Y %H:%M")
    if isinstance(value, datetime):
        dt_value = value.replace(tzinfo=None) if value.tzinfo is not None else value
        return dt_value.strftime("%d/%m/%Y %H:%M")
    if isinstance(value, date):
        return value.strftime("%d/%m/%Y")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        text = format(value, "f").rstrip("0").rstrip(".")
        return text if text else "0"
    return str(value)
