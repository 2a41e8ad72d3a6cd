"""Modelos tipados para el registro de salud y los consejos derivados."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

_TRUE_WORDS = frozenset({"true", "1", "yes", "on", "si", "sí"})


class Severity(str, Enum):
    """Presentation category of a tip."""

    GOOD = "good"
    WARNING = "warning"
    ALERT = "alert"
    INFO = "info"


@dataclass(frozen=True)
class LogEntry:
    """One user-submitted health snapshot.

    Numeric fields may carry raw values (e.g. ``"22.5"``) when they come
    straight from an import; use :func:`to_number` to read them.
    """

    recorded_at: datetime | None = None
    bmi: object = None
    sleep_hours: object = None
    heart_rate: object = None
    cycle_tracking: object = False
    cycle_length: object = None


@dataclass(frozen=True)
class Tip:
    """One advisory message."""

    severity: Severity
    icon: str
    title: str
    body: str


@dataclass(frozen=True)
class AdviceItem:
    """Static advice shown to everyone."""

    icon: str
    title: str
    body: str


def to_number(value: object) -> float | None:
    """Coerce a raw field to float; None if absent or not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def to_flag(value: object) -> bool:
    """Coerce a raw tracking flag to bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_WORDS
    if isinstance(value, int):
        return value != 0
    number = to_number(value)
    return number is not None and number != 0


def format_number(value: float) -> str:
    """Format a number as supplied, without trailing ``.0`` or exponent."""
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text:
        text = format(value, ".15f").rstrip("0").rstrip(".")
    return text if text else "0"
