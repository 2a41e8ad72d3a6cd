from __future__ import annotations

from decimal import Decimal

import pytest

from salud_tips.model import LogEntry, Severity
from salud_tips.tips import derive_tips


def _titles(tips: list) -> list[str]:
    return [t.title for t in tips]


def test_empty_log_returns_no_tips() -> None:
    assert derive_tips([]) == []


def test_single_bmi_entry_gives_one_good_tip() -> None:
    tips = derive_tips([LogEntry(bmi=24.0)])
    assert len(tips) == 1
    assert tips[0].severity is Severity.GOOD
    assert "24" in tips[0].body


@pytest.mark.parametrize(
    ("bmi", "severity", "title_word"),
    [
        (17.0, Severity.WARNING, "Nutrition"),
        (18.5, Severity.GOOD, "Balanced"),
        (24.999, Severity.GOOD, "Balanced"),
        (25.0, Severity.WARNING, "Training"),
        (29.999, Severity.WARNING, "Training"),
        (30.0, Severity.ALERT, "Weight Management"),
    ],
)
def test_bmi_boundaries(bmi: float, severity: Severity, title_word: str) -> None:
    (tip,) = derive_tips([LogEntry(bmi=bmi)])
    assert tip.severity is severity
    assert title_word in tip.title


def test_bmi_body_keeps_supplied_value() -> None:
    (tip,) = derive_tips([LogEntry(bmi=24.999)])
    assert "(24.999)" in tip.body
    (tip,) = derive_tips([LogEntry(bmi=22.5)])
    assert "(22.5)" in tip.body


def test_bmi_numeric_string_is_coerced() -> None:
    (tip,) = derive_tips([LogEntry(bmi="22.5")])
    assert tip.severity is Severity.GOOD
    assert "(22.5)" in tip.body


@pytest.mark.parametrize("raw", [None, "--", "", "abc", float("nan"), True])
def test_bmi_absent_or_malformed_is_skipped(raw: object) -> None:
    assert derive_tips([LogEntry(bmi=raw)]) == []


def test_bmi_uses_latest_entry_only() -> None:
    tips = derive_tips([LogEntry(bmi=35.0), LogEntry(bmi=22.0)])
    assert tips[0].severity is Severity.GOOD
    assert derive_tips([LogEntry(bmi=22.0), LogEntry()]) == []


def test_sleep_average_good_bucket() -> None:
    log = [LogEntry(sleep_hours=h) for h in (5, 7, 9)]
    tips = derive_tips(log)
    sleep = tips[0]
    assert sleep.severity is Severity.GOOD
    assert "7.0" in sleep.body


@pytest.mark.parametrize(
    ("hours", "severity", "title_word"),
    [
        (5.9, Severity.ALERT, "Critical"),
        (6.0, Severity.WARNING, "Almost"),
        (6.99, Severity.WARNING, "Almost"),
        (7.0, Severity.GOOD, "Master"),
        (9.0, Severity.GOOD, "Master"),
        (9.1, Severity.WARNING, "Oversleep"),
    ],
)
def test_sleep_buckets(hours: float, severity: Severity, title_word: str) -> None:
    (tip,) = derive_tips([LogEntry(sleep_hours=hours)])
    assert tip.severity is severity
    assert title_word in tip.title


def test_sleep_average_ignores_missing_and_malformed() -> None:
    log = [
        LogEntry(sleep_hours="8"),
        LogEntry(sleep_hours=None),
        LogEntry(sleep_hours="n/a"),
    ]
    (tip,) = derive_tips(log)
    assert "8.0" in tip.body


def test_sleep_body_rounds_to_one_decimal() -> None:
    (tip,) = derive_tips([LogEntry(sleep_hours=7.0), LogEntry(sleep_hours=7.25)])
    assert "7.1" in tip.body


def test_heart_rate_rounds_before_bucketing() -> None:
    (tip,) = derive_tips([LogEntry(heart_rate=59.6)])
    assert tip.severity is Severity.GOOD
    assert "60 bpm" in tip.body


@pytest.mark.parametrize(
    ("rates", "severity"),
    [
        ([59.4], Severity.INFO),
        ([59.5], Severity.GOOD),
        ([100.4], Severity.GOOD),
        ([100.5], Severity.ALERT),
        ([90, 120], Severity.ALERT),
        ([50, 60], Severity.INFO),
    ],
)
def test_heart_rate_buckets(rates: list[float], severity: Severity) -> None:
    log = [LogEntry(heart_rate=r) for r in rates]
    tips = derive_tips(log)
    assert tips[0].severity is severity


def test_cycle_length_out_of_range_adds_warning() -> None:
    tips = derive_tips([LogEntry(cycle_tracking=True, cycle_length=40)])
    assert [t.severity for t in tips] == [Severity.INFO, Severity.WARNING]
    assert "40 days" in tips[1].body


def test_cycle_length_in_range_only_tracking_tip() -> None:
    tips = derive_tips([LogEntry(cycle_tracking=True, cycle_length=28)])
    assert len(tips) == 1
    assert tips[0].severity is Severity.INFO


@pytest.mark.parametrize(("length", "count"), [(20, 2), (21, 1), (35, 1), (36, 2)])
def test_cycle_length_limits(length: int, count: int) -> None:
    tips = derive_tips([LogEntry(cycle_tracking=True, cycle_length=length)])
    assert len(tips) == count


def test_cycle_ignored_without_tracking_flag() -> None:
    assert derive_tips([LogEntry(cycle_tracking=False, cycle_length=40)]) == []


def test_cycle_tracking_string_flag() -> None:
    tips = derive_tips([LogEntry(cycle_tracking="true")])
    assert _titles(tips) == ["Cycle Tracking Active!"]


def test_consistency_needs_three_entries() -> None:
    assert derive_tips([LogEntry(), LogEntry()]) == []
    tips = derive_tips([LogEntry(), LogEntry(), LogEntry()])
    assert len(tips) == 1
    assert tips[0].severity is Severity.GOOD
    assert "3" in tips[0].body


def test_category_order_is_fixed() -> None:
    log = [
        LogEntry(heart_rate=70, sleep_hours=8),
        LogEntry(sleep_hours=8),
        LogEntry(
            cycle_length=45,
            cycle_tracking=True,
            heart_rate=72,
            bmi=31,
        ),
    ]
    assert _titles(derive_tips(log)) == [
        "Critical Quest: Weight Management",
        "Sleep Master Achievement!",
        "Heart Rate — Optimal Zone!",
        "Cycle Tracking Active!",
        "Cycle Length — Worth Checking",
        "Streak Bonus Active!",
    ]


def test_derive_tips_is_idempotent_and_does_not_mutate() -> None:
    log = [LogEntry(bmi=27, sleep_hours=6.5), LogEntry(heart_rate=110)]
    snapshot = list(log)
    first = derive_tips(log)
    second = derive_tips(log)
    assert first == second
    assert log == snapshot


@pytest.mark.parametrize(
    "log",
    [
        [LogEntry(bmi=10**400)],
        [LogEntry(sleep_hours=-(10**400))],
        [LogEntry(cycle_tracking=10**400, cycle_length=10**400)],
        [LogEntry(heart_rate=1e308), LogEntry(heart_rate=1e308)],
        [LogEntry(sleep_hours=1e308), LogEntry(sleep_hours=1e308)],
        [LogEntry(bmi=object(), heart_rate=[70], cycle_tracking=float("nan"))],
    ],
)
def test_extreme_values_never_raise(log: list[LogEntry]) -> None:
    tips = derive_tips(log)
    assert isinstance(tips, list)


def test_heart_rate_sum_overflow_is_skipped() -> None:
    assert derive_tips([LogEntry(heart_rate=1e308), LogEntry(heart_rate=1e308)]) == []


def test_huge_int_tracking_flag_counts_as_on() -> None:
    tips = derive_tips([LogEntry(cycle_tracking=10**400)])
    assert _titles(tips) == ["Cycle Tracking Active!"]


def test_decimal_bmi_is_coerced() -> None:
    (tip,) = derive_tips([LogEntry(bmi=Decimal("22.5"))])
    assert tip.severity is Severity.GOOD
    assert "(22.5)" in tip.body
