"""Motor de consejos personalizados a partir del registro de salud."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

from salud_tips.model import LogEntry, Severity, Tip, format_number, to_flag, to_number

logger = logging.getLogger(__name__)

CYCLE_LENGTH_RANGE: tuple[int, int] = (21, 35)
CONSISTENCY_MIN_ENTRIES = 3


def derive_tips(log: Sequence[LogEntry]) -> list[Tip]:
    """Derive personal tips from the full log history.

    Tips come out in a fixed category order: BMI, sleep, heart rate,
    cycle and consistency. Categories without data are skipped.

    Args:
        log: Entries in insertion order; the last one is the latest.

    Returns:
        Ordered list of tips (empty for an empty log).
    """
    if not log:
        return []

    latest = log[-1]
    avg_sleep = _mean(to_number(entry.sleep_hours) for entry in log)
    avg_heart_rate = _mean(to_number(entry.heart_rate) for entry in log)

    tips: list[Tip] = []

    bmi = to_number(latest.bmi)
    if bmi is not None:
        tips.append(bmi_tip(bmi))

    if avg_sleep is not None:
        tips.append(sleep_tip(avg_sleep))

    if avg_heart_rate is not None:
        tips.append(heart_rate_tip(avg_heart_rate))

    if to_flag(latest.cycle_tracking):
        tips.extend(cycle_tips(to_number(latest.cycle_length)))

    if len(log) >= CONSISTENCY_MIN_ENTRIES:
        tips.append(consistency_tip(len(log)))

    logger.debug("Derived %d tips from %d log entries", len(tips), len(log))
    return tips


def _mean(values: Iterable[float | None]) -> float | None:
    total = 0.0
    count = 0
    for value in values:
        if value is None:
            continue
        total += value
        count += 1
    if not count or not math.isfinite(total):
        return None
    return total / count


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def bmi_tip(bmi: float) -> Tip:
    """Classify the latest BMI into one of four buckets."""
    shown = format_number(bmi)
    if bmi < 18.5:
        return Tip(
            severity=Severity.WARNING,
            icon="🍎",
            title="Nutrition Power-Up Needed!",
            body=(
                f"Your BMI ({shown}) shows you might be underweight. Try adding "
                "more nutrient-rich foods to your daily rations — think nuts, "
                "avocados, whole grains, and lean proteins. Small, frequent meals "
                "can help you gain healthy weight. Consider consulting a healer "
                "(doctor) for a personalised nutrition quest!"
            ),
        )
    if bmi < 25:
        return Tip(
            severity=Severity.GOOD,
            icon="🏆",
            title="BMI — Perfectly Balanced!",
            body=(
                f"Amazing work, hero! Your BMI ({shown}) is in the healthy range. "
                "Keep up your current eating and exercise habits to maintain this "
                'awesome stat. You\'ve unlocked the "Balance Master" achievement '
                "in our hearts!"
            ),
        )
    if bmi < 30:
        return Tip(
            severity=Severity.WARNING,
            icon="🏃",
            title="Training Montage Recommended!",
            body=(
                f"Your BMI ({shown}) is slightly above the healthy range. Time for "
                "a training montage! Try adding 30 minutes of movement to your "
                "daily routine — walking, swimming, cycling, or dancing all count. "
                "Small changes to portion sizes can also make a big difference on "
                "this quest."
            ),
        )
    return Tip(
        severity=Severity.ALERT,
        icon="⚠️",
        title="Critical Quest: Weight Management",
        body=(
            f"Your BMI ({shown}) is in the obese range. This is a tough boss "
            "battle, but you can win! Start with small goals — even a 5% weight "
            "reduction brings huge health bonuses. Please consider visiting a "
            "healer (doctor) who can create a personalised strategy for your "
            "journey."
        ),
    )


def sleep_tip(avg_sleep: float) -> Tip:
    """Classify average sleep hours (adults need 7-9)."""
    shown = f"{avg_sleep:.1f}"
    if avg_sleep < 6:
        return Tip(
            severity=Severity.ALERT,
            icon="😴",
            title="Critical! Sleep HP is Low!",
            body=(
                f"You're averaging only {shown} hours of sleep. Your character "
                "needs 7-9 hours to fully regenerate! Poor sleep weakens your "
                "immune defence, slows down XP gain, and makes boss fights (daily "
                'challenges) much harder. Try setting a "lights out" alarm 8 hours '
                "before you need to wake up."
            ),
        )
    if avg_sleep < 7:
        return Tip(
            severity=Severity.WARNING,
            icon="🛌",
            title="Sleep Buff Almost There!",
            body=(
                f"You're getting {shown} hours on average — close to the "
                "recommended 7-9 hours! Try going to bed just 30 minutes earlier. "
                "Avoid screen time (the blue light debuff!) before bed, and keep "
                "your sleeping chamber cool and dark for maximum rest bonus."
            ),
        )
    if avg_sleep <= 9:
        return Tip(
            severity=Severity.GOOD,
            icon="✨",
            title="Sleep Master Achievement!",
            body=(
                f"Excellent! You're averaging {shown} hours of sleep — right in "
                "the sweet spot! Quality rest gives you bonus HP regeneration, "
                "better focus stats, and stronger immune defence. Keep this up, "
                "champion!"
            ),
        )
    return Tip(
        severity=Severity.WARNING,
        icon="⏰",
        title="Oversleep Warning!",
        body=(
            f"You're averaging {shown} hours — that's more than the recommended "
            "7-9 hours. Too much sleep can actually lower your energy stats! If "
            "you're feeling constantly tired despite long rest, consider checking "
            "with a healer, as it might signal an underlying debuff."
        ),
    )


def heart_rate_tip(avg_heart_rate: float) -> Tip:
    """Round the average resting heart rate, then classify (normal 60-100)."""
    hr = _round_half_up(avg_heart_rate)
    if hr < 60:
        return Tip(
            severity=Severity.INFO,
            icon="💓",
            title="Low Resting Heart Rate",
            body=(
                f"Your average heart rate is {hr} bpm. If you're athletic, this "
                "could be a sign of great cardiovascular fitness — an S-tier "
                "passive ability! However, if you're not very active or feel "
                "dizzy/tired, it's worth mentioning to your healer (doctor)."
            ),
        )
    if hr <= 100:
        return Tip(
            severity=Severity.GOOD,
            icon="💚",
            title="Heart Rate — Optimal Zone!",
            body=(
                f"Your average heart rate of {hr} bpm is in the normal resting "
                "range (60-100 bpm). Your heart is performing well! Regular cardio "
                'exercise (the "Endurance Training" side quest) can help keep it '
                "even stronger."
            ),
        )
    return Tip(
        severity=Severity.ALERT,
        icon="❤️‍🔥",
        title="Heart Rate Running High!",
        body=(
            f"Your average heart rate is {hr} bpm, which is above the normal "
            "resting range. Stress, caffeine, and lack of exercise can cause this. "
            'Try deep breathing exercises (the "Meditation" skill), reduce '
            "caffeine potions, and add light exercise to your daily routine. If it "
            "stays high, please visit a healer!"
        ),
    )


def cycle_tips(cycle_length: float | None) -> list[Tip]:
    """Tracking-active tip, plus a warning when the length is atypical."""
    tips = [
        Tip(
            severity=Severity.INFO,
            icon="🌸",
            title="Cycle Tracking Active!",
            body=(
                "Great job tracking your cycle! Regular tracking helps you "
                "understand your body's patterns and predict changes in energy, "
                "mood, and physical performance. During your period, your iron "
                "levels may drop — combat this with iron-rich foods like spinach, "
                "red meat, or fortified cereals (HP restoration items!)."
            ),
        )
    ]
    low, high = CYCLE_LENGTH_RANGE
    if cycle_length is not None and (cycle_length < low or cycle_length > high):
        tips.append(
            Tip(
                severity=Severity.WARNING,
                icon="📊",
                title="Cycle Length — Worth Checking",
                body=(
                    "Your recorded cycle length of "
                    f"{format_number(cycle_length)} days is outside the typical "
                    f"{low}-{high} day range. This isn't always a problem "
                    "(everyone's different!), but if it's consistently irregular, "
                    "it's a good idea to chat with a healer (doctor) about it. They "
                    "can check for any hidden debuffs."
                ),
            )
        )
    return tips


def consistency_tip(count: int) -> Tip:
    """Reward logging streaks."""
    return Tip(
        severity=Severity.GOOD,
        icon="🔥",
        title="Streak Bonus Active!",
        body=(
            f"You've logged {count} quests so far — consistency is the most "
            "powerful buff in the game! Regular tracking helps you spot trends, "
            "catch problems early, and see your progress over time. Keep logging "
            "to unlock more achievements!"
        ),
    )
