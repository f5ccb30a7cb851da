"""
Small deterministic helpers behind the dashboard cards: the daily
encouragement line, pattern-unlock progress and logging streaks.
"""

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from .config import PATTERN_UNLOCK_ENTRIES
from .models import CamelModel

ENCOURAGEMENT_MESSAGES = (
    "Noticing how you feel is already a step toward changing it.",
    "You don't have to fix everything today. Just take the next small step.",
    "Your feelings are information, not instructions.",
    "Rest counts as progress too.",
    "Every check-in teaches you something about yourself.",
    "Be as kind to yourself as you would be to a friend.",
    "A hard moment is not a hard life.",
    "You've handled difficult days before, and you can handle this one.",
    "Small shifts in focus can change the whole day.",
    "Curiosity about your mood beats judgment of it.",
)


def daily_encouragement(day: date, messages: tuple[str, ...] = ENCOURAGEMENT_MESSAGES) -> str:
    """Pick the message for ``day``: day-of-month modulo the table size."""
    return messages[day.day % len(messages)]


# MARK: - Pattern Unlock


class UnlockProgress(CamelModel):
    total_entries: int
    remaining: int
    percent: float
    unlocked: bool


def unlock_progress(total_entries: int, threshold: int = PATTERN_UNLOCK_ENTRIES) -> UnlockProgress:
    remaining = max(0, threshold - total_entries)
    percent = max(0, min(total_entries, threshold)) * 100 / threshold
    return UnlockProgress(
        total_entries=total_entries,
        remaining=remaining,
        percent=percent,
        unlocked=total_entries >= threshold,
    )


# MARK: - Streaks


class StreakInfo(CamelModel):
    current_streak: int
    longest_streak: int
    last_entry_date: date | None = None
    streak_active: bool


def calculate_streak(timestamps: Iterable[datetime], today: date) -> StreakInfo:
    """
    Count consecutive logging days.

    The current streak only runs while the latest entry is from today or
    yesterday; it counts back day by day from that latest entry. Several
    entries on one day count once.

    Args:
        timestamps: Entry creation times, in any order
        today: The reference day

    Returns:
        StreakInfo with current and longest runs
    """
    days = sorted({ts.date() for ts in timestamps}, reverse=True)
    if not days:
        return StreakInfo(current_streak=0, longest_streak=0, streak_active=False)

    last_day = days[0]
    streak_active = (today - last_day).days <= 1

    current = 0
    if streak_active:
        expected = last_day
        for day in days:
            if day != expected:
                break
            current += 1
            expected -= timedelta(days=1)

    longest = run = 1
    for newer, older in zip(days, days[1:]):
        run = run + 1 if (newer - older).days == 1 else 1
        longest = max(longest, run)

    return StreakInfo(
        current_streak=current,
        longest_streak=longest,
        last_entry_date=last_day,
        streak_active=streak_active,
    )


def streak_message(streak: int, streak_active: bool) -> str:
    if not streak_active:
        return "Start a new streak today!"
    if streak == 1:
        return "Great start!"
    if streak < 7:
        return f"{streak} days in a row!"
    if streak < 30:
        return f"{streak}-day streak! You're building a powerful habit!"
    if streak < 100:
        return f"{streak} days strong! Incredible consistency!"
    return f"{streak} days! You're a mood tracking master!"
