"""
Tests for the dashboard helpers: encouragement, unlock progress and streaks.
"""

from datetime import date, datetime, timezone

from vibepoint.config import PATTERN_UNLOCK_ENTRIES
from vibepoint.insights import (
    ENCOURAGEMENT_MESSAGES,
    calculate_streak,
    daily_encouragement,
    streak_message,
    unlock_progress,
)

TODAY = date(2026, 10, 17)


def at(day: int, hour: int = 9) -> datetime:
    return datetime(2026, 10, day, hour, tzinfo=timezone.utc)


class TestDailyEncouragement:
    def test_selects_by_day_of_month(self):
        assert daily_encouragement(TODAY) == ENCOURAGEMENT_MESSAGES[7]
        assert daily_encouragement(date(2026, 10, 10)) == ENCOURAGEMENT_MESSAGES[0]

    def test_same_day_same_message(self):
        assert daily_encouragement(date(2026, 1, 3)) == daily_encouragement(date(2026, 5, 3))


class TestUnlockProgress:
    def test_threshold(self):
        assert PATTERN_UNLOCK_ENTRIES == 10

    def test_partial(self):
        progress = unlock_progress(4)
        assert progress.remaining == 6
        assert progress.percent == 40.0
        assert progress.unlocked is False

    def test_unlocked_caps_percent(self):
        progress = unlock_progress(25)
        assert progress.remaining == 0
        assert progress.percent == 100.0
        assert progress.unlocked is True


class TestStreak:
    def test_no_entries(self):
        info = calculate_streak([], TODAY)
        assert info.current_streak == 0
        assert info.longest_streak == 0
        assert info.last_entry_date is None
        assert info.streak_active is False

    def test_multiple_entries_per_day_count_once(self):
        info = calculate_streak([at(17, 8), at(17, 20), at(16)], TODAY)
        assert info.current_streak == 2
        assert info.longest_streak == 2

    def test_streak_from_yesterday_is_still_active(self):
        info = calculate_streak([at(16), at(15), at(14)], TODAY)
        assert info.streak_active is True
        assert info.current_streak == 3
        assert info.last_entry_date == date(2026, 10, 16)

    def test_broken_streak(self):
        info = calculate_streak([at(15), at(14)], TODAY)
        assert info.streak_active is False
        assert info.current_streak == 0
        assert info.longest_streak == 2

    def test_longest_run_in_history(self):
        days = [at(17), at(16), at(12), at(11), at(10), at(9), at(5)]
        info = calculate_streak(days, TODAY)
        assert info.current_streak == 2
        assert info.longest_streak == 4


class TestStreakMessage:
    def test_messages(self):
        assert streak_message(5, False) == "Start a new streak today!"
        assert streak_message(1, True) == "Great start!"
        assert streak_message(4, True) == "4 days in a row!"
        assert streak_message(12, True).startswith("12-day streak!")
        assert streak_message(45, True).startswith("45 days strong!")
        assert streak_message(150, True).endswith("master!")
