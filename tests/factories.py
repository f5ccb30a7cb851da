"""Shared builders for the test suites."""

from datetime import datetime, timezone

from vibepoint.models import MoodEntryInput

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


def make_input(happiness: float = 0.7, motivation: float = 0.4, **overrides) -> MoodEntryInput:
    data = {
        "happiness": happiness,
        "motivation": motivation,
        "focus": "work deadline",
        "self_talk": "I can handle this",
        "physical_sensations": "tight shoulders",
    }
    data.update(overrides)
    return MoodEntryInput(**data)
