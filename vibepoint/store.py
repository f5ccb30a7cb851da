"""
Mood entry storage for the Vibepoint service.

The core only depends on the ``EntryStore`` protocol; the persistence engine
behind it is a collaborator. ``InMemoryEntryStore`` backs the default app
and the tests, and can be swapped for a database-backed store with the same
methods.
"""

import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import Protocol

from .models import MoodEntry, MoodEntryInput

logger = logging.getLogger(__name__)


class EntryStore(Protocol):
    """
    CRUD operations over a user's mood entries.

    Implementations raise ``StorageFailure`` for any backend fault and do not
    retry. ``delete_entries`` must be all-or-nothing.
    """

    async def add_entry(
        self, user_id: str, entry: MoodEntryInput, created_at: datetime | None = None
    ) -> MoodEntry: ...

    async def list_entries(self, user_id: str) -> list[MoodEntry]: ...

    async def count_entries(self, user_id: str) -> int: ...

    async def delete_entries(self, user_id: str) -> int: ...


class InMemoryEntryStore:
    """
    In-memory entry storage keyed by user.

    All operations hold a single asyncio lock, so a read returns a consistent
    snapshot and a delete removes a user's whole collection in one step.
    """

    def __init__(self) -> None:
        self._entries: dict[str, list[MoodEntry]] = {}
        self._lock = asyncio.Lock()

    async def add_entry(
        self, user_id: str, entry: MoodEntryInput, created_at: datetime | None = None
    ) -> MoodEntry:
        """
        Persist a new entry for ``user_id``.

        Args:
            user_id: Owner of the entry
            entry: The validated entry payload
            created_at: Creation time, defaults to now (UTC)

        Returns:
            The stored MoodEntry
        """
        mood_x, mood_y = entry.coordinate.to_scale()
        stored = MoodEntry(
            id=str(uuid.uuid4()),
            user_id=user_id,
            created_at=created_at or datetime.now(timezone.utc),
            mood_x=mood_x,
            mood_y=mood_y,
            focus=entry.focus,
            self_talk=entry.self_talk,
            physical=entry.physical_sensations,
            emotion_name=entry.emotion_name,
            notes=entry.notes,
            focus_sentiment=entry.focus_sentiment,
            self_talk_sentiment=entry.self_talk_sentiment,
            physical_sentiment=entry.physical_sentiment,
            notes_sentiment=entry.notes_sentiment,
            overall_sentiment=entry.overall_sentiment,
        )
        async with self._lock:
            self._entries.setdefault(user_id, []).append(stored)
        return stored

    async def list_entries(self, user_id: str) -> list[MoodEntry]:
        """Return a snapshot of the user's entries, newest first."""
        async with self._lock:
            snapshot = list(self._entries.get(user_id, []))
        return sorted(snapshot, key=lambda e: e.created_at, reverse=True)

    async def count_entries(self, user_id: str) -> int:
        async with self._lock:
            return len(self._entries.get(user_id, []))

    async def delete_entries(self, user_id: str) -> int:
        """Drop every entry owned by ``user_id`` and return how many there were."""
        async with self._lock:
            removed = self._entries.pop(user_id, [])
        logger.debug("Removed %d entries for user %s", len(removed), user_id)
        return len(removed)
