"""
Tests for the InMemoryEntryStore implementation.

These tests verify the core functionality of the entry storage, including
adds, snapshot reads and whole-collection deletion.
"""

import asyncio
from datetime import timedelta

import pytest
from pydantic import ValidationError

from vibepoint.store import InMemoryEntryStore

from factories import NOW, make_input


class TestInMemoryEntryStore:
    """Test suite for InMemoryEntryStore functionality."""

    def setup_method(self):
        """Set up a fresh store for each test."""
        self.store = InMemoryEntryStore()

    async def test_initial_state(self):
        """A new store has no entries for anyone."""
        assert await self.store.list_entries("user-1") == []
        assert await self.store.count_entries("user-1") == 0

    async def test_add_converts_to_storage_scale(self):
        entry = await self.store.add_entry(
            "user-1", make_input(happiness=0.75, motivation=0.25), created_at=NOW
        )
        assert entry.user_id == "user-1"
        assert entry.created_at == NOW
        assert entry.mood_x == pytest.approx(25)
        assert entry.mood_y == pytest.approx(25)
        assert entry.physical == "tight shoulders"
        assert entry.coordinate.happiness == pytest.approx(0.75)
        assert entry.coordinate.motivation == pytest.approx(0.25)

    async def test_entries_are_immutable(self):
        entry = await self.store.add_entry("user-1", make_input())
        with pytest.raises(ValidationError):
            entry.focus = "changed"

    async def test_list_is_newest_first_and_per_user(self):
        older = await self.store.add_entry(
            "user-1", make_input(), created_at=NOW - timedelta(hours=2)
        )
        newer = await self.store.add_entry("user-1", make_input(), created_at=NOW)
        await self.store.add_entry("user-2", make_input(), created_at=NOW)

        entries = await self.store.list_entries("user-1")
        assert [e.id for e in entries] == [newer.id, older.id]
        assert await self.store.count_entries("user-2") == 1

    async def test_list_returns_a_snapshot(self):
        await self.store.add_entry("user-1", make_input(), created_at=NOW)
        snapshot = await self.store.list_entries("user-1")

        await self.store.add_entry("user-1", make_input(), created_at=NOW)
        assert len(snapshot) == 1
        assert await self.store.count_entries("user-1") == 2

    async def test_delete_removes_only_that_user(self):
        for _ in range(3):
            await self.store.add_entry("user-1", make_input())
        await self.store.add_entry("user-2", make_input())

        assert await self.store.delete_entries("user-1") == 3
        assert await self.store.list_entries("user-1") == []
        assert await self.store.count_entries("user-2") == 1

        # Deleting again is harmless
        assert await self.store.delete_entries("user-1") == 0

    async def test_delete_while_writers_are_running(self):
        """A delete racing writers removes a whole snapshot; later adds survive."""

        async def writer():
            for _ in range(20):
                await self.store.add_entry("user-1", make_input())
                await asyncio.sleep(0)

        async def deleter():
            while await self.store.count_entries("user-1") < 10:
                await asyncio.sleep(0)
            return await self.store.delete_entries("user-1")

        _, _, removed = await asyncio.gather(writer(), writer(), deleter())
        remaining = await self.store.count_entries("user-1")

        assert removed >= 10
        assert remaining > 0
        assert removed + remaining == 40
        assert len(await self.store.list_entries("user-1")) == remaining
