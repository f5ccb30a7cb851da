"""
Shared data models for the Vibepoint service.

This module defines the core domain models used across multiple layers
of the application (business logic, CLI, API). Wire-facing models serialize
with camelCase aliases.
"""

import math
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


class CamelModel(BaseModel):
    """Base for models exchanged as camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# MARK: - Identity


class User(BaseModel):
    """An authenticated user as supplied by the identity collaborator."""

    id: str = Field(..., description="Stable user identifier")
    email: str | None = Field(None, description="Email address, if known")


# MARK: - Coordinates & Colors


class MoodCoordinate(BaseModel):
    """
    A point on the mood plane.

    Both components nominally live in [0, 1]. The model does not reject
    values outside that range; consumers clamp (see ``clamped``) and the
    entry input model validates before anything is persisted.
    """

    happiness: float = Field(..., description="0 = unhappy, 1 = happy")
    motivation: float = Field(..., description="0 = unmotivated, 1 = motivated")

    @classmethod
    def from_scale(cls, mood_x: float, mood_y: float) -> "MoodCoordinate":
        """Build from the stored 0-100 scale (``mood_y`` grows downwards)."""
        return cls(happiness=(100 - mood_y) / 100, motivation=mood_x / 100)

    def to_scale(self) -> tuple[float, float]:
        """Return ``(mood_x, mood_y)`` on the 0-100 storage scale."""
        return self.motivation * 100, 100 - self.happiness * 100

    def clamped(self) -> "MoodCoordinate":
        return MoodCoordinate(
            happiness=min(1.0, max(0.0, self.happiness)),
            motivation=min(1.0, max(0.0, self.motivation)),
        )

    @property
    def x(self) -> float:
        return self.motivation

    @property
    def y(self) -> float:
        return 1 - self.happiness


class Color(BaseModel):
    """An RGB display color. Derived on demand, never persisted."""

    r: int = Field(..., ge=0, le=255)
    g: int = Field(..., ge=0, le=255)
    b: int = Field(..., ge=0, le=255)

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    @property
    def css(self) -> str:
        return f"rgb({self.r}, {self.g}, {self.b})"


# MARK: - Entries


class MoodEntry(BaseModel):
    """A persisted mood entry, owned by exactly one user."""

    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str
    created_at: datetime
    mood_x: float = Field(..., ge=0, le=100, description="Motivation, 0-100")
    mood_y: float = Field(..., ge=0, le=100, description="Inverted happiness, 0-100")
    focus: str
    self_talk: str
    physical: str
    emotion_name: str | None = None
    notes: str | None = None
    focus_sentiment: float | None = None
    self_talk_sentiment: float | None = None
    physical_sentiment: float | None = None
    notes_sentiment: float | None = None
    overall_sentiment: float | None = None

    @property
    def coordinate(self) -> MoodCoordinate:
        return MoodCoordinate.from_scale(self.mood_x, self.mood_y)


class MoodEntryInput(CamelModel):
    """Payload for logging a new mood entry."""

    happiness: float = Field(..., ge=0, le=1)
    motivation: float = Field(..., ge=0, le=1)
    focus: str = Field(..., min_length=1, description="What the user is focused on")
    self_talk: str = Field(..., min_length=1, description="What the user tells themselves")
    physical_sensations: str = Field(..., min_length=1, description="Body sensations")
    emotion_name: str | None = None
    notes: str | None = None
    focus_sentiment: float | None = None
    self_talk_sentiment: float | None = None
    physical_sentiment: float | None = None
    notes_sentiment: float | None = None
    overall_sentiment: float | None = None

    @field_validator("focus", "self_talk", "physical_sensations", mode="before")
    @classmethod
    def _strip_required(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("emotion_name", "notes", mode="before")
    @classmethod
    def _strip_optional(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @property
    def coordinate(self) -> MoodCoordinate:
        return MoodCoordinate(happiness=self.happiness, motivation=self.motivation)


class EntryView(CamelModel):
    """An entry as returned to the presentation layer, with its color."""

    id: str
    created_at: datetime
    happiness: float
    motivation: float
    focus: str
    self_talk: str
    physical: str
    emotion_name: str | None = None
    notes: str | None = None
    color: str = Field(..., description="Hex display color")

    @classmethod
    def from_entry(cls, entry: MoodEntry, color: Color) -> "EntryView":
        coord = entry.coordinate
        return cls(
            id=entry.id,
            created_at=entry.created_at,
            happiness=coord.happiness,
            motivation=coord.motivation,
            focus=entry.focus,
            self_talk=entry.self_talk,
            physical=entry.physical,
            emotion_name=entry.emotion_name,
            notes=entry.notes,
            color=color.hex,
        )


# MARK: - Cooldown


class CooldownDecision(CamelModel):
    """Outcome of evaluating the rapid-entry window."""

    allowed: bool
    minutes_until_next: int | None = Field(None, ge=1)


# MARK: - Export & Deletion


class ExportedMood(CamelModel):
    x: float
    y: float
    happiness: int
    motivation: int


class ExportedSentiment(CamelModel):
    focus: float | None = None
    self_talk: float | None = None
    physical: float | None = None
    notes: float | None = None
    overall: float | None = None


class ExportedEntry(CamelModel):
    """Projection of a MoodEntry inside an export bundle."""

    id: str
    created_at: datetime
    mood: ExportedMood
    focus: str
    self_talk: str
    physical: str
    notes: str | None = None
    sentiment: ExportedSentiment

    @classmethod
    def from_entry(cls, entry: MoodEntry) -> "ExportedEntry":
        return cls(
            id=entry.id,
            created_at=entry.created_at,
            mood=ExportedMood(
                x=entry.mood_x,
                y=entry.mood_y,
                happiness=round_half_up(100 - entry.mood_y),
                motivation=round_half_up(entry.mood_x),
            ),
            focus=entry.focus,
            self_talk=entry.self_talk,
            physical=entry.physical,
            notes=entry.notes or None,
            sentiment=ExportedSentiment(
                focus=entry.focus_sentiment,
                self_talk=entry.self_talk_sentiment,
                physical=entry.physical_sentiment,
                notes=entry.notes_sentiment,
                overall=entry.overall_sentiment,
            ),
        )


class ExportBundle(CamelModel):
    """Full-history payload for a data export request. Never persisted."""

    exported_at: datetime
    user_id: str
    user_email: str | None = None
    data_type: str
    version: str
    total_entries: int
    entries: list[ExportedEntry]

    def to_export_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class DeleteResult(CamelModel):
    success: bool = True
    message: str
    deleted_at: datetime
