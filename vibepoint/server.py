"""
FastAPI server for the Vibepoint service.

This module implements the HTTP API: mood entry logging behind the rapid-entry
cooldown, entry listing with display colors, GDPR-style export and deletion,
and the subscription status passthrough.
"""

import logging
from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from datetime import date, datetime, timezone
from typing import Any

from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from . import __version__
from .colors import map_color
from .config import HOST, LOG_LEVEL, PORT, SERVICE_NAME, configure_logging
from .cooldown import evaluate
from .errors import InvalidConfirmation, StorageFailure, Unauthorized, VibepointError
from .insights import calculate_streak, daily_encouragement, streak_message, unlock_progress
from .lifecycle import DataLifecycleService
from .models import CooldownDecision, EntryView, MoodCoordinate, MoodEntryInput, User
from .store import EntryStore, InMemoryEntryStore
from .subscriptions import FreeTierProvider, SubscriptionProvider

logger = logging.getLogger(__name__)

IdentityResolver = Callable[[Request], User | None]


# API Request/Response Schemas
class ColorResponse(BaseModel):
    r: int
    g: int
    b: int
    hex: str


def header_identity(request: Request) -> User | None:
    """
    Resolve the caller from headers set by the upstream auth proxy.

    Returns None when no user id is present.
    """
    user_id = request.headers.get("X-User-Id", "").strip()
    if not user_id:
        return None
    return User(id=user_id, email=request.headers.get("X-User-Email"))


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def _read_confirmation(request: Request) -> Any:
    """Pull ``confirmation`` out of a JSON body, or None if there is none."""
    try:
        body = await request.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    return body.get("confirmation")


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    return f"Invalid request: {location}: {message}" if location else f"Invalid request: {message}"


def create_app(
    entry_store: EntryStore,
    identity_resolver: IdentityResolver = header_identity,
    subscriptions: SubscriptionProvider | None = None,
    clock: Callable[[], datetime] = _utcnow,
) -> FastAPI:
    """
    Create a FastAPI application around the given collaborators.

    Args:
        entry_store: Storage for mood entries
        identity_resolver: Maps a request to the calling User, or None
        subscriptions: Subscription status source, free tier if omitted
        clock: Source of "now", injectable for tests

    Returns:
        Configured FastAPI application
    """
    subscription_provider = subscriptions or FreeTierProvider()
    lifecycle = DataLifecycleService(entry_store, clock=clock)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Lifespan context manager for FastAPI application."""
        logger.info("Starting %s %s", SERVICE_NAME, __version__)
        yield

    app = FastAPI(
        title="Vibepoint",
        description="Mood tracking API with rate-limited logging and data export",
        version=__version__,
        lifespan=lifespan,
    )

    @app.exception_handler(VibepointError)
    async def vibepoint_error_handler(
        request: Request, exc: VibepointError
    ) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422, content={"error": _describe_validation_error(exc)}
        )

    def current_user(request: Request) -> User:
        user = identity_resolver(request)
        if user is None:
            raise Unauthorized()
        return user

    @app.get("/")
    async def root() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": SERVICE_NAME}

    # MARK: - Entries

    @app.get("/api/entries")
    async def list_entries(user: User = Depends(current_user)) -> list[EntryView]:
        """
        List the caller's entries, newest first, each with its display color.
        """
        try:
            entries = await entry_store.list_entries(user.id)
        except Exception as e:
            logger.exception("Error listing entries for user %s", user.id)
            raise StorageFailure("Failed to load entries") from e
        return [EntryView.from_entry(e, map_color(e.coordinate)) for e in entries]

    @app.get("/api/entries/cooldown")
    async def get_cooldown(user: User = Depends(current_user)) -> CooldownDecision:
        """
        Report whether the caller could log an entry right now.

        Read-only; the same decision is re-made when an entry is submitted.
        """
        try:
            entries = await entry_store.list_entries(user.id)
        except Exception as e:
            logger.exception("Error loading history for user %s", user.id)
            raise StorageFailure("Failed to load entries") from e
        return evaluate([e.created_at for e in entries], clock())

    @app.post("/api/entries", status_code=201)
    async def create_entry(
        entry: MoodEntryInput, user: User = Depends(current_user)
    ) -> EntryView:
        """
        Log a new mood entry unless the rapid-entry window is full.

        Args:
            entry: The mood entry payload

        Returns:
            The stored entry with its color, or a 429 carrying
            ``minutesUntilNext`` when blocked
        """
        now = clock()
        try:
            history = await entry_store.list_entries(user.id)
        except Exception as e:
            logger.exception("Error loading history for user %s", user.id)
            raise StorageFailure("Failed to save entry") from e

        decision = evaluate([e.created_at for e in history], now)
        if not decision.allowed:
            return JSONResponse(
                status_code=429,
                content={
                    "error": "Too many entries in a short time. Take a moment to reflect.",
                    "minutesUntilNext": decision.minutes_until_next,
                },
            )

        try:
            stored = await entry_store.add_entry(user.id, entry, created_at=now)
        except Exception as e:
            logger.exception("Error saving entry for user %s", user.id)
            raise StorageFailure("Failed to save entry") from e
        return EntryView.from_entry(stored, map_color(stored.coordinate))

    # MARK: - Visualization

    @app.get("/api/colors")
    async def get_color(
        happiness: float = Query(..., description="0 = unhappy, 1 = happy"),
        motivation: float = Query(..., description="0 = unmotivated, 1 = motivated"),
    ) -> ColorResponse:
        """Color for an arbitrary coordinate, clamped to the mood plane."""
        color = map_color(MoodCoordinate(happiness=happiness, motivation=motivation))
        return ColorResponse(r=color.r, g=color.g, b=color.b, hex=color.hex)

    @app.get("/api/insights")
    async def get_insights(user: User = Depends(current_user)) -> dict[str, Any]:
        """Dashboard cards: encouragement, pattern unlock progress, streak."""
        try:
            entries = await entry_store.list_entries(user.id)
        except Exception as e:
            logger.exception("Error loading insights for user %s", user.id)
            raise StorageFailure("Failed to load insights") from e

        today: date = clock().date()
        streak = calculate_streak((e.created_at for e in entries), today)
        return {
            "encouragement": daily_encouragement(today),
            "unlock": unlock_progress(len(entries)).model_dump(mode="json", by_alias=True),
            "streak": streak.model_dump(mode="json", by_alias=True),
            "streakMessage": streak_message(streak.current_streak, streak.streak_active),
        }

    # MARK: - Data Lifecycle

    @app.get("/api/data/export")
    async def export_data(user: User = Depends(current_user)) -> JSONResponse:
        """
        Export the caller's complete mood history as a JSON download.

        Returns:
            The export bundle with an attachment Content-Disposition
        """
        try:
            bundle = await lifecycle.export_all(user)
        except Exception as e:
            logger.exception("Error exporting data for user %s", user.id)
            raise StorageFailure("Failed to export data") from e

        filename = f"vibepoint-data-export-{bundle.exported_at.date().isoformat()}.json"
        return JSONResponse(
            status_code=200,
            content=bundle.to_export_dict(),
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.delete("/api/data/delete")
    async def delete_data(
        request: Request, user: User = Depends(current_user)
    ) -> dict[str, Any]:
        """
        Permanently delete all of the caller's mood data.

        The body is ``{"confirmation": "<phrase>"}``. A missing, unparseable or
        differently shaped body counts as a wrong phrase.

        Returns:
            ``{success, message, deletedAt}``
        """
        confirmation = await _read_confirmation(request)
        try:
            result = await lifecycle.delete_all(user, confirmation)
        except InvalidConfirmation:
            logger.info("Deletion rejected for user %s: bad confirmation", user.id)
            raise
        except Exception as e:
            logger.exception("Error deleting data for user %s", user.id)
            raise StorageFailure("Failed to delete data") from e
        return result.model_dump(mode="json", by_alias=True)

    # MARK: - Subscriptions

    @app.get("/api/subscriptions/status")
    async def subscription_status(request: Request) -> dict[str, Any]:
        """Current subscription and entitlement status for the caller."""
        try:
            status = await subscription_provider.status_for(identity_resolver(request))
        except Exception as e:
            logger.exception("Error fetching subscription status")
            raise StorageFailure("Failed to fetch subscription status") from e
        return status.model_dump(mode="json", by_alias=True)

    return app


# Default app instance for uvicorn
app = create_app(InMemoryEntryStore())


def main() -> None:
    """Main entry point for the server."""
    import uvicorn

    configure_logging()
    uvicorn.run(
        "vibepoint.server:app",
        host=HOST,
        port=PORT,
        log_level=LOG_LEVEL,
    )


if __name__ == "__main__":
    main()
