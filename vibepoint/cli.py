"""
Command-line client for the Vibepoint service.
"""

import asyncio
import json
from collections.abc import Coroutine
from pathlib import Path
from typing import Any

import httpx
import typer

from .colors import map_color
from .config import DELETE_CONFIRMATION_PHRASE
from .models import EntryView, MoodCoordinate

DEFAULT_BASE_URL = "http://localhost:8000"

app = typer.Typer(help="Vibepoint CLI tools")

BASE_URL_OPTION = typer.Option(
    DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the Vibepoint service"
)
USER_OPTION = typer.Option(..., "--user", envvar="VIBEPOINT_USER_ID", help="User id")
EMAIL_OPTION = typer.Option(None, "--email", envvar="VIBEPOINT_USER_EMAIL", help="User email")


# MARK: - Commands


@app.command()
def log(
    happiness: float = typer.Argument(..., min=0.0, max=1.0, help="0 = unhappy, 1 = happy"),
    motivation: float = typer.Argument(..., min=0.0, max=1.0, help="0 = unmotivated, 1 = motivated"),
    focus: str = typer.Option(..., "--focus", "-f", help="What are you focused on?"),
    self_talk: str = typer.Option(..., "--self-talk", "-s", help="What are you telling yourself?"),
    physical: str = typer.Option(..., "--physical", "-p", help="What do you feel in your body?"),
    notes: str | None = typer.Option(None, "--notes", "-n", help="Anything else"),
    base_url: str = BASE_URL_OPTION,
    user_id: str = USER_OPTION,
    email: str | None = EMAIL_OPTION,
) -> None:
    """Log a new mood entry."""

    async def _log() -> None:
        payload = {
            "happiness": happiness,
            "motivation": motivation,
            "focus": focus,
            "selfTalk": self_talk,
            "physicalSensations": physical,
            "notes": notes,
        }
        async with _client(base_url, user_id, email) as client:
            response = await client.post("/api/entries", json=payload)
            if response.status_code == 429:
                wait = response.json().get("minutesUntilNext")
                print(f"Slow down: you can log again in {wait} minute(s)")
                raise typer.Exit(2)
            response.raise_for_status()
            entry = EntryView.model_validate(response.json())
            print(f"Logged {entry.id} ({entry.color})")

    _run_with_error_handling(_log(), base_url)


@app.command()
def cooldown(
    base_url: str = BASE_URL_OPTION,
    user_id: str = USER_OPTION,
    email: str | None = EMAIL_OPTION,
) -> None:
    """Show whether a new entry can be logged now."""

    async def _cooldown() -> None:
        async with _client(base_url, user_id, email) as client:
            response = await client.get("/api/entries/cooldown")
            response.raise_for_status()
            result = response.json()
            if result["allowed"]:
                print("Ready to log")
            else:
                print(f"Blocked for {result['minutesUntilNext']} more minute(s)")

    _run_with_error_handling(_cooldown(), base_url)


@app.command()
def export(
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to this file"),
    base_url: str = BASE_URL_OPTION,
    user_id: str = USER_OPTION,
    email: str | None = EMAIL_OPTION,
) -> None:
    """Download all mood data as JSON."""

    async def _export() -> None:
        async with _client(base_url, user_id, email) as client:
            response = await client.get("/api/data/export")
            response.raise_for_status()
            result = response.json()

        text = json.dumps(result, indent=2)
        if output is None:
            print(text)
            return
        output.write_text(text, encoding="utf-8")
        print(f"Exported {result['totalEntries']} entries to {output}")

    _run_with_error_handling(_export(), base_url)


@app.command()
def delete(
    confirmation: str = typer.Option(
        ...,
        "--confirm",
        prompt=f'Type "{DELETE_CONFIRMATION_PHRASE}" to permanently delete your data',
        help="The exact confirmation phrase",
    ),
    base_url: str = BASE_URL_OPTION,
    user_id: str = USER_OPTION,
    email: str | None = EMAIL_OPTION,
) -> None:
    """Permanently delete all mood data."""

    async def _delete() -> None:
        async with _client(base_url, user_id, email) as client:
            response = await client.request(
                "DELETE", "/api/data/delete", json={"confirmation": confirmation}
            )
            response.raise_for_status()
            result = response.json()
            print(f"{result['message']} at {result['deletedAt']}")

    _run_with_error_handling(_delete(), base_url)


@app.command()
def color(
    happiness: float = typer.Argument(..., help="0 = unhappy, 1 = happy"),
    motivation: float = typer.Argument(..., help="0 = unmotivated, 1 = motivated"),
) -> None:
    """Print the display color for a mood coordinate (computed locally)."""
    result = map_color(MoodCoordinate(happiness=happiness, motivation=motivation))
    print(f"{result.hex} {result.css}")


# MARK: - Private Helpers


def _client(base_url: str, user_id: str, email: str | None) -> httpx.AsyncClient:
    headers = {"X-User-Id": user_id}
    if email:
        headers["X-User-Email"] = email
    return httpx.AsyncClient(base_url=base_url, headers=headers)


def _error_message(response: httpx.Response) -> str:
    """The server's ``{"error": ...}`` text, falling back to the status code."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return f"HTTP {response.status_code}: {body['error']}"
    return f"HTTP {response.status_code}"


def _run_with_error_handling(coro: Coroutine[Any, Any, Any], base_url: str) -> None:
    """Run an async coroutine, turning transport and API errors into exit code 1."""
    try:
        asyncio.run(coro)
    except typer.Exit:
        raise
    except httpx.ConnectError:
        print(f"Error: Could not connect to {base_url}")
        raise typer.Exit(1)
    except httpx.HTTPStatusError as e:
        print(f"Error: {_error_message(e.response)}")
        raise typer.Exit(1)
    except Exception as e:
        error_msg = str(e) if str(e) else f"Unknown error of type {type(e).__name__}"
        print(f"Error: {error_msg}")
        raise typer.Exit(1)


def main() -> None:
    """Entry point for the vibepoint console script."""
    app()


if __name__ == "__main__":
    main()
