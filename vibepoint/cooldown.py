"""
Rapid-entry cooldown policy.

A sliding-window limiter recomputed from entry history on every call, so it
stays correct whichever surface created the entries and whenever it is
evaluated. Two near-simultaneous writes can both pass before either is
stored; the limit is a soft one.
"""

import logging
import math
from collections.abc import Iterable
from datetime import datetime

from .config import RAPID_ENTRY_LIMIT, RAPID_WINDOW_MINUTES
from .models import CooldownDecision

logger = logging.getLogger(__name__)


def minutes_between(earlier: datetime, later: datetime) -> float:
    """Minutes elapsed from ``earlier`` to ``later``, never negative."""
    return max(0.0, (later - earlier).total_seconds() / 60)


def evaluate(
    recent_timestamps: Iterable[datetime],
    now: datetime,
    window_minutes: int = RAPID_WINDOW_MINUTES,
    limit: int = RAPID_ENTRY_LIMIT,
) -> CooldownDecision:
    """
    Decide whether a new entry may be logged at ``now``.

    Args:
        recent_timestamps: Creation times of the user's existing entries
        now: The moment of the attempt
        window_minutes: Length of the rapid window
        limit: Entries inside the window that trigger a block

    Returns:
        An allowed decision, or a blocked one carrying the whole minutes
        until the oldest of the ``limit`` most recent entries leaves the window
    """
    # An entry exactly window_minutes old has already left the window.
    ages = sorted(
        age
        for age in (minutes_between(ts, now) for ts in recent_timestamps)
        if age < window_minutes
    )

    if len(ages) < limit:
        return CooldownDecision(allowed=True)

    oldest_counted = ages[limit - 1]
    wait = max(1, math.ceil(window_minutes - oldest_counted))
    logger.info(
        "Entry blocked: %d entries in the last %d minutes, next in %d",
        len(ages),
        window_minutes,
        wait,
    )
    return CooldownDecision(allowed=False, minutes_until_next=wait)
