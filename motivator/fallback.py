"""Canned motivational messages used when AI generation is off or fails."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from .domain import ActivityStats, MotivationalMessage, Tone

FALLBACK_MODEL_NAME = "fallback"


def get_fallback_motivation(
    stats: ActivityStats,
    now: Optional[Callable[[], datetime]] = None,
) -> MotivationalMessage:
    """Pick a generic message from the month's activity count; never touches the network."""
    count = stats.total_activities
    if count == 0:
        message, tone = "Ready to start? Add your first activity and begin your journey!", Tone.ENCOURAGING
    elif count >= 20:
        message, tone = "Incredible consistency! You're crushing your fitness goals this month.", Tone.CELEBRATORY
    elif count >= 10:
        message, tone = f"Great progress with {count} activities! Keep the momentum going.", Tone.ENCOURAGING
    elif stats.days_remaining > 7:
        message, tone = f"{count} activities so far. Plenty of time to add more!", Tone.CHALLENGING
    else:
        message, tone = "Every step counts! Keep moving and finish the month strong.", Tone.ENCOURAGING

    clock = now or (lambda: datetime.now(timezone.utc))
    return MotivationalMessage(
        message=message,
        tone=tone,
        generated_at=clock(),
        model=FALLBACK_MODEL_NAME,
        cached=False,
    )
