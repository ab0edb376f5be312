"""Prompt and request-body construction for motivational messages."""

from __future__ import annotations

import calendar
import re
from typing import Any

from .domain import ActivityStats, DistanceUnit, GenerationOptions, Tone

METERS_PER_KM = 1000.0
METERS_PER_MILE = 1609.34

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 100
DEFAULT_TOP_P = 0.9

SYSTEM_PROMPT = """You are a fitness motivation expert. Generate short, encouraging messages (1-2 sentences) based on the user's running and walking activity for the current month.

Focus on:
- Acknowledging their progress and achievements
- Encouraging continued effort
- Using the time remaining in the month as context
- Being positive, specific, and actionable

Tone options:
- "encouraging" - for steady progress, keep it up
- "celebratory" - for impressive achievements, celebrate them
- "challenging" - for minimal activity, a gentle push to do more

Keep messages concise, personal, and motivating."""

_ISO_DURATION = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")


def format_distance(meters: float, unit: DistanceUnit | str) -> str:
    """Render meters in the user's unit with two decimals ("12.35 km", "3.11 mi")."""
    unit = DistanceUnit(unit)
    if meters == 0:
        return f"0 {unit.value}"
    if unit is DistanceUnit.KM:
        return f"{meters / METERS_PER_KM:.2f} km"
    return f"{meters / METERS_PER_MILE:.2f} mi"


def format_duration(iso_duration: str) -> str:
    """Render an ISO-8601 duration as "5h 30m"; seconds only shown under an hour."""
    match = _ISO_DURATION.search(iso_duration or "")
    if not match:
        return "0m"

    hours, minutes, seconds = (int(g or 0) for g in match.groups())

    parts: list[str] = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if seconds > 0 and hours == 0:
        parts.append(f"{seconds}s")
    return " ".join(parts) or "0m"


def build_user_prompt(stats: ActivityStats) -> str:
    """Describe the month's activity and the expected JSON answer."""
    month_name = calendar.month_name[stats.month]
    distance = format_distance(stats.total_distance_meters, stats.distance_unit)
    duration = format_duration(stats.total_duration)

    return "\n".join([
        f"Generate a motivational message for {month_name} {stats.year}:",
        "",
        "Activity Summary:",
        f"- Total activities: {stats.total_activities} ({stats.run_count} runs, "
        f"{stats.walk_count} walks, {stats.mixed_count} mixed)",
        f"- Total distance: {distance}",
        f"- Total time: {duration}",
        f"- Month progress: Day {stats.days_elapsed} of {stats.total_days} "
        f"({stats.days_remaining} days remaining)",
        "",
        "Respond with ONLY a JSON object in this exact format:",
        "{",
        '  "message": "your motivational message here (1-2 sentences)",',
        '  "tone": "encouraging" OR "celebratory" OR "challenging"',
        "}",
        "",
        "Choose tone based on activity level:",
        '- "encouraging" if steady progress (5-15 activities)',
        '- "celebratory" if impressive (15+ activities)',
        '- "challenging" if minimal (< 5 activities)',
    ])


def build_response_format() -> dict[str, Any]:
    """JSON-schema hint for the provider; adherence is not guaranteed."""
    return {
        "type": "json_schema",
        "json_schema": {
            "name": "motivation_message",
            # several free models reject strict schemas
            "strict": False,
            "schema": {
                "type": "object",
                "properties": {
                    "message": {
                        "type": "string",
                        "description": "The motivational message (1-2 sentences, max 150 characters)",
                    },
                    "tone": {
                        "type": "string",
                        "enum": [t.value for t in Tone],
                        "description": "The tone of the message based on activity level",
                    },
                },
                "required": ["message", "tone"],
                "additionalProperties": False,
            },
        },
    }


def build_motivation_messages(stats: ActivityStats) -> list[dict]:
    """Prepare system+user messages for a motivational message."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_user_prompt(stats)},
    ]


def build_request_body(
    stats: ActivityStats,
    options: GenerationOptions | None,
    *,
    default_model: str,
) -> dict[str, Any]:
    """Assemble the chat-completion payload, applying option overrides."""
    options = options or GenerationOptions()
    return {
        "model": options.model or default_model,
        "messages": build_motivation_messages(stats),
        "response_format": build_response_format(),
        "max_tokens": options.max_tokens if options.max_tokens is not None else DEFAULT_MAX_TOKENS,
        "temperature": options.temperature if options.temperature is not None else DEFAULT_TEMPERATURE,
        "top_p": DEFAULT_TOP_P,
    }


def build_ping_body(model: str) -> dict[str, Any]:
    """Smallest useful request, for connection checks."""
    return {
        "model": model,
        "messages": [{"role": "user", "content": "Hello"}],
        "max_tokens": 5,
    }
