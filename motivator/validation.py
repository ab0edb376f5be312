"""Input checks run before any provider call."""

from __future__ import annotations

from .domain import ActivityStats
from .errors import MotivationValidationError

MIN_YEAR = 2000
MAX_YEAR = 2100


def validate_stats(stats: ActivityStats) -> None:
    """Raise MotivationValidationError when `stats` is out of range; no side effects."""
    if stats.month < 1 or stats.month > 12:
        raise MotivationValidationError("Invalid month: must be 1-12")

    if stats.year < MIN_YEAR or stats.year > MAX_YEAR:
        raise MotivationValidationError(f"Invalid year: must be {MIN_YEAR}-{MAX_YEAR}")

    if stats.total_activities < 0:
        raise MotivationValidationError("Total activities cannot be negative")

    if stats.total_distance_meters < 0:
        raise MotivationValidationError("Total distance cannot be negative")

    # days_elapsed + days_remaining == total_days is expected but not enforced
    if stats.days_elapsed < 0 or stats.days_remaining < 0:
        raise MotivationValidationError("Invalid day counts")
