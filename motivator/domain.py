"""Domain vocabulary and schemas for motivational-message generation.

This module defines the contract between the statistics aggregator, the
generation service and the chat-completion provider: enums and Pydantic models
for the values that flow through the system. No interpretation logic lives here;
range checks are the validator's job so they surface as service errors rather
than construction failures.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class _FrozenModel(BaseModel):
    """Immutable model with strict extra handling."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class Tone(str, Enum):
    """Emotional register attached to a generated message."""
    ENCOURAGING = "encouraging"
    CELEBRATORY = "celebratory"
    CHALLENGING = "challenging"


class DistanceUnit(str, Enum):
    """Display unit for distances."""
    KM = "km"
    MI = "mi"


class ActivityStats(_FrozenModel):
    """Monthly activity totals handed over by the statistics aggregator."""
    total_activities: int
    run_count: int = 0
    walk_count: int = 0
    mixed_count: int = 0
    total_distance_meters: float = 0.0
    total_duration: str = "PT0S"  # ISO-8601 duration, e.g. "PT5H30M"
    month: int
    year: int
    days_elapsed: int
    days_remaining: int
    total_days: int
    distance_unit: DistanceUnit = DistanceUnit.KM


class GenerationOptions(BaseModel):
    """Per-call overrides; unset values fall back to service defaults."""
    model: str | None = None
    temperature: float | None = None
    max_tokens: int | None = None
    bypass_cache: bool = False


class MotivationalMessage(_FrozenModel):
    """Generated message returned to callers (and stored verbatim in the cache)."""
    message: str
    tone: Tone
    generated_at: datetime
    model: str
    cached: bool = False


# ---------------------------------------------------------------------------
# Chat-completion response envelope (provider side)
# ---------------------------------------------------------------------------

class ChoiceMessage(BaseModel):
    role: str | None = None
    content: str | None = None


class Choice(BaseModel):
    index: int | None = None
    message: ChoiceMessage | None = None
    finish_reason: str | None = None


class Usage(BaseModel):
    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    total_tokens: int | None = None


class ChatCompletion(BaseModel):
    """Subset of an OpenAI-style chat completion that the parser relies on."""
    id: str | None = None
    model: str | None = None
    choices: List[Choice] = Field(default_factory=list)
    usage: Usage | None = None
