"""Observability hooks emitted by the generation pipeline.

Components never print; they call an `EventHook` with an event name and a dict
of fields. The default hook writes one tagged log line per event. Tests and
metrics exporters can pass their own callable instead.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional

from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="motivation_events")


class MotivationEvent(str, Enum):
    CACHE_HIT = "cache_hit"
    CACHE_MISS = "cache_miss"
    CACHE_STORE = "cache_store"
    RETRY = "retry"
    MODEL_FALLBACK = "model_fallback"
    PARSE_FALLBACK = "parse_fallback"
    TONE_INFERRED = "tone_inferred"


EventHook = Callable[[MotivationEvent, Dict[str, Any]], None]

_WARNING_EVENTS = {MotivationEvent.RETRY, MotivationEvent.MODEL_FALLBACK}


def log_event(event: MotivationEvent, fields: Dict[str, Any]) -> None:
    """Default hook: log the event, WARNING for retries/fallbacks, INFO otherwise."""
    level = logging.WARNING if event in _WARNING_EVENTS else logging.INFO
    rendered = " ".join(f"{k}={v}" for k, v in sorted(fields.items()))
    logger.log(level, "%s %s", event.value, rendered)


def emit(hook: Optional[EventHook], event: MotivationEvent, **fields: Any) -> None:
    """Dispatch to `hook`, or to `log_event` when none was configured."""
    (hook or log_event)(event, fields)
