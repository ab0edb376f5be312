"""Turn a chat-completion payload into a MotivationalMessage.

Decoding happens in two stages. First the provider envelope is validated into
`ChatCompletion` and the first choice's content decoded to a generic JSON tree
(directly, or salvaged from a fenced / embedded object). Then that tree is
coerced into typed message fields. Every failure in either stage surfaces as
MotivationValidationError.
"""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from pydantic import ValidationError

from .domain import ChatCompletion, MotivationalMessage, Tone
from .errors import MotivationValidationError
from .events import EventHook, MotivationEvent, emit
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="response_parser")

_FENCED_OBJECT = re.compile(r"```(?:json)?\s*(\{[\s\S]*?\})\s*```")
_BARE_OBJECT = re.compile(r"(\{[\s\S]*?\})")

CELEBRATORY_CUES = ("amazing", "incredible", "crushing")
CHALLENGING_CUES = ("let's", "aim", "try")


def infer_tone(message: str) -> Tone:
    """Guess a tone from wording when the model did not supply a usable one."""
    lower = message.lower()
    if any(cue in lower for cue in CELEBRATORY_CUES):
        return Tone.CELEBRATORY
    if any(cue in lower for cue in CHALLENGING_CUES):
        return Tone.CHALLENGING
    return Tone.ENCOURAGING


def extract_content(raw: Any) -> tuple[str, Optional[str]]:
    """Return (content of the first choice, echoed model name)."""
    try:
        completion = ChatCompletion.model_validate(raw)
    except ValidationError as exc:
        logger.error("Invalid response structure: %s", exc)
        raise MotivationValidationError("Invalid response structure from API") from exc

    choice = completion.choices[0] if completion.choices else None
    if choice is None or choice.message is None or not choice.message.content:
        logger.error("Invalid response structure: %s", raw)
        raise MotivationValidationError("Invalid response structure from API")
    return choice.message.content, completion.model


def decode_content(content: str, *, event_hook: Optional[EventHook] = None) -> Any:
    """Decode JSON from the content string, salvaging fenced or embedded objects."""
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        pass

    match = _FENCED_OBJECT.search(content) or _BARE_OBJECT.search(content)
    if not match:
        logger.error("No JSON found in content: %r", content[:200])
        raise MotivationValidationError("Failed to parse JSON response from API")

    emit(event_hook, MotivationEvent.PARSE_FALLBACK, fenced=content.lstrip().startswith("```"))
    try:
        return json.loads(match.group(1))
    except json.JSONDecodeError as exc:
        logger.error("Failed to extract JSON from content: %r", content[:200])
        raise MotivationValidationError("Failed to parse JSON response from API") from exc


def parse_completion(
    raw: Any,
    *,
    default_model: str,
    now: Optional[Callable[[], datetime]] = None,
    event_hook: Optional[EventHook] = None,
) -> MotivationalMessage:
    """Validate a provider payload and build the message it describes."""
    content, echoed_model = extract_content(raw)
    tree = decode_content(content, event_hook=event_hook)

    text = tree.get("message") if isinstance(tree, dict) else None
    if not isinstance(text, str) or not text.strip():
        raise MotivationValidationError("Response missing required field: message")

    raw_tone = tree.get("tone")
    try:
        tone = Tone(raw_tone)
    except ValueError:
        tone = infer_tone(text)
        emit(event_hook, MotivationEvent.TONE_INFERRED, received=raw_tone, inferred=tone.value)

    clock = now or (lambda: datetime.now(timezone.utc))
    return MotivationalMessage(
        message=text,
        tone=tone,
        generated_at=clock(),
        model=echoed_model or default_model,
        cached=False,
    )
