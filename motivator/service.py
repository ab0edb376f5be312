"""
Motivational-message generation: validation, caching, provider call with model
fallback, and response parsing.

The service is built once at startup (see `main.py`) and passed explicitly to the
code that needs it; there is no module-level instance.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from .cache import MotivationCache
from .config import DEFAULT_FALLBACK_MODEL, DEFAULT_MODEL, Settings
from .domain import ActivityStats, GenerationOptions, MotivationalMessage
from .errors import ProviderAPIError
from .events import EventHook, MotivationEvent, emit
from .openrouter_client import CHAT_COMPLETIONS_ENDPOINT, OpenRouterClient
from .parser import parse_completion
from .prompts import build_ping_body, build_request_body
from .validation import validate_stats
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="motivation_service")


class MotivationService:
    """Generates (and caches) one motivational message per user per month."""

    def __init__(
        self,
        client: OpenRouterClient,
        *,
        cache: Optional[MotivationCache] = None,
        default_model: str = DEFAULT_MODEL,
        fallback_model: Optional[str] = DEFAULT_FALLBACK_MODEL,
        fallback_on_server_error: bool = True,
        now: Optional[Callable[[], datetime]] = None,
        event_hook: Optional[EventHook] = None,
    ) -> None:
        self.client = client
        self.cache = cache if cache is not None else MotivationCache()
        self.default_model = default_model
        self.fallback_model = fallback_model
        self.fallback_on_server_error = fallback_on_server_error
        self._now = now
        self.event_hook = event_hook

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        sleep: Optional[Callable[[float], None]] = None,
        event_hook: Optional[EventHook] = None,
    ) -> "MotivationService":
        """Build a service from configuration; raises ValueError without an API key."""
        client = OpenRouterClient(
            settings.openrouter_api_key or "",
            base_url=settings.openrouter_base_url,
            timeout_seconds=settings.request_timeout_seconds,
            max_retries=settings.max_retries,
            referer=settings.app_referer,
            app_title=settings.app_title,
            sleep=sleep,
            event_hook=event_hook,
        )
        return cls(
            client,
            cache=MotivationCache(ttl_seconds=settings.cache_ttl_seconds),
            default_model=settings.openrouter_model,
            fallback_model=settings.openrouter_fallback_model,
            fallback_on_server_error=settings.fallback_on_server_error,
            event_hook=event_hook,
        )

    def _should_fall_back(self, error: ProviderAPIError, model: str) -> bool:
        """Decide whether a terminal provider error on `model` earns one try on the fallback model."""
        if not self.fallback_model or self.fallback_model == model:
            return False
        if error.is_rate_limited:
            return True
        return self.fallback_on_server_error and error.is_server_error

    def _request(self, body: dict) -> tuple[dict, str]:
        """Send `body`, escalating once to the fallback model when allowed.

        Returns the decoded payload and the model that produced it.
        """
        model = body["model"]
        try:
            return self.client.send(CHAT_COMPLETIONS_ENDPOINT, body), model
        except ProviderAPIError as exc:
            if not self._should_fall_back(exc, model):
                raise
            emit(
                self.event_hook,
                MotivationEvent.MODEL_FALLBACK,
                from_model=model,
                to_model=self.fallback_model,
                status_code=exc.status_code,
            )
        fallback_body = {**body, "model": self.fallback_model}
        return self.client.send(CHAT_COMPLETIONS_ENDPOINT, fallback_body), self.fallback_model

    def generate(
        self,
        user_id: str,
        stats: ActivityStats,
        options: Optional[GenerationOptions] = None,
    ) -> MotivationalMessage:
        """Return a motivational message for `user_id`'s month described by `stats`."""
        options = options or GenerationOptions()
        validate_stats(stats)

        if options.bypass_cache:
            logger.debug("Bypassing cache for user %s", user_id)
        else:
            cached = self.cache.lookup(user_id, stats)
            if cached is not None:
                emit(self.event_hook, MotivationEvent.CACHE_HIT, user_id=user_id, year=stats.year, month=stats.month)
                return cached
            emit(self.event_hook, MotivationEvent.CACHE_MISS, user_id=user_id, year=stats.year, month=stats.month)

        body = build_request_body(stats, options, default_model=self.default_model)
        raw, model_used = self._request(body)

        message = parse_completion(
            raw,
            default_model=model_used,
            now=self._now,
            event_hook=self.event_hook,
        )

        self.cache.store(user_id, stats, message)
        emit(self.event_hook, MotivationEvent.CACHE_STORE, user_id=user_id, model=message.model, tone=message.tone.value)
        return message

    def test_connection(self) -> bool:
        """Send a tiny request; True on success, False on any failure."""
        try:
            self.client.send(CHAT_COMPLETIONS_ENDPOINT, build_ping_body(self.default_model))
            return True
        except Exception as exc:
            logger.error("OpenRouter connection test failed: %s", exc)
            return False

    def clear_cache(self, user_id: str) -> None:
        """Drop every cached message for `user_id`."""
        self.cache.clear(user_id)


def build_motivation_service(settings: Settings, **kwargs) -> Optional[MotivationService]:
    """Service for the app's lifetime, or None when AI motivation is disabled or unconfigured."""
    if not settings.enable_ai_motivation:
        logger.info("AI motivation disabled by configuration")
        return None
    if not settings.has_api_key:
        logger.warning("OpenRouter API key not configured; AI motivation will use fallback messages")
        return None
    service = MotivationService.from_settings(settings, **kwargs)
    logger.info(
        "Motivation service ready (model=%s, fallback=%s, cache_ttl=%ss)",
        service.default_model,
        service.fallback_model or "none",
        settings.cache_ttl_seconds,
    )
    return service
