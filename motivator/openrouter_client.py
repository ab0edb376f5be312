"""Client for the OpenRouter chat-completion API.

Each HTTP attempt is classified into a tagged outcome (`Success`, `Retryable`,
`Terminal`) and `send` walks those outcomes as a small state machine:

- 2xx                      -> Success, decoded JSON returned as-is
- 429                      -> Terminal, never retried on the same model
- other 4xx / bad JSON     -> Terminal
- 5xx, timeout, network    -> Retryable, exponential backoff (2**attempt seconds)
                              until `max_retries` attempts have been made
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Union

import requests

from .config import DEFAULT_BASE_URL
from .errors import MotivationValidationError, ProviderAPIError, ProviderTimeoutError
from .events import EventHook, MotivationEvent, emit
from utils.logging_utils import get_tagged_logger, mask_secret

logger = get_tagged_logger(__name__, tag="openrouter_client")

CHAT_COMPLETIONS_ENDPOINT = "/chat/completions"


class RetryReason(str, Enum):
    SERVER_ERROR = "server_error"
    TIMEOUT = "timeout"
    NETWORK = "network"


@dataclass(frozen=True)
class Success:
    payload: Any


@dataclass(frozen=True)
class Retryable:
    reason: RetryReason
    error: Exception


@dataclass(frozen=True)
class Terminal:
    error: Exception


Outcome = Union[Success, Retryable, Terminal]


class OpenRouterClient:
    """Minimal transport for OpenRouter chat completions."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 30.0,
        max_retries: int = 3,
        referer: str = "https://astrorunner.app",
        app_title: str = "AstroRunner Activity Logger",
        sleep: Optional[Callable[[float], None]] = None,
        event_hook: Optional[EventHook] = None,
    ):
        if not api_key or not api_key.strip():
            raise ValueError("OpenRouter API key is required")
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")

        self.api_key = api_key
        self.base_url = str(base_url).rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.referer = referer
        self.app_title = app_title
        self._sleep = sleep or time.sleep
        self.event_hook = event_hook
        logger.debug("OpenRouterClient configured: base_url=%s key=%s", self.base_url, mask_secret(api_key))

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            # attribution headers, not used for auth
            "HTTP-Referer": self.referer,
            "X-Title": self.app_title,
        }

    @staticmethod
    def _error_message(r) -> str:
        """Best-effort provider error text: `error.message` from the body, else the reason phrase."""
        try:
            data = r.json()
        except ValueError:
            data = None
        if isinstance(data, dict):
            err = data.get("error")
            if isinstance(err, dict) and err.get("message"):
                return str(err["message"])
            if isinstance(err, str) and err:
                return err
        return getattr(r, "reason", None) or f"HTTP {r.status_code}"

    def _attempt(self, url: str, body: dict) -> Outcome:
        """Issue one POST and classify the result."""
        started = time.monotonic()
        try:
            # per connect and per socket read, not a deadline for the whole attempt
            r = requests.post(url, json=body, headers=self._headers(), timeout=self.timeout_seconds)
        except requests.exceptions.Timeout as exc:
            return Retryable(RetryReason.TIMEOUT, exc)
        except requests.exceptions.RequestException as exc:
            return Retryable(RetryReason.NETWORK, exc)

        logger.info(
            "OpenRouter POST took %.2fs, status %s (model=%s)",
            time.monotonic() - started,
            r.status_code,
            body.get("model"),
        )

        if 200 <= r.status_code < 300:
            try:
                return Success(r.json())
            except ValueError:
                return Terminal(
                    MotivationValidationError(f"Provider returned non-JSON response: {(r.text or '')[:200]}")
                )

        error = ProviderAPIError(self._error_message(r), r.status_code)
        if error.is_server_error:
            return Retryable(RetryReason.SERVER_ERROR, error)
        return Terminal(error)

    def send(self, endpoint: str, body: dict) -> Any:
        """POST `body` to `endpoint`, retrying transient failures; return the decoded JSON."""
        url = f"{self.base_url}{endpoint}"
        attempt = 1
        while True:
            logger.debug("OpenRouter POST %s attempt %d/%d", url, attempt, self.max_retries)
            outcome = self._attempt(url, body)

            if isinstance(outcome, Success):
                return outcome.payload

            if isinstance(outcome, Terminal):
                logger.warning("OpenRouter request failed without retry: %s", outcome.error)
                raise outcome.error

            if attempt >= self.max_retries:
                logger.error(
                    "OpenRouter request failed after %d attempts (%s): %s",
                    attempt,
                    outcome.reason.value,
                    outcome.error,
                )
                if outcome.reason is RetryReason.TIMEOUT:
                    raise ProviderTimeoutError("Request timeout") from outcome.error
                raise outcome.error

            delay = 2 ** attempt
            emit(
                self.event_hook,
                MotivationEvent.RETRY,
                attempt=attempt,
                reason=outcome.reason.value,
                delay_seconds=delay,
                model=body.get("model"),
            )
            self._sleep(delay)
            attempt += 1
