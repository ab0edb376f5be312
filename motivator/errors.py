"""Error taxonomy for motivational-message generation."""

from __future__ import annotations


class MotivationError(Exception):
    """Base class for every error raised by the motivation service."""


class MotivationValidationError(MotivationError):
    """Invalid input stats, or a provider response that cannot be turned into a message.

    Never retried.
    """


class ProviderAPIError(MotivationError):
    """Definitive non-success HTTP response from the chat-completion provider."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def is_rate_limited(self) -> bool:
        return self.status_code == 429

    @property
    def is_server_error(self) -> bool:
        return self.status_code >= 500

    def __str__(self) -> str:
        return f"{self.message} (status {self.status_code})"


class ProviderTimeoutError(MotivationError):
    """The provider did not answer within the timeout budget, retries included."""

    def __init__(self, message: str = "Request timeout") -> None:
        super().__init__(message)
