"""Application configuration pulled from environment variables via pydantic."""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger, mask_secret
logger = get_tagged_logger(__name__, tag="config")

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "meta-llama/llama-3.3-70b-instruct:free"
DEFAULT_FALLBACK_MODEL = "meta-llama/llama-3.1-8b-instruct:free"


class Settings(BaseSettings):
    """Environment-driven configuration for the motivation service."""
    model_config = SettingsConfigDict(env_prefix="MOTIVATOR_", extra="ignore")

    openrouter_api_key: str | None = None
    openrouter_base_url: str = DEFAULT_BASE_URL
    openrouter_model: str = DEFAULT_MODEL
    openrouter_fallback_model: str | None = DEFAULT_FALLBACK_MODEL
    request_timeout_seconds: float = 30.0
    max_retries: int = 3
    cache_ttl_seconds: int = 900
    fallback_on_server_error: bool = True
    enable_ai_motivation: bool = True
    skip_preflight: bool = False
    app_referer: str = "https://astrorunner.app"
    app_title: str = "AstroRunner Activity Logger"
    log_level: str = "INFO"

    @field_validator("openrouter_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs to avoid double slashes."""
        return str(v).rstrip("/")

    @field_validator("openrouter_fallback_model", mode="after")
    @classmethod
    def blank_fallback_is_none(cls, v: str | None) -> str | None:
        """Treat an empty fallback model as 'no fallback'."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def has_api_key(self) -> bool:
        return bool(self.openrouter_api_key and self.openrouter_api_key.strip())

    @property
    def ai_motivation_available(self) -> bool:
        """True when the feature flag is on and a usable API key is configured."""
        return self.enable_ai_motivation and self.has_api_key


settings = Settings()


if __name__ == "__main__":
    logger.logger.setLevel("DEBUG")
    dumped = settings.model_dump()
    dumped["openrouter_api_key"] = mask_secret(settings.openrouter_api_key)
    logger.debug(f"Loaded settings: {dumped}")
