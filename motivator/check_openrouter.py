# motivator/check_openrouter.py
"""Startup preflight and health probe for the OpenRouter provider."""

import sys
from typing import Any, Dict, Iterable, Optional

import requests

from .config import Settings, settings as default_settings
from utils.logging_utils import get_tagged_logger, mask_secret

logger = get_tagged_logger(__name__, tag="check_openrouter")


def _models_url(settings: Settings) -> str:
    """Return the provider's model listing endpoint."""
    return f"{settings.openrouter_base_url.rstrip('/')}/models"


def _listed_model_ids(models_json: dict) -> set[str]:
    """Extract model ids from a `/models` response (`{"data": [{"id": ...}]}`)."""
    ids: set[str] = set()
    for m in models_json.get("data", []) or []:
        model_id = m.get("id") if isinstance(m, dict) else None
        if model_id:
            ids.add(model_id)
    return ids


def _required_models(settings: Settings) -> list[str]:
    required = [settings.openrouter_model]
    if settings.openrouter_fallback_model:
        required.append(settings.openrouter_fallback_model)
    return required


def get_openrouter_status(
    settings: Optional[Settings] = None,
    required_models: Optional[Iterable[str]] = None,
) -> Dict[str, Any]:
    """
    Non-fatal probe of the provider.

    Returns a dict like:
    {
      "ok": bool,
      "configured": bool,
      "reachable": bool,
      "base_url": "...",
      "required_models": [...],
      "missing_models": [...],
      "models_ok": bool,
      "error": "...",   # set when something went wrong
    }

    Never exits; suitable for health checks.
    """
    settings = settings or default_settings
    required = list(required_models) if required_models is not None else _required_models(settings)
    status: Dict[str, Any] = {
        "ok": False,
        "configured": settings.has_api_key,
        "reachable": False,
        "base_url": settings.openrouter_base_url,
        "required_models": required,
        "missing_models": [],
        "models_ok": False,
        "error": None,
    }

    headers = {}
    if settings.has_api_key:
        headers["Authorization"] = f"Bearer {settings.openrouter_api_key}"

    try:
        resp = requests.get(_models_url(settings), headers=headers, timeout=5)
        resp.raise_for_status()
        listing = resp.json()
    except Exception as e:
        status["error"] = str(e)
        return status

    status["reachable"] = True
    listed = _listed_model_ids(listing if isinstance(listing, dict) else {})
    missing = [m for m in required if m not in listed]
    status["missing_models"] = missing
    status["models_ok"] = not missing
    status["ok"] = status["configured"] and status["reachable"] and status["models_ok"]
    return status


def check_openrouter(settings: Optional[Settings] = None) -> None:
    """
    "Hard" check for startup.

    Exits with status 1 when AI motivation is enabled and configured but the
    provider is unreachable. Missing models only log a warning.
    """
    settings = settings or default_settings
    if not settings.ai_motivation_available:
        logger.info("AI motivation disabled or unconfigured; skipping OpenRouter preflight")
        return

    status = get_openrouter_status(settings)
    if not status["reachable"]:
        logger.error(f"OpenRouter is unreachable. Tried: {_models_url(settings)}")
        if status["error"]:
            logger.error(f"   Details: {status['error']}")
        sys.exit(1)

    logger.info(f"OpenRouter reachable at {settings.openrouter_base_url} (key {mask_secret(settings.openrouter_api_key)})")
    if status["missing_models"]:
        logger.warning(f"Configured models not listed by provider: {', '.join(status['missing_models'])}")
    else:
        logger.info(f"Configured models available: {', '.join(status['required_models'])}")
