"""HTTP API for motivational messages."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from pydantic import BaseModel

from .config import Settings
from .domain import ActivityStats, GenerationOptions, MotivationalMessage
from .fallback import get_fallback_motivation
from .service import MotivationService
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="motivator/api")

router = APIRouter()


class GenerateRequest(BaseModel):
    """Incoming generation request; stats come from the aggregator upstream."""
    user_id: str
    stats: ActivityStats
    bypass_cache: bool = False


class HealthResponse(BaseModel):
    """AI motivation availability."""
    enabled: bool
    configured: bool
    reachable: bool | None = None


def get_app_settings(request: Request) -> Settings:
    """Settings the app was created with."""
    return request.app.state.settings


def get_motivation_service(request: Request) -> Optional[MotivationService]:
    """Service built at startup, or None when AI motivation is off/unconfigured."""
    return getattr(request.app.state, "motivation_service", None)


@router.post("/motivation/generate", response_model=MotivationalMessage)
def generate_motivation(
    req: GenerateRequest,
    service: Optional[MotivationService] = Depends(get_motivation_service),
):
    """Return an AI message, or a canned one when generation is unavailable or fails."""
    if not req.user_id.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="user_id is required")

    if service is None:
        logger.debug("AI motivation unavailable; using fallback message")
        return get_fallback_motivation(req.stats)

    try:
        return service.generate(req.user_id, req.stats, GenerationOptions(bypass_cache=req.bypass_cache))
    except Exception as exc:
        logger.error("Failed to generate AI motivation; using fallback: %s", exc)
        return get_fallback_motivation(req.stats)


@router.delete("/motivation/cache/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def clear_motivation_cache(
    user_id: str,
    service: Optional[MotivationService] = Depends(get_motivation_service),
):
    """Forget cached messages for a user (all months)."""
    if service is not None:
        service.clear_cache(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/motivation/health", response_model=HealthResponse)
def motivation_health(
    settings: Settings = Depends(get_app_settings),
    service: Optional[MotivationService] = Depends(get_motivation_service),
):
    """Report whether AI motivation is enabled, configured and reachable."""
    if service is None:
        return HealthResponse(enabled=settings.enable_ai_motivation, configured=settings.has_api_key)
    return HealthResponse(
        enabled=settings.enable_ai_motivation,
        configured=True,
        reachable=service.test_connection(),
    )
