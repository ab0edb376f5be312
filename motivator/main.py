"""FastAPI application setup for the motivation service."""

from typing import Optional

from fastapi import FastAPI

from .api import router as api_router
from .config import Settings, settings as default_settings
from .service import MotivationService, build_motivation_service


def create_app(
    settings: Optional[Settings] = None,
    service: Optional[MotivationService] = None,
) -> FastAPI:
    """Build the app and the one service instance it owns for its lifetime."""
    settings = settings or default_settings
    app = FastAPI(title="Motivator")
    app.state.settings = settings
    app.state.motivation_service = service if service is not None else build_motivation_service(settings)
    app.include_router(api_router, prefix="/v1")
    return app


app = create_app()
