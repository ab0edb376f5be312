import os

import uvicorn

from motivator.check_openrouter import check_openrouter
from motivator.config import settings
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="server")


def maybe_check_openrouter() -> None:
    """
    Optionally run the OpenRouter preflight. Controlled by:
    - MOTIVATOR_SKIP_PREFLIGHT=true to skip entirely (useful in dev/tests)
    - MOTIVATOR_ENABLE_AI_MOTIVATION / MOTIVATOR_OPENROUTER_API_KEY, which make it a no-op when unset
    """
    if settings.skip_preflight:
        logger.info("Skipping OpenRouter preflight (MOTIVATOR_SKIP_PREFLIGHT=true)")
        return

    try:
        check_openrouter(settings)
    except SystemExit:
        logger.error("OpenRouter preflight failed; set MOTIVATOR_SKIP_PREFLIGHT=true to bypass during dev/tests.")
        raise


if __name__ == "__main__":
    setup_logging(level=settings.log_level, job_name="motivator")
    maybe_check_openrouter()

    uvicorn.run(
        "motivator.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=False,
    )
