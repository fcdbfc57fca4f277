"""Run the dashboard API under uvicorn"""

import logging

import uvicorn

from influencer_tax.config import settings
from influencer_tax.infrastructure.observability.logging import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    setup_logging(settings.log_level)
    logger.info("Starting API", extra={"host": settings.host, "port": settings.port})
    uvicorn.run(
        "influencer_tax.api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
