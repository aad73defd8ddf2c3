"""
Entry point: ``python -m copilot_exporter``.

Loads configuration from the environment, configures logging and serves the
exporter with uvicorn.
"""

import logging
import sys

import uvicorn

from .config import METRICS_ENDPOINT, ConfigError, load_settings
from .main import create_app

logger = logging.getLogger("copilot_exporter")


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings()
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    logging.getLogger().setLevel(settings.log_level)

    app = create_app(settings)

    logger.info(f"Starting GitHub Copilot Metrics Exporter on port {settings.port}")
    if settings.cache_enabled:
        logger.info(f"Metrics are cached and refreshed every {settings.refresh_interval} seconds")
    else:
        logger.info("Metrics will be fetched fresh from GitHub API on each scrape")
    logger.info(f"Metric set: {settings.metrics_mode.value}")
    logger.info(f"Metrics available at http://localhost:{settings.port}{METRICS_ENDPOINT}")

    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
