"""Fare service entry point."""

import logging
import sys

import uvicorn

from fare_service.api import create_app
from fare_service.core.exceptions import ConfigurationError
from fare_service.fare_logging import setup_logging
from fare_service.rates import RateTableProvider
from fare_service.settings import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point for the fare service."""
    settings = get_settings()

    setup_logging(
        level=settings.logging.level,
        json_output=settings.logging.format == "json",
        environment=settings.logging.environment,
    )

    logger.info("Starting fare service...")
    logger.info("Rate table: %s", settings.fare.rate_table_path)

    try:
        provider = RateTableProvider.from_file(settings.fare.rate_table_path)
    except ConfigurationError as e:
        logger.error("Cannot start without a valid rate table: %s", e.message)
        sys.exit(1)

    table = provider.current()
    logger.info("Serving %s in %s", ", ".join(table.vehicle_types), table.currency)

    app = create_app(provider, settings)
    uvicorn.run(app, host=settings.api.host, port=settings.api.port, log_level="warning")

    logger.info("Fare service exited")


if __name__ == "__main__":
    main()
