"""FastAPI application factory for the fare service."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fare_service.api.dependencies import RateProviderDep
from fare_service.api.middleware import CorrelationIdMiddleware
from fare_service.api.models import HealthResponse
from fare_service.api.routes import fares, rates
from fare_service.core.exceptions import ConfigurationError, InvalidInputError
from fare_service.fare import FareCalculator
from fare_service.rates import RateTableProvider
from fare_service.settings import Settings, get_settings

logger = logging.getLogger(__name__)


async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    """Map InvalidInputError to a 400 naming the rejected field."""
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=400, content={"detail": exc.message, "field": exc.field})


async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error("Configuration error on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=500, content={"detail": exc.message})


def create_app(provider: RateTableProvider, settings: Settings | None = None) -> FastAPI:
    """Create FastAPI application with injected dependencies.

    Args:
        provider: Rate table store shared by every request
        settings: Service settings; loaded from the environment when omitted
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Rideshare Fare Service API",
        version="1.0.0",
        description="Fare quotes, final-fare reconciliation and rate table administration",
    )

    app.state.rate_provider = provider
    app.state.calculator = FareCalculator(provider)

    app.add_exception_handler(InvalidInputError, invalid_input_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        ConfigurationError, configuration_error_handler  # type: ignore[arg-type]
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(CorrelationIdMiddleware)

    app.include_router(fares.router, prefix="/fares", tags=["fares"])
    app.include_router(rates.router, prefix="/rates", tags=["rates"])

    @app.get("/health", response_model=HealthResponse)
    def health_check(provider: RateProviderDep) -> HealthResponse:
        """Health check endpoint for monitoring."""
        table = provider.current()
        return HealthResponse(status="ok", vehicle_types=len(table), currency=table.currency)

    return app
