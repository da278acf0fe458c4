"""FastAPI dependency injection providers."""

from typing import Annotated

from fastapi import Depends, Request

from fare_service.fare import FareCalculator
from fare_service.rates import RateTableProvider


def get_calculator(request: Request) -> FareCalculator:
    """Retrieve the FareCalculator from app state."""
    calculator: FareCalculator = request.app.state.calculator
    return calculator


def get_rate_provider(request: Request) -> RateTableProvider:
    """Retrieve the RateTableProvider from app state."""
    provider: RateTableProvider = request.app.state.rate_provider
    return provider


CalculatorDep = Annotated[FareCalculator, Depends(get_calculator)]
RateProviderDep = Annotated[RateTableProvider, Depends(get_rate_provider)]
