from fastapi import APIRouter

from fare_service.api.dependencies import CalculatorDep
from fare_service.api.models import ErrorResponse, ReconcileRequest
from fare_service.fare import FareAdjustment, FareBreakdown, TripQuoteRequest
from fare_service.fare_logging import log_context

router = APIRouter(responses={400: {"model": ErrorResponse}})


@router.post("/quote", response_model=FareBreakdown)
def quote_fare(body: TripQuoteRequest, calculator: CalculatorDep) -> FareBreakdown:
    """Price a trip from its distance, duration, vehicle type and surge."""
    with log_context(vehicle_type=body.vehicle_type):
        return calculator.calculate(body)


@router.post("/reconcile", response_model=FareAdjustment)
def reconcile_fare(body: ReconcileRequest, calculator: CalculatorDep) -> FareAdjustment:
    """Re-price a completed trip with its actual distance and duration."""
    with log_context(vehicle_type=body.quote.vehicle_type):
        return calculator.reconcile(body.quote, body.actual_distance, body.actual_duration)
