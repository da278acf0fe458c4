"""Pydantic models for API requests and responses."""

from fare_service.api.models.fares import ErrorResponse, ReconcileRequest
from fare_service.api.models.health import HealthResponse
from fare_service.api.models.rates import RateTableResponse, VehicleRateUpdate

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "RateTableResponse",
    "ReconcileRequest",
    "VehicleRateUpdate",
]
