from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fare_service.fare import TripQuoteRequest


class ReconcileRequest(BaseModel):
    """A quoted trip plus the distance and duration actually driven."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    quote: TripQuoteRequest
    actual_distance: float = Field(strict=True)
    actual_duration: float = Field(strict=True)


class ErrorResponse(BaseModel):
    detail: str
    field: str | None = None
