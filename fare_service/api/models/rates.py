from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fare_service.rates import RateTable, VehicleRate


class RateTableResponse(BaseModel):
    currency: str
    vehicles: dict[str, VehicleRate]

    @classmethod
    def from_table(cls, table: RateTable) -> "RateTableResponse":
        return cls(currency=table.currency, vehicles=dict(sorted(table.vehicles.items())))


class VehicleRateUpdate(BaseModel):
    """Partial update for one vehicle type; omitted fields keep their value."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    base_fare: Decimal | None = Field(default=None)
    per_km_rate: Decimal | None = Field(default=None)
    per_minute_rate: Decimal | None = Field(default=None)
    minimum_fare: Decimal | None = Field(default=None)
