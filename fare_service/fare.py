import logging
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fare_service.core.exceptions import InvalidInputError
from fare_service.money import Money, round_money, to_decimal
from fare_service.rates import RateTable, RateTableProvider, VehicleRate

logger = logging.getLogger(__name__)

NO_SURGE = Decimal("1")

# Upper bounds keep every amount well inside the default 28-digit Decimal context.
MAX_DISTANCE_KM = Decimal("20000")
MAX_DURATION_MINUTES = Decimal("43200")
MAX_SURGE = Decimal("100")


class TripQuoteRequest(BaseModel):
    """Trip parameters for a fare quote.

    Values are only type-checked here (booleans and numeric strings are refused);
    ``FareCalculator`` range-checks them and raises ``InvalidInputError`` so
    every caller gets the same error kind.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    distance: float = Field(strict=True)
    duration: float = Field(strict=True)
    vehicle_type: str
    surge: float = Field(default=1.0, strict=True)


class FareBreakdown(BaseModel):
    """Itemized fare for one trip.

    Components are rounded independently, so ``base_fare + distance_fare +
    time_fare + surge_amount`` is not guaranteed to equal ``total_fare``. When
    the minimum fare binds, ``total_fare`` exceeds the surged subtotal and
    ``surge_amount`` still reports the nominal surge delta.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    vehicle_type: str
    base_fare: Money = Field(ge=0)
    distance_fare: Money = Field(ge=0)
    time_fare: Money = Field(ge=0)
    surge_multiplier: float = Field(ge=1.0)
    surge_amount: Money = Field(ge=0)
    total_fare: Money = Field(ge=0)
    minimum_fare_applied: bool
    currency: str


class FareAdjustment(BaseModel):
    """Quoted fare versus the fare for the distance and time actually driven."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    quoted: FareBreakdown
    final: FareBreakdown
    fare_difference: Money


def _positive(field: str, value: float, limit: Decimal) -> Decimal:
    try:
        amount = to_decimal(value)
    except (ValueError, ArithmeticError) as e:
        raise InvalidInputError(field, f"must be a finite number, got {value!r}") from e
    if not amount.is_finite():
        raise InvalidInputError(field, f"must be a finite number, got {value!r}")
    if amount <= 0:
        raise InvalidInputError(field, f"must be greater than 0, got {value!r}")
    if amount > limit:
        raise InvalidInputError(field, f"must be at most {limit}, got {value!r}")
    return amount


def _surge(value: float) -> Decimal:
    try:
        surge = to_decimal(value)
    except (ValueError, ArithmeticError) as e:
        raise InvalidInputError("surge", f"must be a finite number, got {value!r}") from e
    if not surge.is_finite():
        raise InvalidInputError("surge", f"must be a finite number, got {value!r}")
    if surge < NO_SURGE:
        raise InvalidInputError("surge", f"must be >= 1.0, got {value!r}")
    if surge > MAX_SURGE:
        raise InvalidInputError("surge", f"must be at most {MAX_SURGE}, got {value!r}")
    return surge


class FareCalculator:
    """Calculates ride fares from distance, duration, vehicle type and surge.

    Pure computation over an immutable rate table. The table comes from the
    constructor (a fixed ``RateTable`` or a ``RateTableProvider`` whose current
    snapshot is read once per call) or is passed per call.
    """

    def __init__(self, rates: RateTable | RateTableProvider) -> None:
        self._rates = rates

    def _snapshot(self) -> RateTable:
        if isinstance(self._rates, RateTableProvider):
            return self._rates.current()
        return self._rates

    def calculate(
        self, request: TripQuoteRequest, rate_table: RateTable | None = None
    ) -> FareBreakdown:
        """
        Calculate the fare for a trip.

        Surge applies to the full subtotal, then the minimum fare floor, then
        rounding to cents (half-up).

        Raises:
            InvalidInputError: distance or duration <= 0 or above its cap,
                surge outside 1.0..100, a non-finite number, or a vehicle
                type missing from the table.
        """
        table = rate_table if rate_table is not None else self._snapshot()
        distance = _positive("distance", request.distance, MAX_DISTANCE_KM)
        duration = _positive("duration", request.duration, MAX_DURATION_MINUTES)
        surge = _surge(request.surge)
        rate = table.get(request.vehicle_type)

        breakdown = self._price(table, request.vehicle_type, rate, distance, duration, surge)
        logger.debug(
            "Quoted %s fare: %.2fkm %.2fmin surge=%s total=%s%s",
            request.vehicle_type,
            distance,
            duration,
            surge,
            breakdown.total_fare,
            " (minimum fare)" if breakdown.minimum_fare_applied else "",
            extra={"vehicle_type": request.vehicle_type},
        )
        return breakdown

    def reconcile(
        self,
        request: TripQuoteRequest,
        actual_distance: float,
        actual_duration: float,
        rate_table: RateTable | None = None,
    ) -> FareAdjustment:
        """Re-price a completed trip with its actual distance and duration.

        The quote's vehicle type and surge multiplier carry over unchanged.
        Both fares come from the same rate table snapshot.
        """
        table = rate_table if rate_table is not None else self._snapshot()
        quoted = self.calculate(request, rate_table=table)

        distance = _positive("actualDistance", actual_distance, MAX_DISTANCE_KM)
        duration = _positive("actualDuration", actual_duration, MAX_DURATION_MINUTES)
        rate = table.get(request.vehicle_type)
        final = self._price(
            table, request.vehicle_type, rate, distance, duration, to_decimal(request.surge)
        )

        difference = final.total_fare - quoted.total_fare
        if difference:
            logger.info(
                "Final %s fare differs from quote by %s %s",
                request.vehicle_type,
                difference,
                table.currency,
                extra={"vehicle_type": request.vehicle_type},
            )
        return FareAdjustment(quoted=quoted, final=final, fare_difference=difference)

    def _price(
        self,
        table: RateTable,
        vehicle_type: str,
        rate: VehicleRate,
        distance: Decimal,
        duration: Decimal,
        surge: Decimal,
    ) -> FareBreakdown:
        base_fare = rate.base_fare
        distance_fare = distance * rate.per_km_rate
        time_fare = duration * rate.per_minute_rate
        subtotal = base_fare + distance_fare + time_fare

        surged = subtotal * surge
        floor_applied = surged < rate.minimum_fare
        total = max(surged, rate.minimum_fare)

        return FareBreakdown(
            vehicle_type=vehicle_type,
            base_fare=round_money(base_fare),
            distance_fare=round_money(distance_fare),
            time_fare=round_money(time_fare),
            surge_multiplier=float(surge),
            surge_amount=round_money(surged - subtotal),
            total_fare=round_money(total),
            minimum_fare_applied=floor_applied,
            currency=table.currency,
        )
