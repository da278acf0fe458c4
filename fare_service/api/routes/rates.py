import logging

from fastapi import APIRouter, HTTPException

from fare_service.api.dependencies import RateProviderDep
from fare_service.api.models import ErrorResponse, RateTableResponse, VehicleRateUpdate
from fare_service.rates import VehicleRate

logger = logging.getLogger(__name__)

router = APIRouter()


def _require_vehicle_type(provider: RateProviderDep, vehicle_type: str) -> None:
    if vehicle_type not in provider.current():
        raise HTTPException(
            status_code=404, detail=f"No rates configured for vehicle type: {vehicle_type}"
        )


@router.get("", response_model=RateTableResponse)
def get_rate_table(provider: RateProviderDep) -> RateTableResponse:
    """Current rate table snapshot."""
    return RateTableResponse.from_table(provider.current())


@router.get("/{vehicle_type}", response_model=VehicleRate)
def get_vehicle_rate(vehicle_type: str, provider: RateProviderDep) -> VehicleRate:
    _require_vehicle_type(provider, vehicle_type)
    return provider.current().get(vehicle_type)


@router.patch(
    "/{vehicle_type}",
    response_model=VehicleRate,
    responses={400: {"model": ErrorResponse}},
)
def update_vehicle_rate(
    vehicle_type: str, body: VehicleRateUpdate, provider: RateProviderDep
) -> VehicleRate:
    """Partially update one vehicle type's rates and publish the new table."""
    _require_vehicle_type(provider, vehicle_type)
    return provider.update_vehicle_rate(vehicle_type, **body.model_dump(exclude_unset=True))


@router.post("/reload", response_model=RateTableResponse)
def reload_rate_table(provider: RateProviderDep) -> RateTableResponse:
    """Re-read the rate table from its source file."""
    table = provider.reload()
    logger.info("Rate table reloaded from %s", provider.source)
    return RateTableResponse.from_table(table)
