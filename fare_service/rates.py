"""Per-vehicle rate tables and the thread-safe snapshot store that serves them."""

import json
import logging
import re
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel, to_snake

from fare_service.core.exceptions import ConfigurationError, InvalidInputError
from fare_service.money import Money

logger = logging.getLogger(__name__)

CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")


class VehicleRate(BaseModel):
    """Pricing coefficients for one vehicle type."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    base_fare: Money = Field(ge=0)
    per_km_rate: Money = Field(ge=0)
    per_minute_rate: Money = Field(ge=0)
    minimum_fare: Money = Field(ge=0)

    @model_validator(mode="after")
    def validate_minimum_covers_base(self) -> Self:
        if self.minimum_fare < self.base_fare:
            raise ValueError(
                f"minimumFare ({self.minimum_fare}) must be >= baseFare ({self.base_fare})"
            )
        return self


@dataclass(frozen=True)
class RateTable:
    """Immutable snapshot of the rates for every configured vehicle type."""

    currency: str
    vehicles: Mapping[str, VehicleRate]

    def __post_init__(self) -> None:
        if not CURRENCY_PATTERN.match(self.currency):
            raise ConfigurationError(
                f"Currency must be a three-letter upper-case code, got {self.currency!r}"
            )
        if not self.vehicles:
            raise ConfigurationError("Rate table must define at least one vehicle type")
        object.__setattr__(self, "vehicles", MappingProxyType(dict(self.vehicles)))

    def __contains__(self, vehicle_type: object) -> bool:
        return vehicle_type in self.vehicles

    def __len__(self) -> int:
        return len(self.vehicles)

    @property
    def vehicle_types(self) -> tuple[str, ...]:
        return tuple(sorted(self.vehicles))

    def get(self, vehicle_type: str) -> VehicleRate:
        """Return the rate row for ``vehicle_type``.

        There is no fallback row: an unknown vehicle type is an input error.
        """
        rate = self.vehicles.get(vehicle_type)
        if rate is None:
            raise InvalidInputError(
                "vehicleType",
                f"unknown vehicle type {vehicle_type!r}",
                details={"known": list(self.vehicle_types)},
            )
        return rate

    def with_rate(self, vehicle_type: str, rate: VehicleRate) -> "RateTable":
        """Return a copy of this table with one row added or replaced."""
        return RateTable(currency=self.currency, vehicles={**self.vehicles, vehicle_type: rate})

    def to_dict(self) -> dict[str, Any]:
        return {
            "currency": self.currency,
            "vehicles": {
                name: rate.model_dump(mode="json", by_alias=True)
                for name, rate in sorted(self.vehicles.items())
            },
        }

    @classmethod
    def from_dict(cls, data: Any) -> "RateTable":
        """Build a table from its JSON document form.

        Raises:
            ConfigurationError: if the document shape or any rate row is invalid.
        """
        if not isinstance(data, dict):
            raise ConfigurationError("Rate table document must be a JSON object")
        vehicles = data.get("vehicles")
        if not isinstance(vehicles, dict):
            raise ConfigurationError("Rate table document must contain a 'vehicles' object")

        rates: dict[str, VehicleRate] = {}
        for name, row in vehicles.items():
            try:
                rates[name] = VehicleRate.model_validate(row)
            except ValidationError as e:
                raise ConfigurationError(
                    f"Invalid rates for vehicle type {name!r}",
                    details={"vehicle_type": name, "errors": e.errors(include_url=False)},
                ) from e

        return cls(currency=str(data.get("currency", "")), vehicles=rates)


def load_rate_table(path: Path) -> RateTable:
    """Read and validate a rate table from a JSON file."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read rate table {path}: {e}", details={"path": str(path)}
        ) from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Rate table {path} is not valid JSON: {e}", details={"path": str(path)}
        ) from e

    table = RateTable.from_dict(data)
    logger.info(
        "Loaded rate table from %s (%d vehicle types, currency=%s)",
        path,
        len(table),
        table.currency,
    )
    return table


class RateTableProvider:
    """Holds the current rate table snapshot and publishes replacements atomically.

    Readers call ``current()`` without locking; the returned table is immutable.
    Writers build a complete new table and swap the reference under a lock, so
    a concurrent reader sees either the old table or the new one, never a mix.
    """

    def __init__(self, table: RateTable, source: Path | None = None) -> None:
        self._table = table
        self._source = source
        self._write_lock = threading.Lock()

    @classmethod
    def from_file(cls, path: Path) -> "RateTableProvider":
        return cls(load_rate_table(path), source=Path(path))

    @property
    def source(self) -> Path | None:
        return self._source

    def current(self) -> RateTable:
        return self._table

    def publish(self, table: RateTable) -> RateTable:
        """Replace the current snapshot and return the previous one."""
        with self._write_lock:
            previous = self._table
            self._table = table
        logger.info(
            "Published rate table (%d vehicle types, currency=%s)", len(table), table.currency
        )
        return previous

    def update_vehicle_rate(self, vehicle_type: str, **changes: Any) -> VehicleRate:
        """Apply a partial update to one vehicle type's rates.

        ``changes`` may use snake_case or camelCase field names. The merged row
        is fully re-validated before it is published.
        """
        normalized = {to_snake(name): value for name, value in changes.items()}
        for name in normalized:
            if name not in VehicleRate.model_fields:
                raise InvalidInputError(to_camel(name), "unknown rate field")

        with self._write_lock:
            table = self._table
            current = table.get(vehicle_type)
            try:
                updated = VehicleRate.model_validate({**current.model_dump(), **normalized})
            except ValidationError as e:
                error = e.errors(include_url=False)[0]
                # Model-level failures carry no location; the only one is the floor rule.
                loc = str(error["loc"][0]) if error["loc"] else "minimum_fare"
                raise InvalidInputError(
                    to_camel(to_snake(loc)),
                    error["msg"],
                    details={"vehicle_type": vehicle_type},
                ) from e
            self._table = table.with_rate(vehicle_type, updated)

        logger.info("Updated rates for %s: %s", vehicle_type, sorted(changes))
        return updated

    def reload(self) -> RateTable:
        """Re-read the source file and publish it.

        On failure the current snapshot is left untouched.
        """
        if self._source is None:
            raise ConfigurationError("Rate table has no source file to reload from")
        table = load_rate_table(self._source)
        self.publish(table)
        return table
