import json
from pathlib import Path
from typing import Any

import pytest

from fare_service.fare import FareCalculator
from fare_service.rates import RateTable, RateTableProvider

# Mirrors fare_service/data/rate_table.json so tests do not depend on the packaged file.
RATE_TABLE_DOCUMENT: dict[str, Any] = {
    "currency": "ZAR",
    "vehicles": {
        "standard": {"baseFare": 15, "perKmRate": 8, "perMinuteRate": 1, "minimumFare": 45},
        "premium": {"baseFare": 25, "perKmRate": 12, "perMinuteRate": 2, "minimumFare": 70},
        "luxury": {"baseFare": 55, "perKmRate": 22, "perMinuteRate": 4, "minimumFare": 100},
    },
}


@pytest.fixture
def rate_table_document() -> dict[str, Any]:
    """Fresh copy of the rate table JSON document."""
    return json.loads(json.dumps(RATE_TABLE_DOCUMENT))


@pytest.fixture
def rate_table(rate_table_document: dict[str, Any]) -> RateTable:
    return RateTable.from_dict(rate_table_document)


@pytest.fixture
def rate_table_file(tmp_path: Path, rate_table_document: dict[str, Any]) -> Path:
    """Rate table written to a temporary JSON file."""
    path = tmp_path / "rate_table.json"
    path.write_text(json.dumps(rate_table_document), encoding="utf-8")
    return path


@pytest.fixture
def rate_provider(rate_table: RateTable) -> RateTableProvider:
    return RateTableProvider(rate_table)


@pytest.fixture
def calculator(rate_table: RateTable) -> FareCalculator:
    return FareCalculator(rate_table)
