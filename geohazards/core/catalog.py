"""Operation catalog - Pure data.

Lists the operations the service exposes with their advertised prices.
Prices are in base units of the payment currency; collecting payment is
handled outside this service.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Operation:
    """An exposed operation.

    Attributes:
        key: Operation name used by callers
        description: One-line description
        price: Advertised per-call price in base units (0 = free)
    """
    key: str
    description: str
    price: int


OPERATIONS: tuple[Operation, ...] = (
    Operation(
        key="overview",
        description="Free overview of recent global seismic activity - try before you buy",
        price=0,
    ),
    Operation(
        key="lookup",
        description="Get details for specific earthquake by ID",
        price=1000,
    ),
    Operation(
        key="search",
        description="Search earthquakes by location, magnitude, time range",
        price=2000,
    ),
    Operation(
        key="top",
        description="Top earthquakes by magnitude",
        price=2000,
    ),
    Operation(
        key="volcanoSearch",
        description="Search volcanoes by country/region",
        price=2000,
    ),
    Operation(
        key="report",
        description="Full geohazard report for any location",
        price=5000,
    ),
)

OPERATION_KEYS = tuple(op.key for op in OPERATIONS)


def default_prices() -> dict[str, int]:
    """Map each operation key to its default price."""
    return {op.key: op.price for op in OPERATIONS}


def priced_operations(prices: dict[str, int] | None = None) -> list[Operation]:
    """Catalog with prices overridden from configuration.

    Pure function. Keys missing from `prices` keep their default.
    """
    prices = prices or {}
    return [
        Operation(op.key, op.description, prices.get(op.key, op.price))
        for op in OPERATIONS
    ]
