"""Operation inputs - Pure data structures with bounds validation.

Each paid operation takes one of these. validate() raises InvalidInput
for the first out-of-bounds field, so that a bad request never reaches
an upstream source.
"""

import math
from dataclasses import dataclass

from geohazards.core.errors import InvalidInput


# Lookback for each `top` period, in days
PERIOD_DAYS: dict[str, int] = {
    "day": 1,
    "week": 7,
    "month": 30,
}


def _check_range(value: float | None, low: float, high: float, field: str) -> None:
    """Raise InvalidInput unless low <= value <= high (None is accepted)."""
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput(field, f"must be a number, got {value!r}")
    if not math.isfinite(value) or not low <= value <= high:
        raise InvalidInput(field, f"must be between {low:g} and {high:g}, got {value}")


def _check_limit(value: int, high: int, field: str = "limit") -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(field, f"must be an integer, got {value!r}")
    _check_range(value, 1, high, field)


def _check_magnitudes(min_magnitude: float, max_magnitude: float | None) -> None:
    _check_range(min_magnitude, 0, 10, "minMagnitude")
    _check_range(max_magnitude, 0, 10, "maxMagnitude")
    if max_magnitude is not None and min_magnitude > max_magnitude:
        raise InvalidInput(
            "maxMagnitude",
            f"must not be below minMagnitude ({max_magnitude} < {min_magnitude})",
        )


@dataclass(frozen=True)
class LookupRequest:
    """Input for `lookup`.

    Attributes:
        event_id: USGS event ID (e.g., us6000s5e4)
    """
    event_id: str

    def validate(self) -> None:
        if not isinstance(self.event_id, str) or not self.event_id.strip():
            raise InvalidInput("eventId", "must be a non-empty string")


@dataclass(frozen=True)
class SearchRequest:
    """Input for `search`.

    A spatial filter is only applied when both latitude and longitude
    are given.
    """
    latitude: float | None = None
    longitude: float | None = None
    radius_km: float = 500
    min_magnitude: float = 4
    max_magnitude: float | None = None
    days: int = 7
    limit: int = 20

    def validate(self) -> None:
        _check_range(self.latitude, -90, 90, "latitude")
        _check_range(self.longitude, -180, 180, "longitude")
        _check_range(self.radius_km, 1, 20000, "radiusKm")
        _check_magnitudes(self.min_magnitude, self.max_magnitude)
        _check_limit(self.days, 365, "days")
        _check_limit(self.limit, 100)


@dataclass(frozen=True)
class TopRequest:
    """Input for `top`."""
    period: str = "week"
    min_magnitude: float = 5
    limit: int = 10

    @property
    def days(self) -> int:
        return PERIOD_DAYS[self.period]

    def validate(self) -> None:
        if self.period not in PERIOD_DAYS:
            raise InvalidInput(
                "period",
                f"must be one of {', '.join(PERIOD_DAYS)}, got {self.period!r}",
            )
        _check_range(self.min_magnitude, 0, 10, "minMagnitude")
        _check_limit(self.limit, 50)


@dataclass(frozen=True)
class VolcanoSearchRequest:
    """Input for `volcanoSearch`.

    Text filters are ANDed. The radius filter is only applied when both
    latitude and longitude are given.
    """
    country: str | None = None
    name: str | None = None
    limit: int = 20
    latitude: float | None = None
    longitude: float | None = None
    radius_km: float = 300

    def validate(self) -> None:
        _check_limit(self.limit, 100)
        _check_range(self.latitude, -90, 90, "latitude")
        _check_range(self.longitude, -180, 180, "longitude")
        _check_range(self.radius_km, 1, 20000, "radiusKm")


@dataclass(frozen=True)
class ReportRequest:
    """Input for `report`."""
    latitude: float
    longitude: float
    radius_km: float = 300

    def validate(self) -> None:
        if self.latitude is None:
            raise InvalidInput("latitude", "is required")
        if self.longitude is None:
            raise InvalidInput("longitude", "is required")
        _check_range(self.latitude, -90, 90, "latitude")
        _check_range(self.longitude, -180, 180, "longitude")
        _check_range(self.radius_km, 50, 1000, "radiusKm")
