"""Earthquake data models and parsing - Pure functions.

This module handles parsing USGS GeoJSON data into typed Earthquake objects.
All functions are pure with no side effects.

Parsing is strict: a feature missing a required field fails the whole
response with UpstreamMalformed instead of being skipped.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from geohazards.core.errors import UpstreamMalformed
from geohazards.core.geo import is_valid_coordinate


EARTHQUAKE_SOURCE = "USGS earthquake service"

# Magnitude at or above which an event counts toward the risk level
SIGNIFICANT_MAGNITUDE = 4.0


@dataclass(frozen=True)
class Earthquake:
    """Immutable earthquake data model.

    Attributes:
        id: Unique USGS event ID
        magnitude: Earthquake magnitude
        place: Human-readable location description
        time: Event timestamp (UTC)
        latitude: Epicenter latitude
        longitude: Epicenter longitude
        depth_km: Depth in kilometers
        url: USGS event detail URL
        felt: Number of "felt" reports (optional)
        alert: PAGER alert level (green/yellow/orange/red) (optional)
        significance: USGS significance score (optional)
        tsunami: Whether the tsunami flag is set
        mag_type: Magnitude type (e.g., 'ml', 'md', 'mb')
    """
    id: str
    magnitude: float
    place: str
    time: datetime
    latitude: float
    longitude: float
    depth_km: float
    url: str = ""
    felt: int | None = None
    alert: str | None = None
    significance: int | None = None
    tsunami: bool = False
    mag_type: str = ""


@dataclass(frozen=True)
class EarthquakeFeed:
    """A decoded FeatureCollection.

    Attributes:
        count: Event count reported in the response metadata
        earthquakes: Events in upstream order
    """
    count: int
    earthquakes: tuple[Earthquake, ...]


def _number(value: Any, field: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise UpstreamMalformed(EARTHQUAKE_SOURCE, f"'{field}' is not a number: {value!r}")
    if not math.isfinite(value):
        raise UpstreamMalformed(EARTHQUAKE_SOURCE, f"'{field}' is not finite: {value!r}")
    return float(value)


def _optional_int(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def parse_earthquake(feature: Any) -> Earthquake:
    """Parse a single GeoJSON feature into an Earthquake.

    Pure function.

    Args:
        feature: GeoJSON feature dict from USGS API

    Returns:
        Earthquake object

    Raises:
        UpstreamMalformed: If a required field is missing or invalid
    """
    if not isinstance(feature, dict):
        raise UpstreamMalformed(EARTHQUAKE_SOURCE, "feature is not an object")

    event_id = feature.get("id")
    if not isinstance(event_id, str) or not event_id:
        raise UpstreamMalformed(EARTHQUAKE_SOURCE, "feature has no 'id'")

    props = feature.get("properties")
    geometry = feature.get("geometry")
    if not isinstance(props, dict) or not isinstance(geometry, dict):
        raise UpstreamMalformed(
            EARTHQUAKE_SOURCE,
            f"feature {event_id} has no properties or geometry",
        )

    coords = geometry.get("coordinates")
    if not isinstance(coords, list) or len(coords) < 3:
        raise UpstreamMalformed(
            EARTHQUAKE_SOURCE,
            f"feature {event_id} has no [lon, lat, depth] coordinates",
        )

    if props.get("mag") is None:
        raise UpstreamMalformed(EARTHQUAKE_SOURCE, f"feature {event_id} has no 'mag'")
    if props.get("time") is None:
        raise UpstreamMalformed(EARTHQUAKE_SOURCE, f"feature {event_id} has no 'time'")

    longitude = _number(coords[0], "longitude")
    latitude = _number(coords[1], "latitude")
    if not is_valid_coordinate(latitude, longitude):
        raise UpstreamMalformed(
            EARTHQUAKE_SOURCE,
            f"feature {event_id} has out-of-range coordinates ({latitude}, {longitude})",
        )

    # USGS uses milliseconds since epoch
    time_ms = _number(props["time"], "time")
    try:
        event_time = datetime.fromtimestamp(time_ms / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise UpstreamMalformed(
            EARTHQUAKE_SOURCE,
            f"feature {event_id} has an unrepresentable 'time': {time_ms!r}",
        ) from e

    return Earthquake(
        id=event_id,
        magnitude=_number(props["mag"], "mag"),
        place=props.get("place") or "Unknown location",
        time=event_time,
        longitude=longitude,
        latitude=latitude,
        depth_km=_number(coords[2], "depth"),
        url=props.get("url") or "",
        felt=_optional_int(props.get("felt")),
        alert=props.get("alert"),
        significance=_optional_int(props.get("sig")),
        tsunami=bool(props.get("tsunami", 0)),
        mag_type=props.get("magType") or "",
    )


def parse_feed(geojson: Any) -> EarthquakeFeed:
    """Parse a USGS GeoJSON FeatureCollection.

    Pure function: upstream order is preserved, since callers ask USGS
    to order by time or by magnitude.

    Args:
        geojson: Full GeoJSON FeatureCollection from USGS API

    Returns:
        EarthquakeFeed with the reported count and parsed events

    Raises:
        UpstreamMalformed: If metadata, features or any feature is invalid
    """
    if not isinstance(geojson, dict):
        raise UpstreamMalformed(EARTHQUAKE_SOURCE, "response is not an object")

    metadata = geojson.get("metadata")
    features = geojson.get("features")
    if not isinstance(metadata, dict) or "count" not in metadata:
        raise UpstreamMalformed(EARTHQUAKE_SOURCE, "response has no 'metadata.count'")
    if not isinstance(features, list):
        raise UpstreamMalformed(EARTHQUAKE_SOURCE, "response has no 'features' list")

    count = _optional_int(metadata["count"])
    if count is None:
        raise UpstreamMalformed(EARTHQUAKE_SOURCE, "'metadata.count' is not an integer")

    return EarthquakeFeed(
        count=count,
        earthquakes=tuple(parse_earthquake(f) for f in features),
    )


def filter_by_magnitude(
    earthquakes: list[Earthquake] | tuple[Earthquake, ...],
    min_magnitude: float | None = None,
    max_magnitude: float | None = None,
) -> list[Earthquake]:
    """Filter earthquakes by magnitude range.

    Pure function.

    Args:
        earthquakes: Earthquakes to filter
        min_magnitude: Minimum magnitude (inclusive), None for no minimum
        max_magnitude: Maximum magnitude (inclusive), None for no maximum

    Returns:
        Filtered list of earthquakes
    """
    result = list(earthquakes)

    if min_magnitude is not None:
        result = [e for e in result if e.magnitude >= min_magnitude]

    if max_magnitude is not None:
        result = [e for e in result if e.magnitude <= max_magnitude]

    return result


def count_significant(earthquakes: list[Earthquake] | tuple[Earthquake, ...]) -> int:
    """Count events at or above SIGNIFICANT_MAGNITUDE."""
    return len(filter_by_magnitude(earthquakes, min_magnitude=SIGNIFICANT_MAGNITUDE))
