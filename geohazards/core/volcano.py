"""Volcano data models, ranking and search - Pure functions.

This module parses the USGS volcano list into typed Volcano objects and
provides the local filtering the volcano source lacks: ranking by
distance from a point, and case-insensitive text search.
All functions are pure with no side effects.
"""

import math
from dataclasses import dataclass
from typing import Any

from geohazards.core.errors import UpstreamMalformed
from geohazards.core.geo import GeoPoint, calculate_distance, is_valid_coordinate


VOLCANO_SOURCE = "USGS volcano service"


@dataclass(frozen=True)
class Volcano:
    """Immutable volcano record.

    Attributes:
        vnum: Smithsonian GVP volcano number
        name: Volcano name
        country: Country name
        subregion: Geographic subregion
        latitude: Summit latitude
        longitude: Summit longitude
        elevation_m: Summit elevation in meters, may be negative (optional)
        observatory: Responsible observatory abbreviation (optional)
        webpage: Information page URL (optional)
    """
    vnum: str
    name: str
    country: str
    subregion: str
    latitude: float
    longitude: float
    elevation_m: float | None = None
    observatory: str | None = None
    webpage: str | None = None

    @property
    def location(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)


@dataclass(frozen=True)
class RankedVolcano:
    """A volcano paired with its distance from a search center.

    Attributes:
        volcano: The volcano record
        distance_km: Great-circle distance from the center
    """
    volcano: Volcano
    distance_km: float


def _coordinate(value: Any, field: str, name: str) -> float:
    if isinstance(value, bool):
        value = None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise UpstreamMalformed(
            VOLCANO_SOURCE,
            f"volcano {name!r} has invalid '{field}': {value!r}",
        ) from None
    if not math.isfinite(number):
        raise UpstreamMalformed(VOLCANO_SOURCE, f"volcano {name!r} has non-finite '{field}'")
    return number


def _optional_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _optional_text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def parse_volcano(record: Any) -> Volcano:
    """Parse a single volcano list entry.

    Pure function.

    Args:
        record: One element of the USGS volcano list

    Returns:
        Volcano object

    Raises:
        UpstreamMalformed: If vnum, vName or coordinates are missing or invalid
    """
    if not isinstance(record, dict):
        raise UpstreamMalformed(VOLCANO_SOURCE, "volcano record is not an object")

    vnum = record.get("vnum")
    name = record.get("vName")
    if vnum is None or vnum == "":
        raise UpstreamMalformed(VOLCANO_SOURCE, "volcano record has no 'vnum'")
    if not isinstance(name, str) or not name:
        raise UpstreamMalformed(VOLCANO_SOURCE, f"volcano {vnum} has no 'vName'")

    latitude = _coordinate(record.get("latitude"), "latitude", name)
    longitude = _coordinate(record.get("longitude"), "longitude", name)
    if not is_valid_coordinate(latitude, longitude):
        raise UpstreamMalformed(
            VOLCANO_SOURCE,
            f"volcano {name!r} has out-of-range coordinates ({latitude}, {longitude})",
        )

    return Volcano(
        vnum=str(vnum),
        name=name,
        country=_optional_text(record.get("country")) or "",
        subregion=_optional_text(record.get("subregion")) or "",
        latitude=latitude,
        longitude=longitude,
        elevation_m=_optional_float(record.get("elevation_m")),
        observatory=_optional_text(record.get("obsAbbr")),
        webpage=_optional_text(record.get("webpage")),
    )


def parse_volcanoes(data: Any) -> list[Volcano]:
    """Parse the full USGS volcano list.

    Pure function.

    Raises:
        UpstreamMalformed: If the body is not a list or any record is invalid
    """
    if not isinstance(data, list):
        raise UpstreamMalformed(VOLCANO_SOURCE, "response is not a list")
    return [parse_volcano(record) for record in data]


def rank_by_distance(
    volcanoes: list[Volcano],
    center: GeoPoint,
    radius_km: float,
    limit: int | None = None,
) -> list[RankedVolcano]:
    """Find volcanoes within a radius, nearest first.

    Pure function. Ties keep the input order; the input is not modified.

    Args:
        volcanoes: Volcanoes to rank
        center: Search center
        radius_km: Inclusive search radius in kilometers
        limit: Keep at most this many results (None for all)

    Returns:
        RankedVolcano list sorted by ascending distance
    """
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    ranked = [
        RankedVolcano(volcano=v, distance_km=calculate_distance(center, v.location))
        for v in volcanoes
    ]
    nearby = [r for r in ranked if r.distance_km <= radius_km]
    nearby.sort(key=lambda r: r.distance_km)

    if limit is not None:
        nearby = nearby[:limit]

    return nearby


def _contains(haystack: str, needle: str) -> bool:
    return needle.lower() in haystack.lower()


def search_volcanoes(
    volcanoes: list[Volcano],
    country: str | None = None,
    name: str | None = None,
) -> list[Volcano]:
    """Filter volcanoes by country and/or name substring.

    Pure function. Matching is case-insensitive; when both filters are
    given a volcano must match both. Empty filters are ignored.

    Args:
        volcanoes: Volcanoes to search
        country: Substring of the country name
        name: Substring of the volcano name

    Returns:
        Matching volcanoes in input order
    """
    result = list(volcanoes)

    if country:
        result = [v for v in result if v.country and _contains(v.country, country)]

    if name:
        result = [v for v in result if _contains(v.name, name)]

    return result
