"""Response formatting - Pure functions.

This module shapes parsed earthquake and volcano data into the response
body of each operation. Response keys are camelCase because they are
the public wire format.
All functions are pure with no side effects.
"""

import math
from datetime import datetime, timezone
from typing import Any

from geohazards.core.catalog import Operation
from geohazards.core.earthquake import Earthquake, EarthquakeFeed
from geohazards.core.inputs import SearchRequest, TopRequest, VolcanoSearchRequest
from geohazards.core.report import HazardAssessment
from geohazards.core.volcano import RankedVolcano, Volcano


OVERVIEW_DATA_SOURCE = "USGS Earthquake Hazards Program (live)"

REPORT_DATA_SOURCES = [
    "USGS Earthquake Hazards Program",
    "USGS Volcano Hazards Program",
]

# Earthquakes shown in a report's recentEarthquakes preview
REPORT_EARTHQUAKE_PREVIEW = 15


def format_time(value: datetime) -> str:
    """ISO-8601 UTC timestamp with milliseconds, e.g. 2024-03-15T12:00:00.000Z."""
    utc = value.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def format_quantity(value: float | None, unit: str) -> str | None:
    """Render a measurement as '<number> <unit>', e.g. '10.5 km' or '3776 m'.

    Pure function. Whole numbers are rendered without a decimal part.
    """
    if value is None:
        return None
    if float(value).is_integer():
        return f"{int(value)} {unit}"
    return f"{value} {unit}"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return int(math.floor(value + 0.5))


def _earthquake_brief(eq: Earthquake) -> dict[str, Any]:
    return {
        "id": eq.id,
        "magnitude": eq.magnitude,
        "location": eq.place,
        "time": format_time(eq.time),
        "depth": format_quantity(eq.depth_km, "km"),
    }


def _volcano_to_dict(volcano: Volcano, distance_km: float | None = None) -> dict[str, Any]:
    result: dict[str, Any] = {
        "id": volcano.vnum,
        "name": volcano.name,
        "country": volcano.country,
        "region": volcano.subregion,
        "coordinates": {
            "latitude": volcano.latitude,
            "longitude": volcano.longitude,
        },
        "elevation": format_quantity(volcano.elevation_m, "m"),
        "observatory": volcano.observatory,
        "infoUrl": volcano.webpage,
    }
    if distance_km is not None:
        result["distanceKm"] = round_half_up(distance_km)
    return result


def format_overview(
    feed: EarthquakeFeed,
    operations: list[Operation],
    now: datetime,
) -> dict[str, Any]:
    """Format the free global overview.

    Pure function.

    Args:
        feed: Largest M4+ earthquakes of the past 24 hours
        operations: Operation catalog; paid operations are advertised
        now: Request time

    Returns:
        Response body dict
    """
    return {
        "summary": f"{feed.count} significant earthquakes (M4+) in last 24 hours",
        "latestQuakes": [
            {
                "magnitude": eq.magnitude,
                "location": eq.place,
                "time": format_time(eq.time),
                "depth": format_quantity(eq.depth_km, "km"),
            }
            for eq in feed.earthquakes
        ],
        "dataSource": OVERVIEW_DATA_SOURCE,
        "fetchedAt": format_time(now),
        "endpoints": {op.key: op.description for op in operations if op.price > 0},
    }


def format_lookup(eq: Earthquake, now: datetime) -> dict[str, Any]:
    """Format the full details of a single earthquake.

    Pure function.
    """
    return {
        "id": eq.id,
        "magnitude": eq.magnitude,
        "magnitudeType": eq.mag_type,
        "location": eq.place,
        "time": format_time(eq.time),
        "coordinates": {
            "latitude": eq.latitude,
            "longitude": eq.longitude,
            "depth": format_quantity(eq.depth_km, "km"),
        },
        "tsunami": eq.tsunami,
        "alert": eq.alert,
        "significance": eq.significance,
        "feltReports": eq.felt,
        "detailUrl": eq.url,
        "fetchedAt": format_time(now),
    }


def format_search(
    feed: EarthquakeFeed,
    request: SearchRequest,
    now: datetime,
) -> dict[str, Any]:
    """Format earthquake search results.

    Pure function.
    """
    return {
        "totalFound": feed.count,
        "searchParams": {
            "latitude": request.latitude,
            "longitude": request.longitude,
            "radiusKm": request.radius_km,
            "minMagnitude": request.min_magnitude,
            "maxMagnitude": request.max_magnitude,
            "days": request.days,
        },
        "earthquakes": [
            {
                **_earthquake_brief(eq),
                "coordinates": {"lat": eq.latitude, "lng": eq.longitude},
            }
            for eq in feed.earthquakes
        ],
        "fetchedAt": format_time(now),
    }


def format_top(
    feed: EarthquakeFeed,
    request: TopRequest,
    period_start: datetime,
    now: datetime,
) -> dict[str, Any]:
    """Format the largest earthquakes of a period, ranked from 1.

    Pure function.
    """
    return {
        "period": request.period,
        "periodStart": format_time(period_start),
        "periodEnd": format_time(now),
        "totalSignificant": feed.count,
        "topEarthquakes": [
            {
                "rank": rank,
                "id": eq.id,
                "magnitude": eq.magnitude,
                "magnitudeType": eq.mag_type,
                "location": eq.place,
                "time": format_time(eq.time),
                "depth": format_quantity(eq.depth_km, "km"),
                "tsunami": eq.tsunami,
                "alert": eq.alert,
                "detailUrl": eq.url,
            }
            for rank, eq in enumerate(feed.earthquakes, start=1)
        ],
        "fetchedAt": format_time(now),
    }


def format_volcano_search(
    matches: list[Volcano] | list[RankedVolcano],
    request: VolcanoSearchRequest,
    now: datetime,
) -> dict[str, Any]:
    """Format volcano search results.

    Pure function. `matches` holds every match; only the first
    `request.limit` are returned. RankedVolcano matches (radius search)
    also carry their rounded distance.
    """
    returned = matches[:request.limit]

    volcanoes = []
    for match in returned:
        if isinstance(match, RankedVolcano):
            volcanoes.append(_volcano_to_dict(match.volcano, match.distance_km))
        else:
            volcanoes.append(_volcano_to_dict(match))

    search_params: dict[str, Any] = {
        "country": request.country,
        "name": request.name,
    }
    if request.latitude is not None and request.longitude is not None:
        search_params.update({
            "latitude": request.latitude,
            "longitude": request.longitude,
            "radiusKm": request.radius_km,
        })

    return {
        "totalMatches": len(matches),
        "returned": len(volcanoes),
        "searchParams": search_params,
        "volcanoes": volcanoes,
        "fetchedAt": format_time(now),
    }


def format_report(assessment: HazardAssessment, now: datetime) -> dict[str, Any]:
    """Format a geohazard report.

    Pure function.

    Args:
        assessment: Result of core.report.assess_hazards
        now: Request time

    Returns:
        Response body dict
    """
    return {
        "location": {
            "latitude": assessment.center.latitude,
            "longitude": assessment.center.longitude,
        },
        "radiusKm": assessment.radius_km,
        "riskAssessment": {
            "level": assessment.risk_level.value,
            "earthquakesLast30Days": assessment.total_earthquakes,
            "significantQuakes": assessment.significant_earthquakes,
            "nearbyVolcanoes": len(assessment.nearby_volcanoes),
        },
        "recentEarthquakes": [
            _earthquake_brief(eq)
            for eq in assessment.earthquakes[:REPORT_EARTHQUAKE_PREVIEW]
        ],
        "nearbyVolcanoes": [
            {
                "name": ranked.volcano.name,
                "country": ranked.volcano.country,
                "distanceKm": round_half_up(ranked.distance_km),
                "elevation": format_quantity(ranked.volcano.elevation_m, "m"),
                "observatory": ranked.volcano.observatory,
            }
            for ranked in assessment.nearby_volcanoes
        ],
        "dataSources": list(REPORT_DATA_SOURCES),
        "fetchedAt": format_time(now),
    }
