"""Upstream query construction - Pure functions.

Translates operation inputs into the query parameters of the USGS FDSN
event service. Times are absolute UTC timestamps computed from the
request time `now`, so two calls seconds apart cover slightly different
windows.

The volcano source has no server-side filtering; it is always fetched
in full and filtered locally (see core.volcano).
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from geohazards.core.geo import GeoPoint
from geohazards.core.inputs import ReportRequest, SearchRequest, TopRequest


# FDSN timestamp format (UTC, no offset suffix)
TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"

ORDER_BY_TIME = "time"
ORDER_BY_MAGNITUDE = "magnitude"

OVERVIEW_LOOKBACK_DAYS = 1
OVERVIEW_MIN_MAGNITUDE = 4
OVERVIEW_LIMIT = 5

REPORT_LOOKBACK_DAYS = 30
REPORT_MIN_MAGNITUDE = 2
REPORT_LIMIT = 50


@dataclass(frozen=True)
class EarthquakeQuery:
    """Parameters for a USGS event query.

    Attributes:
        start_time: Fetch earthquakes after this time (UTC)
        min_magnitude: Minimum magnitude
        limit: Maximum number of results
        order_by: 'time' or 'magnitude' (both descending)
        max_magnitude: Maximum magnitude (optional)
        center: Center of a radius search (optional)
        radius_km: Radius of a radius search, used only with center
    """
    start_time: datetime
    min_magnitude: float
    limit: int
    order_by: str = ORDER_BY_TIME
    max_magnitude: float | None = None
    center: GeoPoint | None = None
    radius_km: float | None = None


def build_query_params(query: EarthquakeQuery) -> dict[str, str]:
    """Build URL query parameters for a USGS event query.

    Pure function.

    Args:
        query: Query parameters

    Returns:
        Dict of URL query parameters
    """
    params: dict[str, str] = {
        "format": "geojson",
        "starttime": query.start_time.strftime(TIME_FORMAT),
        "minmagnitude": str(query.min_magnitude),
        "limit": str(query.limit),
        "orderby": query.order_by,
    }

    if query.center is not None and query.radius_km is not None:
        params["latitude"] = str(query.center.latitude)
        params["longitude"] = str(query.center.longitude)
        params["maxradiuskm"] = str(query.radius_km)

    if query.max_magnitude is not None:
        params["maxmagnitude"] = str(query.max_magnitude)

    return params


def build_lookup_params(event_id: str) -> dict[str, str]:
    """Build URL query parameters for a single-event lookup.

    nodata=404 makes an unknown ID a 404 rather than an empty 204.
    """
    return {
        "eventid": event_id.strip(),
        "format": "geojson",
        "nodata": "404",
    }


def overview_query(now: datetime) -> EarthquakeQuery:
    """Largest M4+ earthquakes of the past 24 hours."""
    return EarthquakeQuery(
        start_time=now - timedelta(days=OVERVIEW_LOOKBACK_DAYS),
        min_magnitude=OVERVIEW_MIN_MAGNITUDE,
        limit=OVERVIEW_LIMIT,
        order_by=ORDER_BY_MAGNITUDE,
    )


def search_query(request: SearchRequest, now: datetime) -> EarthquakeQuery:
    """Most recent earthquakes matching a search request.

    Pure function. Latitude without longitude (or the reverse) does not
    produce a spatial filter.
    """
    center = None
    if request.latitude is not None and request.longitude is not None:
        center = GeoPoint(request.latitude, request.longitude)

    return EarthquakeQuery(
        start_time=now - timedelta(days=request.days),
        min_magnitude=request.min_magnitude,
        limit=request.limit,
        order_by=ORDER_BY_TIME,
        max_magnitude=request.max_magnitude,
        center=center,
        radius_km=request.radius_km if center is not None else None,
    )


def top_query(request: TopRequest, now: datetime) -> EarthquakeQuery:
    """Largest earthquakes of a day, week or month."""
    return EarthquakeQuery(
        start_time=now - timedelta(days=request.days),
        min_magnitude=request.min_magnitude,
        limit=request.limit,
        order_by=ORDER_BY_MAGNITUDE,
    )


def report_query(request: ReportRequest, now: datetime) -> EarthquakeQuery:
    """M2+ earthquakes of the past 30 days around a report location."""
    return EarthquakeQuery(
        start_time=now - timedelta(days=REPORT_LOOKBACK_DAYS),
        min_magnitude=REPORT_MIN_MAGNITUDE,
        limit=REPORT_LIMIT,
        order_by=ORDER_BY_MAGNITUDE,
        center=GeoPoint(request.latitude, request.longitude),
        radius_km=request.radius_km,
    )
