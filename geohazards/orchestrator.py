"""Orchestrator - Wires Functional Core and Imperative Shell.

This module coordinates the flow of data between the pure functional
core and the I/O-performing shell components. Each public method is one
operation: validate input, fetch, parse, shape.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from geohazards.core.catalog import priced_operations
from geohazards.core.config import Config
from geohazards.core.earthquake import parse_earthquake, parse_feed
from geohazards.core.formatter import (
    format_lookup,
    format_overview,
    format_report,
    format_search,
    format_top,
    format_volcano_search,
)
from geohazards.core.geo import GeoPoint
from geohazards.core.inputs import (
    LookupRequest,
    ReportRequest,
    SearchRequest,
    TopRequest,
    VolcanoSearchRequest,
)
from geohazards.core.query import overview_query, report_query, search_query, top_query
from geohazards.core.report import assess_hazards
from geohazards.core.volcano import parse_volcanoes, rank_by_distance, search_volcanoes
from geohazards.shell.usgs_client import USGSClient
from geohazards.shell.volcano_client import VolcanoClient


logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Orchestrator:
    """Runs the gateway operations.

    This class wires together:
    - USGS client (fetches earthquake data)
    - Volcano client (fetches the volcano list)
    - Core functions (queries, parsing, ranking, risk, formatting)

    It holds no per-request state; concurrent calls are independent.
    """

    def __init__(
        self,
        config: Config,
        usgs_client: USGSClient | None = None,
        volcano_client: VolcanoClient | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize orchestrator with configuration.

        Args:
            config: Application configuration
            usgs_client: USGS client (created if not provided)
            volcano_client: Volcano client (created if not provided)
            clock: Returns the current UTC time
        """
        self.config = config
        self.usgs_client = usgs_client or USGSClient(
            base_url=config.earthquake_api_url,
            timeout=config.request_timeout_seconds,
        )
        self.volcano_client = volcano_client or VolcanoClient(
            url=config.volcano_api_url,
            timeout=config.request_timeout_seconds,
        )
        self.clock = clock

    async def overview(self) -> dict[str, Any]:
        """Free overview of the largest earthquakes of the past 24 hours."""
        now = self.clock()
        geojson = await self.usgs_client.fetch_earthquakes(overview_query(now))
        feed = parse_feed(geojson)

        logger.info("Overview: %d significant earthquakes in 24h", feed.count)
        return format_overview(feed, priced_operations(self.config.prices), now)

    async def lookup(self, request: LookupRequest) -> dict[str, Any]:
        """Full details of one earthquake."""
        request.validate()
        now = self.clock()

        feature = await self.usgs_client.fetch_event(request.event_id.strip())
        earthquake = parse_earthquake(feature)

        logger.info("Lookup %s: M%.1f %s", earthquake.id, earthquake.magnitude, earthquake.place)
        return format_lookup(earthquake, now)

    async def search(self, request: SearchRequest) -> dict[str, Any]:
        """Recent earthquakes by location, magnitude and time range."""
        request.validate()
        now = self.clock()

        geojson = await self.usgs_client.fetch_earthquakes(search_query(request, now))
        feed = parse_feed(geojson)

        logger.info("Search: %d earthquakes found", feed.count)
        return format_search(feed, request, now)

    async def top(self, request: TopRequest) -> dict[str, Any]:
        """Largest earthquakes of a day, week or month."""
        request.validate()
        now = self.clock()

        query = top_query(request, now)
        geojson = await self.usgs_client.fetch_earthquakes(query)
        feed = parse_feed(geojson)

        logger.info("Top (%s): %d earthquakes", request.period, feed.count)
        return format_top(feed, request, query.start_time, now)

    async def volcano_search(self, request: VolcanoSearchRequest) -> dict[str, Any]:
        """Volcanoes by country and/or name, optionally within a radius.

        The volcano source cannot filter, so the full list is fetched and
        filtered here.
        """
        request.validate()
        now = self.clock()

        volcanoes = parse_volcanoes(await self.volcano_client.fetch_volcanoes())
        matches = search_volcanoes(volcanoes, country=request.country, name=request.name)

        if request.latitude is not None and request.longitude is not None:
            center = GeoPoint(request.latitude, request.longitude)
            ranked = rank_by_distance(matches, center, request.radius_km)
            logger.info("Volcano search: %d matches within %.0f km", len(ranked), request.radius_km)
            return format_volcano_search(ranked, request, now)

        logger.info("Volcano search: %d matches", len(matches))
        return format_volcano_search(matches, request, now)

    async def report(self, request: ReportRequest) -> dict[str, Any]:
        """Combined earthquake and volcano hazard report for a location.

        Both upstream fetches run concurrently. If either fails, the other
        is cancelled and the whole report fails; there is no partial report.
        """
        request.validate()
        now = self.clock()
        center = GeoPoint(request.latitude, request.longitude)

        earthquakes_task = asyncio.ensure_future(
            self.usgs_client.fetch_earthquakes(report_query(request, now))
        )
        volcanoes_task = asyncio.ensure_future(self.volcano_client.fetch_volcanoes())

        try:
            geojson, raw_volcanoes = await asyncio.gather(earthquakes_task, volcanoes_task)
        except Exception:
            for task in (earthquakes_task, volcanoes_task):
                task.cancel()
            raise

        assessment = assess_hazards(
            center,
            request.radius_km,
            parse_feed(geojson),
            parse_volcanoes(raw_volcanoes),
        )

        logger.info(
            "Report (%.3f, %.3f, %.0f km): risk %s, %d significant earthquakes, %d volcanoes",
            center.latitude,
            center.longitude,
            request.radius_km,
            assessment.risk_level.value,
            assessment.significant_earthquakes,
            len(assessment.nearby_volcanoes),
        )
        return format_report(assessment, now)
