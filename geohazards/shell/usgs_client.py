"""USGS API Client - Imperative Shell.

This module handles HTTP communication with the USGS Earthquake API.
All I/O is contained here; query construction and parsing are in the
core module.
"""

import logging
from typing import Any

import httpx

from geohazards.core.config import DEFAULT_EARTHQUAKE_API_URL, DEFAULT_TIMEOUT_SECONDS
from geohazards.core.earthquake import EARTHQUAKE_SOURCE
from geohazards.core.errors import EventNotFound, UpstreamUnavailable
from geohazards.core.query import EarthquakeQuery, build_lookup_params, build_query_params
from geohazards.shell.http import get_json


logger = logging.getLogger(__name__)


class USGSClient:
    """Client for fetching earthquake data from USGS API.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_EARTHQUAKE_API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize USGS client.

        Args:
            base_url: USGS API base URL
            timeout: Request timeout in seconds
            http_client: Shared client (a short-lived one per call if None)
        """
        self.base_url = base_url
        self.timeout = timeout
        self.http_client = http_client

    async def fetch_earthquakes(self, query: EarthquakeQuery) -> dict[str, Any]:
        """Fetch earthquake data from USGS API.

        This method performs HTTP I/O.

        Args:
            query: Query parameters

        Returns:
            Raw GeoJSON response from USGS

        Raises:
            UpstreamUnavailable: If the request fails
            UpstreamMalformed: If the body is not JSON
        """
        params = build_query_params(query)

        logger.info(
            "Fetching earthquakes from USGS",
            extra={"params": params},
        )

        data = await get_json(
            self.base_url,
            params,
            source=EARTHQUAKE_SOURCE,
            timeout=self.timeout,
            client=self.http_client,
        )

        if isinstance(data, dict):
            count = (data.get("metadata") or {}).get("count", 0)
            logger.info("Fetched %s earthquakes from USGS", count)

        return data

    async def fetch_event(self, event_id: str) -> dict[str, Any]:
        """Fetch a single earthquake by its USGS event ID.

        This method performs HTTP I/O.

        Args:
            event_id: USGS event ID

        Returns:
            Raw GeoJSON Feature from USGS

        Raises:
            EventNotFound: If USGS has no such event
            UpstreamUnavailable: If the request fails
        """
        logger.info("Fetching earthquake %s from USGS", event_id)

        try:
            return await get_json(
                self.base_url,
                build_lookup_params(event_id),
                source=EARTHQUAKE_SOURCE,
                timeout=self.timeout,
                client=self.http_client,
            )
        except UpstreamUnavailable as e:
            if e.status_code == 404:
                raise EventNotFound(event_id) from e
            raise
