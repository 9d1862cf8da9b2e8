"""USGS Volcano API Client - Imperative Shell.

The volcano service has no server-side filtering, so this client only
ever fetches the full list. Filtering happens in core.volcano.
"""

import logging
from typing import Any

import httpx

from geohazards.core.config import DEFAULT_TIMEOUT_SECONDS, DEFAULT_VOLCANO_API_URL
from geohazards.core.volcano import VOLCANO_SOURCE
from geohazards.shell.http import get_json


logger = logging.getLogger(__name__)


class VolcanoClient:
    """Client for fetching the USGS volcano list."""

    def __init__(
        self,
        url: str = DEFAULT_VOLCANO_API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.http_client = http_client

    async def fetch_volcanoes(self) -> list[dict[str, Any]]:
        """Fetch every volcano record.

        This method performs HTTP I/O.

        Returns:
            Raw list of volcano records

        Raises:
            UpstreamUnavailable: If the request fails
            UpstreamMalformed: If the body is not JSON
        """
        logger.info("Fetching volcano list from USGS")

        data = await get_json(
            self.url,
            None,
            source=VOLCANO_SOURCE,
            timeout=self.timeout,
            client=self.http_client,
        )

        if isinstance(data, list):
            logger.info("Fetched %d volcanoes from USGS", len(data))

        return data
