"""Shared HTTP helper - Imperative Shell.

Performs a single JSON GET against an upstream source and maps every
failure onto the core error types. No retries.
"""

import logging
from typing import Any

import httpx

from geohazards.core.errors import UpstreamMalformed, UpstreamUnavailable


logger = logging.getLogger(__name__)


async def _get(
    client: httpx.AsyncClient,
    url: str,
    params: dict[str, str] | None,
    source: str,
    timeout: float,
) -> Any:
    try:
        response = await client.get(url, params=params, timeout=timeout)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.warning("%s returned HTTP %d", source, status)
        raise UpstreamUnavailable(source, f"API error: {status}", status_code=status) from e
    except httpx.HTTPError as e:
        logger.warning("%s request failed: %s", source, e)
        raise UpstreamUnavailable(source, f"Request failed: {e}") from e

    try:
        return response.json()
    except ValueError as e:
        raise UpstreamMalformed(source, "Response body is not valid JSON") from e


async def get_json(
    url: str,
    params: dict[str, str] | None,
    source: str,
    timeout: float,
    client: httpx.AsyncClient | None = None,
) -> Any:
    """GET a URL and decode its JSON body.

    This function performs HTTP I/O.

    Args:
        url: Request URL
        params: URL query parameters
        source: Upstream name used in errors and logs
        timeout: Request timeout in seconds
        client: Client to use; a short-lived one is opened if None

    Returns:
        Decoded JSON body

    Raises:
        UpstreamUnavailable: On transport errors, timeouts and non-2xx statuses
        UpstreamMalformed: If the body is not JSON
    """
    if client is not None:
        return await _get(client, url, params, source, timeout)

    async with httpx.AsyncClient(timeout=timeout) as short_lived:
        return await _get(short_lived, url, params, source, timeout)
