"""Fallible GET helpers shared by the provider adapters.

Both helpers convert every transport error, timeout, malformed URL, non-2xx
status and undecodable body into None. A 404 is the common case (probing for a file
that is not there) and is not logged.
"""

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


def build_client(timeout: float, user_agent: str) -> httpx.AsyncClient:
    """Create the AsyncClient one analysis uses for all of its calls."""
    return httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=True,
        headers={"User-Agent": user_agent},
    )


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    headers: Optional[dict[str, str]] = None,
    params: Optional[dict[str, Any]] = None,
) -> Optional[Any]:
    """GET `url` and return the decoded JSON body, or None."""
    response = await _get(client, url, headers=headers, params=params)
    if response is None:
        return None
    try:
        return response.json()
    except ValueError as exc:
        logger.warning("Invalid JSON from %s: %s", url, exc)
        return None


async def get_text(
    client: httpx.AsyncClient,
    url: str,
    *,
    headers: Optional[dict[str, str]] = None,
    params: Optional[dict[str, Any]] = None,
) -> Optional[str]:
    """GET `url` and return the body as text, or None."""
    response = await _get(client, url, headers=headers, params=params)
    if response is None:
        return None
    return response.content.decode("utf-8", errors="replace")


async def _get(
    client: httpx.AsyncClient,
    url: str,
    *,
    headers: Optional[dict[str, str]],
    params: Optional[dict[str, Any]],
) -> Optional[httpx.Response]:
    try:
        response = await client.get(url, headers=headers, params=params)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("Request to %s failed: %s", url, exc)
        return None

    if response.status_code == 404:
        return None
    if response.is_error:
        logger.warning("Request to %s returned HTTP %s", url, response.status_code)
        return None
    return response
