"""Shared HTTP plumbing for book clients."""
import logging
from typing import Any, Dict, Optional

import httpx

from zana import __version__
from zana.errors import HttpError, RateLimitExceeded, TransportFailure

logger = logging.getLogger(__name__)

USER_AGENT = f"zana/{__version__} (gzip)"
RATE_LIMIT_STATUSES = (403, 429)


def create_http_client(
    timeout: float = 30.0,
    connect_timeout: float = 30.0,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> httpx.AsyncClient:
    """
    Create the pooled async HTTP client used by a provider.

    Args:
        timeout: Total request timeout in seconds
        connect_timeout: Connection timeout in seconds
        transport: Optional transport replacing the network one

    Returns:
        Configured httpx.AsyncClient that follows redirects
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout, connect=connect_timeout),
        headers={"User-Agent": USER_AGENT},
        # Open Library answers ISBN lookups with a redirect to the edition
        follow_redirects=True,
        transport=transport,
    )


def classify_response(response: httpx.Response) -> httpx.Response:
    """
    Raise the matching ClientError for a non-success response.

    Args:
        response: Response received from the upstream service

    Returns:
        The same response when its status is in [200, 300)
    """
    status_code = response.status_code
    if status_code in RATE_LIMIT_STATUSES:
        logger.warning(f"Rate limited ({status_code}): {response.request.url}")
        raise RateLimitExceeded(status_code)
    if status_code < 200 or status_code >= 300:
        logger.warning(f"Unexpected status ({status_code}): {response.request.url}")
        raise HttpError(status_code, response.text)
    return response


def decode_json(response: httpx.Response) -> Dict[str, Any]:
    """Decode a JSON object body, treating anything else as a transport failure."""
    try:
        payload = response.json()
    except ValueError as e:
        raise TransportFailure(f"could not decode response from {response.request.url}") from e

    if not isinstance(payload, dict):
        raise TransportFailure(f"unexpected response body from {response.request.url}")
    return payload


async def send_get(
    http_client: httpx.AsyncClient,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> httpx.Response:
    """
    Send a single GET request, mapping httpx transport errors to TransportFailure.

    Args:
        http_client: Client owning the connection pool
        url: Absolute request URL
        params: Optional query parameters
        headers: Optional extra headers

    Returns:
        Unclassified response
    """
    logger.debug(f"GET {url}")
    try:
        return await http_client.get(url, params=params, headers=headers)
    except httpx.TimeoutException as e:
        logger.warning(f"Timeout requesting {url}")
        raise TransportFailure(f"request to {url} timed out") from e
    except httpx.RequestError as e:
        logger.warning(f"Request to {url} failed: {e}")
        raise TransportFailure(f"request to {url} failed") from e
