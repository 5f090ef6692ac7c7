"""HTTP utilities for OpenWhisk and download requests."""

from typing import Optional

import httpx

from ...config import DEFAULT_REQUEST_TIMEOUT
from ..models import Credentials


def get_openwhisk_httpx_client(
    credentials: Credentials,
    timeout: Optional[float] = None,
) -> httpx.AsyncClient:
    """Create httpx AsyncClient authenticated against an OpenWhisk API host.

    The api key has the form ``user:password`` and is sent as HTTP basic auth.
    An apihost without a scheme is assumed to be https.

    Args:
        credentials: OpenWhisk credentials.
        timeout: Request timeout in seconds. Defaults to 30.0.

    Returns:
        Configured httpx.AsyncClient with base_url and auth set

    Example:
        async with get_openwhisk_httpx_client(credentials) as client:
            response = await client.get("/api/v1/namespaces/_/activations")
    """
    user, _, password = credentials.api_key.partition(":")
    timeout_config = timeout if timeout is not None else DEFAULT_REQUEST_TIMEOUT
    return httpx.AsyncClient(
        base_url=normalize_apihost(credentials.apihost),
        auth=httpx.BasicAuth(user, password),
        timeout=timeout_config,
    )


def get_download_httpx_client(timeout: Optional[float] = None) -> httpx.AsyncClient:
    """Create an unauthenticated httpx AsyncClient for artifact downloads.

    Download urls are presigned, so no headers are added.
    """
    timeout_config = timeout if timeout is not None else DEFAULT_REQUEST_TIMEOUT
    return httpx.AsyncClient(timeout=timeout_config, follow_redirects=True)


def normalize_apihost(apihost: str) -> str:
    apihost = apihost.rstrip("/")
    if "://" not in apihost:
        apihost = f"https://{apihost}"
    return apihost
