"""Streaming download of slice archives into memory."""

import io
import logging
from typing import Optional

import httpx

from ..config import MAX_SLICE_UPLOAD_SIZE
from ..core.exceptions import DownloadError, DownloadTooLargeError
from ..core.utils.http import get_download_httpx_client

logger = logging.getLogger(__name__)


async def download(
    url: str,
    max_bytes: int = MAX_SLICE_UPLOAD_SIZE,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> bytes:
    """Stream the body of a GET request into memory.

    Args:
        url: Download url, usually presigned by the builder.
        max_bytes: Supported maximum body size. Larger bodies fail instead of
            being truncated.
        client: Optional client to reuse; a fresh one is created otherwise.

    Returns:
        The complete response body.

    Raises:
        DownloadTooLargeError: If the body exceeds max_bytes.
        DownloadError: On transport failure or non-2xx status.
    """
    owns_client = client is None
    if client is None:
        client = get_download_httpx_client()

    sink = io.BytesIO()
    try:
        async with client.stream("GET", url) as response:
            if not response.is_success:
                raise DownloadError(
                    f"Download failed with status {response.status_code}"
                )

            declared = response.headers.get("content-length")
            if declared and declared.isdigit() and int(declared) > max_bytes:
                raise DownloadTooLargeError(max_bytes)

            async for chunk in response.aiter_bytes():
                if sink.tell() + len(chunk) > max_bytes:
                    raise DownloadTooLargeError(max_bytes)
                sink.write(chunk)
    except httpx.HTTPError as e:
        raise DownloadError(f"Download failed: {e}") from e
    finally:
        if owns_client:
            await client.aclose()

    logger.debug(f"Downloaded {sink.tell()} bytes")
    return sink.getvalue()
