"""Fetching of project slices into the local cache, and their deletion.

A slice is a project built remotely by the builder actions. Fetching asks the
builder for a presigned download url, downloads the zipped slice and extracts
it into ``<cache root>/<slice name>``. Deletion asks the builder to remove the
stored build assets; the local cache is left alone.
"""

import asyncio
import logging
import zipfile
from pathlib import Path
from typing import Optional

from ..config import (
    DEFAULT_ACTIVATION_TIMEOUT,
    DEFAULT_POLL_INTERVAL,
    DELETE_BUILD_ASSETS_ACTION,
    GET_DOWNLOAD_URL_ACTION,
    MAX_SLICE_UPLOAD_SIZE,
)
from ..core.api.openwhisk import OpenWhiskClient
from ..core.credentials import get_credentials_from_environment
from ..core.exceptions import (
    ArchiveError,
    CacheFilesystemError,
    DownloadError,
    InvocationError,
    RemoteFailureError,
    RemoteTimeoutError,
    SliceDeleteError,
    TransportError,
    UnsafeArchiveEntryError,
)
from ..core.models import Credentials, Slice
from .archive import extract
from .cache import SliceCache
from .download import download

log = logging.getLogger(__name__)


class SliceReader:
    """Fetches slices from the builder into a SliceCache and deletes them.

    Credentials are read from the environment on first use unless given.
    Every call opens its own OpenWhisk session; no state is shared between
    calls besides the cache directory.
    """

    def __init__(
        self,
        credentials: Optional[Credentials] = None,
        cache: Optional[SliceCache] = None,
        max_download_size: int = MAX_SLICE_UPLOAD_SIZE,
        activation_timeout: float = DEFAULT_ACTIVATION_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        self._credentials = credentials
        self.cache = cache or SliceCache()
        self.max_download_size = max_download_size
        self.activation_timeout = activation_timeout
        self.poll_interval = poll_interval

    @property
    def credentials(self) -> Credentials:
        if self._credentials is None:
            self._credentials = get_credentials_from_environment()
        return self._credentials

    def _openwhisk(self) -> OpenWhiskClient:
        return OpenWhiskClient(self.credentials, poll_interval=self.poll_interval)

    async def _resolve_download_url(self, slice_name: str) -> str:
        async with self._openwhisk() as client:
            try:
                activation = await client.invoke_and_wait(
                    GET_DOWNLOAD_URL_ACTION,
                    {"name": slice_name},
                    timeout=self.activation_timeout,
                    on_progress=lambda: log.debug("fetching build assets ..."),
                )
            except InvocationError as e:
                raise RemoteFailureError(
                    f"Failed to fetch assets url for '{slice_name}'", slice_name
                ) from e

        if activation is None:
            raise RemoteTimeoutError(
                f"Timed out fetching assets url for '{slice_name}'", slice_name
            )

        download_url = activation.result_field("url")
        if (
            not activation.succeeded
            or not isinstance(download_url, str)
            or not download_url
        ):
            raise RemoteFailureError(
                f"Failed to fetch assets url for '{slice_name}'", slice_name
            )
        return download_url

    async def fetch_slice(self, slice_name: str) -> Path:
        """
        Fetch a slice into the cache and return its local directory.

        Any previously cached copy of the slice is removed first.

        Raises:
            SliceFetchError: One of its subclasses, naming the slice.
        """
        cache_path = self.cache.path_for(slice_name)
        log.info(f"Slice:{slice_name} | Fetching")

        download_url = await self._resolve_download_url(slice_name)

        try:
            data = await download(download_url, self.max_download_size)
        except DownloadError as e:
            raise TransportError(
                f"Failed to download assets for '{slice_name}': {e}", slice_name
            ) from e

        try:
            await asyncio.to_thread(self.cache.reset_and_create, cache_path)
        except CacheFilesystemError as e:
            raise CacheFilesystemError(f"{e} (slice '{slice_name}')", slice_name) from e

        try:
            written = await asyncio.to_thread(extract, data, cache_path)
        except (
            zipfile.BadZipFile,
            zipfile.LargeZipFile,
            NotImplementedError,
            UnsafeArchiveEntryError,
        ) as e:
            raise ArchiveError(
                f"Failed to extract assets for '{slice_name}': {e}", slice_name
            ) from e
        except OSError as e:
            raise CacheFilesystemError(
                f"Failed to write assets for '{slice_name}': {e}", slice_name
            ) from e

        log.info(f"Slice:{slice_name} | Stored {len(written)} files in {cache_path}")
        return cache_path

    async def delete_slice(self, cached_slice: Slice) -> None:
        """
        Ask the builder to delete the stored build assets of a cached slice.

        Deletion is best effort: a timeout or failed activation is logged and
        otherwise ignored, since the builder reconciles orphaned assets.

        Raises:
            SliceDeleteError: If the deletion could not be submitted.
        """
        if cached_slice.local_path is None:
            raise ValueError(f"{cached_slice} has no local path")

        slice_name = self.cache.name_for(cached_slice.local_path)

        async with self._openwhisk() as client:
            try:
                activation_id = await client.invoke(
                    DELETE_BUILD_ASSETS_ACTION, {"name": slice_name}
                )
            except InvocationError as e:
                raise SliceDeleteError(
                    f"Failed to delete build assets for '{slice_name}': {e}",
                    slice_name,
                ) from e

            try:
                activation = await client.wait_for_activation(
                    activation_id,
                    on_progress=lambda: log.debug("removing build assets ..."),
                    timeout=self.activation_timeout,
                )
            except InvocationError as e:
                log.warning(f"Slice:{slice_name} | Deletion status unknown: {e}")
                return

        if activation is None:
            log.warning(f"Slice:{slice_name} | Timed out deleting build assets")
        elif not activation.succeeded:
            log.warning(f"Slice:{slice_name} | Builder failed to delete build assets")
        else:
            log.info(f"Slice:{slice_name} | Build assets deleted")


async def fetch_slice(slice_name: str) -> Path:
    """Fetch a slice using credentials from the environment."""
    return await SliceReader().fetch_slice(slice_name)


async def delete_slice(cached_slice: Slice) -> None:
    """Delete a slice's build assets using credentials from the environment."""
    await SliceReader().delete_slice(cached_slice)
