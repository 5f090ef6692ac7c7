# Load .env vars from file before everything else
from dotenv import load_dotenv

load_dotenv()

from .logger import setup_logging  # noqa: E402

setup_logging()

from .core.exceptions import (  # noqa: E402
    ArchiveError,
    CacheFilesystemError,
    CredentialsError,
    RemoteFailureError,
    RemoteTimeoutError,
    SliceDeleteError,
    SliceError,
    SliceFetchError,
    TransportError,
)
from .core.models import Credentials, Slice  # noqa: E402
from .runtime import SliceCache, SliceReader, delete_slice, fetch_slice  # noqa: E402

__all__ = [
    "ArchiveError",
    "CacheFilesystemError",
    "Credentials",
    "CredentialsError",
    "RemoteFailureError",
    "RemoteTimeoutError",
    "Slice",
    "SliceCache",
    "SliceDeleteError",
    "SliceError",
    "SliceFetchError",
    "SliceReader",
    "TransportError",
    "delete_slice",
    "fetch_slice",
]
