"""Configuration constants for slice retrieval."""

import os
import platform
from pathlib import Path


def _int_from_env(name: str, default: int) -> int:
    try:
        value = int(os.environ.get(name, ""))
    except ValueError:
        return default
    return value or default


# Maximum supported zipped size of a slice, in bytes
DEFAULT_MAX_SLICE_UPLOAD_SIZE = 64 * 1024 * 1024
MAX_SLICE_UPLOAD_SIZE = _int_from_env(
    "MAX_SLICE_UPLOAD_SIZE", DEFAULT_MAX_SLICE_UPLOAD_SIZE
)

# Builder actions
BUILDER_NAMESPACE = os.environ.get("SLICE_BUILDER_NAMESPACE", "nimbella")
GET_DOWNLOAD_URL_ACTION = f"/{BUILDER_NAMESPACE}/builder/getDownloadUrl"
DELETE_BUILD_ASSETS_ACTION = f"/{BUILDER_NAMESPACE}/builder/deleteBuildAssets"

# Activation polling
DEFAULT_ACTIVATION_TIMEOUT = 60  # seconds
DEFAULT_POLL_INTERVAL = 1.0  # seconds

# HTTP client configuration
DEFAULT_REQUEST_TIMEOUT = 30.0  # seconds

CACHE_SUBFOLDER = "slices"


def platform_temp_dir() -> Path:
    """Temp directory convention: %TEMP% on Windows, /tmp elsewhere."""
    if platform.system() == "Windows":
        return Path(os.environ.get("TEMP", "."))
    return Path("/tmp")


def default_cache_root() -> Path:
    override = os.environ.get("SLICE_CACHE_ROOT")
    if override:
        return Path(override).expanduser()
    return platform_temp_dir() / CACHE_SUBFOLDER
