"""Custom exceptions for slice_reader.

Component-level errors (invocation, download, extraction) are chained into
slice-level errors that always name the slice and the operation.
"""

from typing import Optional


class SliceError(Exception):
    """Base exception for slice fetch and delete failures."""

    def __init__(
        self,
        message: str,
        slice_name: Optional[str] = None,
        operation: Optional[str] = None,
    ):
        super().__init__(message)
        self.slice_name = slice_name
        self.operation = operation


class SliceFetchError(SliceError):
    """Raised when a slice could not be fetched into the cache."""

    def __init__(self, message: str, slice_name: Optional[str] = None):
        super().__init__(message, slice_name=slice_name, operation="fetch")


class RemoteTimeoutError(SliceFetchError):
    """Raised when the download url activation did not complete in time."""

    pass


class RemoteFailureError(SliceFetchError):
    """Raised when the activation failed or carried no usable payload."""

    pass


class TransportError(SliceFetchError):
    """Raised when downloading the slice archive failed."""

    pass


class ArchiveError(SliceFetchError):
    """Raised when the downloaded archive could not be extracted."""

    pass


class CacheFilesystemError(SliceFetchError):
    """Raised when the cache directory could not be reset or written."""

    pass


class SliceDeleteError(SliceError):
    """Raised when the remote deletion could not be submitted."""

    def __init__(self, message: str, slice_name: Optional[str] = None):
        super().__init__(message, slice_name=slice_name, operation="delete")


class InvocationError(Exception):
    """Raised when an action invocation or activation lookup fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DownloadError(Exception):
    """Raised when a download stream fails or returns a non-success status."""

    pass


class DownloadTooLargeError(DownloadError):
    """Raised when a download exceeds its configured maximum size."""

    def __init__(self, max_bytes: int):
        super().__init__(f"download exceeds maximum size of {max_bytes} bytes")
        self.max_bytes = max_bytes


class UnsafeArchiveEntryError(ValueError):
    """Raised when an archive entry would be written outside its destination."""

    pass


class CredentialsError(Exception):
    """Raised when OpenWhisk credentials are missing from the environment.

    Names the environment variables that must be set so the message is
    actionable on its own.
    """

    def __init__(self, missing: Optional[list] = None):
        missing = missing or []
        message = (
            "OpenWhisk credentials are required but not set. "
            f"Missing environment variables: {', '.join(missing) or 'unknown'}"
        )
        super().__init__(message)
        self.missing = missing
