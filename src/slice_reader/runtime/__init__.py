"""Slice retrieval runtime: cache, download, extraction and orchestration."""

from .archive import extract
from .cache import SliceCache
from .download import download
from .slices import SliceReader, delete_slice, fetch_slice

__all__ = [
    "SliceCache",
    "SliceReader",
    "delete_slice",
    "download",
    "extract",
    "fetch_slice",
]
