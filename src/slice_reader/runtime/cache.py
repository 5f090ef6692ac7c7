from __future__ import annotations

import logging
import shutil
from pathlib import Path

from ..config import default_cache_root
from ..core.exceptions import CacheFilesystemError

logger = logging.getLogger(__name__)


class SliceCache:
    """Owns the on-disk cache tree, one directory per slice name."""

    def __init__(self, root: str | Path | None = None):
        self.root = Path(root) if root is not None else default_cache_root()

    def path_for(self, slice_name: str) -> Path:
        parts = Path(slice_name).parts
        if not parts or Path(slice_name).is_absolute() or ".." in parts:
            raise ValueError(f"Invalid slice name: {slice_name!r}")
        return self.root / slice_name

    def name_for(self, path: str | Path) -> str:
        """Slice name of a cached path; inverse of path_for."""
        root = self.root.resolve()
        try:
            relative = Path(path).resolve().relative_to(root)
        except ValueError as e:
            raise ValueError(f"{path} is not inside cache root {self.root}") from e
        if not relative.parts:
            raise ValueError(f"{path} is the cache root, not a cached slice")
        return relative.as_posix()

    def reset_and_create(self, path: str | Path) -> Path:
        """Delete path and everything under it, then recreate it empty."""
        target = Path(path)
        try:
            if target.exists():
                logger.debug(f"Removing stale cache directory: {target}")
                shutil.rmtree(target)
            logger.debug(f"Making cache directory: {target}")
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheFilesystemError(
                f"Failed to prepare cache directory {target}: {e}"
            ) from e
        return target
