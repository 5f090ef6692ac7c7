from __future__ import annotations

import io
import logging
import os
import stat
import zipfile
from pathlib import Path
from typing import List

from ..core.exceptions import UnsafeArchiveEntryError

logger = logging.getLogger(__name__)


def _entry_mode(info: zipfile.ZipInfo) -> int:
    """Unix permission bits stored in the high 16 bits of external_attr."""
    return stat.S_IMODE(info.external_attr >> 16)


def _safe_target(destination: Path, entry_name: str) -> Path:
    destination_resolved = destination.resolve()
    target = (destination / entry_name).resolve()
    if not str(target).startswith(str(destination_resolved) + os.sep):
        raise UnsafeArchiveEntryError(f"unsafe archive entry path: {entry_name}")
    return target


def extract(buffer: bytes, destination: str | Path) -> List[Path]:
    """Unpack a zip buffer into destination, preserving permission bits.

    Directory entries are skipped; parents are created from file paths.
    Every entry is checked against the destination before anything is written.

    Raises:
        zipfile.BadZipFile: If the buffer is not a zip archive.
        UnsafeArchiveEntryError: If an entry escapes destination.
    """
    destination_path = Path(destination)
    written: List[Path] = []

    with zipfile.ZipFile(io.BytesIO(buffer)) as zf:
        entries = [info for info in zf.infolist() if not info.is_dir()]
        logger.debug(f"zip file has {len(zf.infolist())} entries")

        targets = [
            (info, _safe_target(destination_path, info.filename)) for info in entries
        ]

        for info, target in targets:
            target.parent.mkdir(parents=True, exist_ok=True)
            logger.debug(f"storing {info.filename}")
            target.write_bytes(zf.read(info))

            mode = _entry_mode(info)
            if mode:
                os.chmod(target, mode)
            written.append(target)

    return written
