"""Broken symlink discovery under directory trees."""

import time
from pathlib import Path
from typing import Optional

from symtrace.exceptions import DirectoryMissingError
from symtrace.logging import get_logger
from symtrace.probe import FilesystemProbe, OSProbe
from symtrace.types import PathIterator

logger = get_logger()


def _walk(root: Path) -> PathIterator:
    """Yield every entry below root without descending into linked dirs."""
    return root.rglob("*")


def find_broken_symlinks(
    root: str, probe: Optional[FilesystemProbe] = None
) -> PathIterator:
    """Yield symlinks under ``root`` whose targets do not exist, sorted.

    Raises:
        DirectoryMissingError: If root is not an existing directory
    """
    probe = probe or OSProbe()
    if not probe.is_dir(root):
        raise DirectoryMissingError(root)

    start_time = time.perf_counter()
    broken = sorted(
        path
        for path in _walk(Path(root))
        if probe.is_symlink(str(path)) and not probe.exists(str(path))
    )

    logger.info_with_fields(
        "Broken symlink scan completed",
        operation="scan_complete",
        root=root,
        broken_links=len(broken),
        scan_time=time.perf_counter() - start_time,
    )
    yield from broken
