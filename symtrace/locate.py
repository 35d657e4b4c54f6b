"""Turn a name as typed by the user into an absolute path."""

import os
from typing import Iterator, Mapping, Optional

from symtrace.logging import get_logger
from symtrace.probe import FilesystemProbe, OSProbe

logger = get_logger()


def _search_path(
    name: str, probe: FilesystemProbe, environ: Mapping[str, str], cwd: str
) -> Iterator[str]:
    """Yield executables called ``name`` along $PATH, in order."""
    for directory in environ.get("PATH", "").split(":"):
        # An empty entry means the current directory
        if not directory:
            directory = cwd
        elif not directory.startswith("/"):
            directory = f"{cwd.rstrip('/')}/{directory}"
        candidate = f"{directory.rstrip('/')}/{name}"
        if probe.is_executable(candidate):
            yield candidate


def locate(
    name: str,
    probe: Optional[FilesystemProbe] = None,
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[str] = None,
) -> Optional[str]:
    """Find the absolute path a supplied name refers to.

    Rules are tried in order and the first existing match wins:

    1. ``name`` itself when it starts with "/".
    2. An executable called ``name`` on $PATH (only for names without "/").
    3. ``name`` relative to the current working directory.

    The returned path is not normalized; "." and ".." are left for the
    resolver. Returns None when no rule matches.
    """
    probe = probe or OSProbe()
    environ = os.environ if environ is None else environ
    cwd = os.getcwd() if cwd is None else cwd

    if name.startswith("/"):
        return name if probe.lexists(name) else None

    if name and "/" not in name:
        for candidate in _search_path(name, probe, environ, cwd):
            logger.debug_with_fields(
                "Found executable on PATH", operation="locate", name=name, path=candidate
            )
            return candidate

    candidate = f"{cwd.rstrip('/')}/{name}"
    if name and probe.lexists(candidate):
        return candidate
    return None
