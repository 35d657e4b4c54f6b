"""Filesystem probing used by the resolver, lister and scanner."""

import errno
import os
from typing import Protocol


class FilesystemProbe(Protocol):
    """The filesystem queries symtrace needs, so tests can swap in a fake."""

    def exists(self, path: str) -> bool:
        """True if path exists, following symlinks."""
        ...

    def lexists(self, path: str) -> bool:
        """True if path exists, without following a trailing symlink."""
        ...

    def is_symlink(self, path: str) -> bool:
        ...

    def readlink(self, path: str) -> str:
        ...

    def is_loop(self, path: str) -> bool:
        """True if following path runs into a symlink loop."""
        ...

    def is_dir(self, path: str) -> bool:
        ...

    def is_executable(self, path: str) -> bool:
        """True if path is a regular file the current user may execute."""
        ...

    def lstat(self, path: str) -> os.stat_result:
        ...


class OSProbe:
    """FilesystemProbe backed by the running OS."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def lexists(self, path: str) -> bool:
        return os.path.lexists(path)

    def is_symlink(self, path: str) -> bool:
        return os.path.islink(path)

    def readlink(self, path: str) -> str:
        return os.readlink(path)

    def is_loop(self, path: str) -> bool:
        try:
            os.stat(path)
        except OSError as e:
            return e.errno == errno.ELOOP
        return False

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def is_executable(self, path: str) -> bool:
        return os.path.isfile(path) and os.access(path, os.X_OK)

    def lstat(self, path: str) -> os.stat_result:
        return os.lstat(path)
