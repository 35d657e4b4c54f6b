"""Common test fixtures."""

import os
import stat
from collections import deque
from pathlib import Path
from typing import Callable, Dict, Generator, Optional, Set, Tuple

import pytest
from rich.console import Console

from symtrace.logging import get_logger
from symtrace.models import CLIConfig
from symtrace.reporter import Reporter


class FakeProbe:
    """In-memory FilesystemProbe.

    ``dirs`` and ``files`` hold real entries, ``links`` maps a link path to
    its raw target text. Every path is absolute.
    """

    def __init__(self) -> None:
        self.dirs: Set[str] = {"/"}
        self.files: Set[str] = set()
        self.executables: Set[str] = set()
        self.links: Dict[str, str] = {}

    def _add_parents(self, path: str) -> None:
        parent = path.rsplit("/", 1)[0]
        while parent:
            self.dirs.add(parent)
            parent = parent.rsplit("/", 1)[0]

    def add_dir(self, path: str) -> "FakeProbe":
        self._add_parents(path)
        self.dirs.add(path)
        return self

    def add_file(self, path: str, executable: bool = False) -> "FakeProbe":
        self._add_parents(path)
        self.files.add(path)
        if executable:
            self.executables.add(path)
        return self

    def add_link(self, path: str, target: str) -> "FakeProbe":
        self._add_parents(path)
        self.links[path] = target
        return self

    def _follow(self, path: str) -> Tuple[Optional[str], bool]:
        """Return (real path or None, hit a loop)."""
        parts = deque(path.split("/")[1:])
        current: list[str] = []
        hops = 0
        while parts:
            name = parts.popleft()
            if name in ("", "."):
                continue
            if name == "..":
                if current:
                    current.pop()
                continue
            candidate = "/" + "/".join([*current, name])
            if candidate in self.links:
                hops += 1
                if hops > 40:
                    return None, True
                target = self.links[candidate]
                if target.startswith("/"):
                    current = []
                parts.extendleft(reversed(target.split("/")))
                continue
            if candidate not in self.dirs and candidate not in self.files:
                return None, False
            current.append(name)
        return "/" + "/".join(current), False

    def exists(self, path: str) -> bool:
        return self._follow(path)[0] is not None

    def lexists(self, path: str) -> bool:
        return self.is_symlink(path) or self.exists(path)

    def is_symlink(self, path: str) -> bool:
        return path in self.links

    def readlink(self, path: str) -> str:
        if path not in self.links:
            raise OSError(22, "Invalid argument", path)
        return self.links[path]

    def is_loop(self, path: str) -> bool:
        return self._follow(path)[1]

    def is_dir(self, path: str) -> bool:
        return self._follow(path)[0] in self.dirs

    def is_executable(self, path: str) -> bool:
        return self._follow(path)[0] in self.executables

    def lstat(self, path: str) -> os.stat_result:
        if path in self.links:
            mode = stat.S_IFLNK | 0o777
        elif path in self.dirs:
            mode = stat.S_IFDIR | 0o755
        elif path in self.files:
            mode = stat.S_IFREG | (0o755 if path in self.executables else 0o644)
        else:
            raise FileNotFoundError(2, "No such file or directory", path)
        return os.stat_result((mode, 0, 0, 1, 0, 0, 4096, 0, 0, 0))


@pytest.fixture
def fake_probe() -> FakeProbe:
    """Create an empty in-memory filesystem."""
    return FakeProbe()


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    """Return tmp_path with any symlinks in its own location expanded."""
    return tmp_path.resolve()


@pytest.fixture
def test_console() -> Console:
    """Create a test console with consistent settings."""
    return Console(force_terminal=True, no_color=True, width=200)


@pytest.fixture
def make_reporter(test_console: Console) -> Callable[..., Reporter]:
    """Factory fixture building a Reporter around the test console."""

    def _create(probe: Optional[FakeProbe] = None, **flags: bool) -> Reporter:
        config = CLIConfig(paths=("unused",), **flags)
        return Reporter(test_console, config, probe=probe)

    return _create


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Drop handlers main() attached so they don't outlive captured streams."""
    yield
    logger = get_logger()
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
