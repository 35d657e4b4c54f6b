"""Type definitions for symtrace."""

from enum import Enum, auto
from pathlib import Path
from typing import Iterator, List, TypeAlias

# Common type aliases
Component: TypeAlias = str
Components: TypeAlias = List[Component]
PathIterator: TypeAlias = Iterator[Path]

ROOT_MARKER: Component = ""
MAX_HOPS = 40  # matches the usual OS limit for nested links


class Outcome(Enum):
    """How resolution of a single path ended."""

    RESOLVED = auto()  # every link expanded, final path exists
    BROKEN = auto()  # a link target or the final path is missing
    NOT_FOUND = auto()  # the supplied name matched nothing
    CYCLIC = auto()  # hop limit reached
