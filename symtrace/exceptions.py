import logging
from typing import TYPE_CHECKING, List, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from symtrace.utils import display_path

if TYPE_CHECKING:
    from symtrace.models import DirectoryEntry, Hop

logger = logging.getLogger(__name__)


class SymtraceError(Exception):
    """Base exception class for symtrace."""

    pass


class PathNotFoundError(SymtraceError):
    """Raised when a name matches no absolute, PATH or relative entry."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"{path}: No such file or directory")


class BrokenSymlinkError(SymtraceError):
    """Raised when a link in the chain points at a missing target."""

    def __init__(self, source: str, target: str, path: str):
        self.source = source
        self.target = target
        self.path = path
        super().__init__(f"{source}: broken symlink to {target}")


class BrokenPathError(SymtraceError):
    """Raised when the expanded path names nothing, with no missing link target."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"{path}: resolved path does not exist")


class CyclicSymlinkError(SymtraceError):
    """Raised when a chain keeps going past the hop limit."""

    def __init__(self, path: str, hops: Sequence["Hop"]):
        self.path = path
        self.hops = list(hops)
        super().__init__(
            f"{path}: too many levels of symbolic links ({len(self.hops)} hops)"
        )


class DirectoryMissingError(SymtraceError):
    """Raised when a directory on the path cannot be found."""

    def __init__(self, path: str, entries: Sequence["DirectoryEntry"] = ()):
        self.path = path
        self.entries: List["DirectoryEntry"] = list(entries)
        super().__init__(f"{path}: directory missing")


class InvalidFlagError(SymtraceError):
    """Raised for unrecognized options or bad option values."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def handle_error(console: Console, error: Exception) -> int:
    """Handle errors with user-friendly messages."""
    panel = Panel(
        format_error_message(error),
        title="Error",
        border_style="red",
        padding=(1, 2),
    )
    console.print(panel)

    if isinstance(error, SymtraceError):
        logger.error("Operation failed: %s", error)
    else:
        logger.exception("Unexpected error")
    return 1


def _shown(path: str) -> str:
    return escape(display_path(path))


def format_error_message(error: Exception) -> str:
    """Format error message for display."""
    if isinstance(error, PathNotFoundError):
        return f"[red]{_shown(error.path)}: No such file or directory[/red]"
    elif isinstance(error, BrokenSymlinkError):
        return (
            f"[red]Broken symlink[/red] {_shown(error.source)} --> "
            f"[bold red]{_shown(error.target)}[/bold red]"
        )
    elif isinstance(error, BrokenPathError):
        return f"[red]Broken path[/red]: [bold]{_shown(error.path)}[/bold]"
    elif isinstance(error, CyclicSymlinkError):
        return (
            f"[red]Too many levels of symbolic links[/red] "
            f"after {len(error.hops)} hops: {_shown(error.path)}"
        )
    elif isinstance(error, DirectoryMissingError):
        return f"[red]Directory missing[/red]: [bold]{_shown(error.path)}[/bold]"
    elif isinstance(error, InvalidFlagError):
        return f"[red]Invalid option[/red]: {_shown(error.message)}"
    return f"[red]Error: {_shown(str(error))}[/red]"
