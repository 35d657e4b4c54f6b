"""Terminal rendering of resolutions using rich."""

from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from symtrace.exceptions import (
    DirectoryMissingError,
    format_error_message,
)
from symtrace.listing import list_ancestors
from symtrace.logging import StructuredLogger, get_logger
from symtrace.models import CLIConfig, DirectoryEntry, Hop, Resolution
from symtrace.probe import FilesystemProbe, OSProbe
from symtrace.types import Outcome
from symtrace.utils import display_path

ARROW = " --> "


class Reporter:
    """Prints resolutions in the mode selected on the command line."""

    def __init__(
        self,
        console: Console,
        config: CLIConfig,
        err_console: Optional[Console] = None,
        probe: Optional[FilesystemProbe] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self.console = console
        self.err_console = err_console or console
        self.config = config
        self.probe = probe or OSProbe()
        self.logger = logger or get_logger()
        self._reports = 0

    def _style(self, style: str) -> str:
        return "" if self.config.script else style

    def format_hop(self, hop: Hop) -> Text:
        """Render a hop as ``source --> target``, marking failures."""
        text = Text(display_path(hop.source), style=self._style("cyan"))
        text.append(ARROW, style=self._style("bold yellow"))
        if hop.found:
            text.append(display_path(hop.target), style=self._style("green"))
        else:
            text.append(display_path(hop.target), style=self._style("bold red"))
            text.append(" (loop)" if hop.looping else " (broken)")
        return text

    def format_path(self, resolution: Resolution) -> Text:
        style = "bold green" if resolution.outcome is Outcome.RESOLVED else "red"
        return Text(display_path(resolution.path), style=self._style(style))

    def report(self, resolution: Resolution) -> bool:
        """Print one resolution.

        Returns:
            True if the path failed to resolve or its listing failed
        """
        if self._reports and not self.config.script:
            self.console.print()
        self._reports += 1

        self.logger.info_with_fields(
            "Reporting resolution",
            operation="report",
            name=resolution.name,
            outcome=resolution.outcome.name,
            hops=len(resolution.hops),
        )

        if resolution.outcome is Outcome.NOT_FOUND:
            self.show_error(resolution.error())
            return True

        for hop in resolution.hops:
            if self.config.show_links or hop.broken:
                self.console.print(self.format_hop(hop), soft_wrap=True)

        self.console.print(self.format_path(resolution), soft_wrap=True)
        failed = resolution.failed

        if self.config.list_dirs:
            failed = self.show_listing(resolution) or failed

        if resolution.failed:
            self.show_error(resolution.error())
        return failed

    def show_listing(self, resolution: Resolution) -> bool:
        """Print the ancestor listing, returning True if an ancestor is missing."""
        try:
            entries = list_ancestors(resolution.components, self.probe)
        except DirectoryMissingError as e:
            self.render_listing(e.entries)
            self.show_error(e)
            return True
        self.render_listing(entries)
        return False

    def render_listing(self, entries: List[DirectoryEntry]) -> None:
        if not entries:
            return

        if self.config.script:
            for entry in entries:
                self.console.print(Text(display_path(str(entry))), soft_wrap=True)
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Mode", style="green")
        table.add_column("Owner", style="yellow")
        table.add_column("Group", style="yellow")
        table.add_column("Size", justify="right")
        table.add_column("Path", style="cyan", overflow="fold")
        for entry in entries:
            table.add_row(
                entry.mode,
                entry.owner,
                entry.group,
                f"{entry.size:,}",
                Text(display_path(entry.path)),
            )
        self.console.print(table)

    def show_error(self, error: Optional[Exception]) -> None:
        if error is None:
            return
        self.logger.debug_with_fields(
            "Resolution failed",
            operation="report",
            error_type=type(error).__name__,
            error_message=str(error),
        )
        self.err_console.print(format_error_message(error), soft_wrap=True)
