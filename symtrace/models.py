"""Models for configuration and resolution results."""

from argparse import Namespace
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from symtrace.exceptions import (
    BrokenPathError,
    BrokenSymlinkError,
    CyclicSymlinkError,
    PathNotFoundError,
    SymtraceError,
)
from symtrace.types import MAX_HOPS, Components, Outcome


@dataclass(frozen=True)
class ResolverConfig:
    """Configuration for symlink resolution."""

    max_hops: int = MAX_HOPS

    def __post_init__(self) -> None:
        """Validate numeric constraints."""
        if self.max_hops <= 0:
            raise ValueError("max_hops must be positive")


@dataclass
class Hop:
    """One symlink followed during resolution."""

    source: str  # where the link lives
    target: str  # raw link text
    candidate: str  # tentative path after substituting the target
    found: bool = False
    looping: bool = False

    @property
    def broken(self) -> bool:
        return not self.found and not self.looping

    def __str__(self) -> str:
        return f"{self.source} --> {self.target}"


@dataclass
class Resolution:
    """Result of resolving one supplied name."""

    name: str
    outcome: Outcome
    path: str
    hops: List[Hop] = field(default_factory=list)
    components: Components = field(default_factory=list)

    @classmethod
    def not_found(cls, name: str) -> "Resolution":
        return cls(name=name, outcome=Outcome.NOT_FOUND, path=name)

    @property
    def failed(self) -> bool:
        return self.outcome is not Outcome.RESOLVED

    @property
    def failed_hop(self) -> Optional[Hop]:
        """The hop where resolution stopped, if a target was missing."""
        for hop in self.hops:
            if hop.broken:
                return hop
        return None

    def error(self) -> Optional[SymtraceError]:
        """Convert a failed outcome into the matching exception."""
        if self.outcome is Outcome.RESOLVED:
            return None
        if self.outcome is Outcome.CYCLIC:
            return CyclicSymlinkError(self.path, self.hops)
        if self.outcome is Outcome.NOT_FOUND:
            return PathNotFoundError(self.path)
        hop = self.failed_hop
        if hop is None:
            return BrokenPathError(self.path)
        return BrokenSymlinkError(hop.source, hop.target, self.path)


@dataclass
class DirectoryEntry:
    """Metadata for one ancestor in a permission listing."""

    path: str
    mode: str
    owner: str
    group: str
    size: int

    def __str__(self) -> str:
        return f"{self.mode} {self.owner} {self.group} {self.size} {self.path}"


@dataclass(frozen=True)
class CLIConfig:
    """Configuration for CLI operation."""

    paths: Tuple[str, ...]
    color: bool = True
    list_dirs: bool = False
    show_links: bool = False
    recursive: bool = False
    script: bool = False
    verbose: bool = False
    log_file: Optional[Path] = None
    max_hops: int = MAX_HOPS

    @classmethod
    def from_args(cls, args: Namespace) -> "CLIConfig":
        """Create a CLIConfig from parsed command line arguments."""
        return cls(
            paths=tuple(args.paths),
            color=not args.no_color,
            list_dirs=args.list_dirs,
            show_links=args.show_links,
            recursive=args.recursive,
            script=args.script,
            verbose=args.verbose,
            log_file=args.log_file,
            max_hops=args.max_hops,
        )

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.max_hops <= 0:
            raise ValueError("max_hops must be positive")

    @property
    def resolver_config(self) -> ResolverConfig:
        """Create ResolverConfig from settings."""
        return ResolverConfig(max_hops=self.max_hops)
