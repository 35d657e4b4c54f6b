"""Symlink expansion over a resolved-prefix / pending-suffix pair."""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional

from symtrace.logging import get_logger
from symtrace.models import Hop, Resolution, ResolverConfig
from symtrace.probe import FilesystemProbe, OSProbe
from symtrace.types import ROOT_MARKER, Component, Outcome
from symtrace.utils import join_components, split_path

logger = get_logger()


@dataclass
class ResolverState:
    """Mutable state for resolving a single path.

    ``prefix`` holds components already confirmed real, starting with the
    root marker. ``suffix`` holds components still to be processed.
    Joining the two with "/" always names the same file as the input with
    the expansions made so far.
    """

    prefix: Deque[Component]
    suffix: Deque[Component]
    hops: List[Hop] = field(default_factory=list)
    outcome: Optional[Outcome] = None

    @classmethod
    def from_path(cls, path: str) -> "ResolverState":
        if not path.startswith("/"):
            raise ValueError(f"expected an absolute path, got {path!r}")
        components = split_path(path)
        return cls(prefix=deque(components[:1]), suffix=deque(components[1:]))

    @property
    def done(self) -> bool:
        return self.outcome is not None or not self.suffix

    def location(self, *extra: Component) -> str:
        return join_components([*self.prefix, *extra])

    def tentative(self) -> str:
        return join_components([*self.prefix, *self.suffix])


class SymlinkResolver:
    """Expands every symlink on a path, one component at a time."""

    def __init__(
        self,
        config: Optional[ResolverConfig] = None,
        probe: Optional[FilesystemProbe] = None,
    ) -> None:
        self.config = config or ResolverConfig()
        self.probe: FilesystemProbe = probe or OSProbe()

    def resolve(self, path: str, name: Optional[str] = None) -> Resolution:
        """Resolve an absolute path.

        Args:
            path: Absolute path to resolve
            name: Name as the user supplied it, defaults to path

        Returns:
            The outcome, the display path and every hop followed
        """
        state = ResolverState.from_path(path)
        while not state.done:
            self.step(state)
        return self.finish(state, name or path)

    def step(self, state: ResolverState) -> None:
        """Consume the front suffix component."""
        component = state.suffix.popleft()

        if component in (ROOT_MARKER, "."):
            return

        if component == "..":
            if len(state.prefix) > 1:
                state.prefix.pop()
            return

        source = state.location(component)
        if not self.probe.is_symlink(source):
            state.prefix.append(component)
            return

        if len(state.hops) >= self.config.max_hops:
            state.prefix.append(component)
            state.prefix.extend(state.suffix)
            state.suffix.clear()
            state.outcome = Outcome.CYCLIC
            logger.debug_with_fields(
                "Hop limit reached",
                operation="resolve",
                source=source,
                max_hops=self.config.max_hops,
            )
            return

        target = self.probe.readlink(source)
        target_components = split_path(target)
        if target.startswith("/"):
            state.prefix.clear()
            state.prefix.append(ROOT_MARKER)
            target_components = target_components[1:]
        state.suffix.extendleft(reversed(target_components))

        hop = Hop(source=source, target=target, candidate=state.tentative())
        state.hops.append(hop)

        if self.probe.exists(hop.candidate):
            hop.found = True
        elif self.probe.is_loop(hop.candidate):
            hop.looping = True
        else:
            state.prefix.extend(state.suffix)
            state.suffix.clear()
            state.outcome = Outcome.BROKEN

        logger.debug_with_fields(
            "Followed symlink",
            operation="hop",
            source=source,
            target=target,
            candidate=hop.candidate,
            found=hop.found,
            looping=hop.looping,
        )

    def finish(self, state: ResolverState, name: str) -> Resolution:
        """Turn a finished state into a Resolution."""
        path = state.location()
        outcome = state.outcome
        if outcome is None:
            outcome = Outcome.RESOLVED if self.probe.exists(path) else Outcome.BROKEN

        if outcome is Outcome.RESOLVED:
            # ELOOP here came from the kernel link limit, not a cycle
            for hop in state.hops:
                if hop.looping:
                    hop.found = True
                    hop.looping = False

        logger.info_with_fields(
            "Resolution finished",
            operation="resolve",
            name=name,
            path=path,
            outcome=outcome.name,
            hops=len(state.hops),
        )
        return Resolution(
            name=name,
            outcome=outcome,
            path=path,
            hops=state.hops,
            components=list(state.prefix),
        )


def resolve_path(path: str, max_hops: Optional[int] = None) -> Resolution:
    """Helper function to resolve a path with basic settings."""
    if max_hops is not None:
        config = ResolverConfig(max_hops=max_hops)
    else:
        config = ResolverConfig()
    return SymlinkResolver(config).resolve(path)
