from typing import Iterable

from .types import Components


def split_path(path: str) -> Components:
    """Split a path string into its "/"-separated components.

    An absolute path yields a leading empty component, which stands for the
    filesystem root. Empty, "." and ".." components are kept as-is.
    """
    return path.split("/")


def join_components(components: Iterable[str]) -> str:
    """Join components back into a path string ("/" for the bare root)."""
    return "/".join(components) or "/"


def ancestors(components: Components) -> Components:
    """Return every leading sub-path of an absolute component list, root first."""
    return [join_components(components[:i]) for i in range(1, len(components) + 1)]


def display_path(path: str) -> str:
    """Make a path printable on a UTF-8 stream.

    Bytes that are not valid UTF-8 come back from the OS as lone surrogates.
    They are shown as backslash escapes, e.g. ``x\\xff``.
    """
    return path.encode("utf-8", "surrogateescape").decode("utf-8", "backslashreplace")
