from rich.console import Console
from rich.text import Text

from symtrace.exceptions import (
    BrokenPathError,
    BrokenSymlinkError,
    CyclicSymlinkError,
    DirectoryMissingError,
    InvalidFlagError,
    PathNotFoundError,
    SymtraceError,
    format_error_message,
    handle_error,
)


def _plain(markup: str) -> str:
    return Text.from_markup(markup).plain


def test_all_errors_share_base_class() -> None:
    for error in (
        PathNotFoundError("/a"),
        BrokenSymlinkError("/a", "b", "/b"),
        BrokenPathError("/a"),
        CyclicSymlinkError("/a", []),
        DirectoryMissingError("/a"),
        InvalidFlagError("bad"),
    ):
        assert isinstance(error, SymtraceError)


def test_error_strings() -> None:
    assert str(PathNotFoundError("x")) == "x: No such file or directory"
    assert str(BrokenSymlinkError("/tmp/x", "y", "/tmp/y")) == (
        "/tmp/x: broken symlink to y"
    )
    assert str(DirectoryMissingError("/gone")) == "/gone: directory missing"


def test_format_broken_symlink() -> None:
    message = format_error_message(BrokenSymlinkError("/tmp/x", "y", "/tmp/y"))
    assert _plain(message) == "Broken symlink /tmp/x --> y"


def test_format_escapes_markup_in_paths() -> None:
    message = format_error_message(PathNotFoundError("/tmp/[bold]odd"))
    assert _plain(message) == "/tmp/[bold]odd: No such file or directory"


def test_format_cyclic() -> None:
    message = format_error_message(CyclicSymlinkError("/t/a", []))
    assert "after 0 hops: /t/a" in _plain(message)


def test_format_broken_path() -> None:
    message = format_error_message(BrokenPathError("/srv/gone"))
    assert _plain(message) == "Broken path: /srv/gone"


def test_format_escapes_undecodable_bytes() -> None:
    error = BrokenSymlinkError("/t/x\udcff", "y\udcfe", "/t/y\udcfe")
    message = format_error_message(error)
    assert _plain(message) == "Broken symlink /t/x\\xff --> y\\xfe"


def test_format_directory_missing() -> None:
    message = format_error_message(DirectoryMissingError("/srv/gone"))
    assert _plain(message) == "Directory missing: /srv/gone"


def test_format_invalid_flag() -> None:
    message = format_error_message(InvalidFlagError("unrecognized arguments: -q"))
    assert _plain(message) == "Invalid option: unrecognized arguments: -q"


def test_format_unknown_error() -> None:
    assert _plain(format_error_message(RuntimeError("boom"))) == "Error: boom"


def test_handle_error_prints_panel() -> None:
    console = Console(force_terminal=True, no_color=True, width=100)
    with console.capture() as capture:
        code = handle_error(console, DirectoryMissingError("/srv/gone"))

    output = Text.from_ansi(capture.get()).plain
    assert code == 1
    assert "Error" in output
    assert "/srv/gone" in output


def test_handle_unexpected_error() -> None:
    console = Console(force_terminal=True, no_color=True, width=100)
    with console.capture() as capture:
        code = handle_error(console, ValueError("weird"))

    assert code == 1
    assert "weird" in Text.from_ansi(capture.get()).plain
