"""Permission listing for every directory leading to a resolved path."""

import grp
import pwd
import stat
from typing import List, Optional

from symtrace.exceptions import DirectoryMissingError
from symtrace.logging import get_logger
from symtrace.models import DirectoryEntry
from symtrace.probe import FilesystemProbe, OSProbe
from symtrace.types import Components
from symtrace.utils import ancestors

logger = get_logger()


def _owner_name(uid: int) -> str:
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return str(uid)


def _group_name(gid: int) -> str:
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return str(gid)


def describe(path: str, probe: Optional[FilesystemProbe] = None) -> DirectoryEntry:
    """Build a DirectoryEntry from lstat metadata.

    Raises:
        OSError: If path cannot be stat'ed
    """
    probe = probe or OSProbe()
    st = probe.lstat(path)
    return DirectoryEntry(
        path=path,
        mode=stat.filemode(st.st_mode),
        owner=_owner_name(st.st_uid),
        group=_group_name(st.st_gid),
        size=st.st_size,
    )


def list_ancestors(
    components: Components, probe: Optional[FilesystemProbe] = None
) -> List[DirectoryEntry]:
    """Describe root and every leading sub-path of ``components``, in order.

    Raises:
        DirectoryMissingError: At the first ancestor that no longer exists,
            carrying the entries gathered before it
    """
    probe = probe or OSProbe()
    entries: List[DirectoryEntry] = []
    for path in ancestors(components):
        try:
            entries.append(describe(path, probe))
        except (FileNotFoundError, NotADirectoryError) as e:
            logger.debug_with_fields(
                "Ancestor missing", operation="list", path=path, listed=len(entries)
            )
            raise DirectoryMissingError(path, entries) from e
    return entries
