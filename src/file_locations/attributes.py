"""File attributes and filesystem statistics.

Getters return None when the item cannot be stat'ed. Setters raise
LocationError with SET_ATTRIBUTES_FAILED. Ownership lookups by name use
the POSIX account databases.
"""

from __future__ import annotations

import logging
import mimetypes
import os
import stat
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable

from file_locations.directories import SystemDirectory, resolve_directory
from file_locations.types import ErrorKind, FileSystemStats, FileType, LocationError

if TYPE_CHECKING:
    from file_locations.context import LocationContext
    from file_locations.location import Location

logger = logging.getLogger(__name__)

_FILE_TYPES = (
    (stat.S_ISREG, FileType.REGULAR),
    (stat.S_ISDIR, FileType.DIRECTORY),
    (stat.S_ISLNK, FileType.SYMBOLIC_LINK),
    (stat.S_ISCHR, FileType.CHARACTER_SPECIAL),
    (stat.S_ISBLK, FileType.BLOCK_SPECIAL),
    (stat.S_ISFIFO, FileType.FIFO),
    (stat.S_ISSOCK, FileType.SOCKET),
)


def _timestamp(value: float) -> datetime:
    return datetime.fromtimestamp(value, tz=timezone.utc)


class AttributesMixin:
    """Stat-backed metadata accessors."""

    def attributes(self: Location) -> os.stat_result | None:
        """Stat result of the item, following links, or None."""
        try:
            return self.filesystem.stat(self.path)
        except OSError as e:
            logger.debug("Stat of %s failed: %s", self.path, e)
            return None

    def file_type(self: Location) -> FileType | None:
        """Kind of node at this location; a link is reported as a link."""
        try:
            st = self.filesystem.lstat(self.path)
        except OSError as e:
            logger.debug("Lstat of %s failed: %s", self.path, e)
            return None
        for check, file_type in _FILE_TYPES:
            if check(st.st_mode):
                return file_type
        return FileType.UNKNOWN

    def byte_size(self: Location) -> int | None:
        st = self.attributes()
        return st.st_size if st else None

    def creation_date(self: Location) -> datetime | None:
        """Birth time where the platform records it, else the ctime."""
        st = self.attributes()
        if st is None:
            return None
        return _timestamp(getattr(st, "st_birthtime", st.st_ctime))

    def modification_date(self: Location) -> datetime | None:
        st = self.attributes()
        return _timestamp(st.st_mtime) if st else None

    def reference_count(self: Location) -> int | None:
        st = self.attributes()
        return st.st_nlink if st else None

    def device_identifier(self: Location) -> int | None:
        st = self.attributes()
        return st.st_dev if st else None

    def system_file_number(self: Location) -> int | None:
        """Inode number of the item."""
        st = self.attributes()
        return st.st_ino if st else None

    def posix_permissions(self: Location) -> int | None:
        st = self.attributes()
        return stat.S_IMODE(st.st_mode) if st else None

    def owner_id(self: Location) -> int | None:
        st = self.attributes()
        return st.st_uid if st else None

    def group_owner_id(self: Location) -> int | None:
        st = self.attributes()
        return st.st_gid if st else None

    def owner_name(self: Location) -> str | None:
        import pwd

        uid = self.owner_id()
        if uid is None:
            return None
        try:
            return pwd.getpwuid(uid).pw_name
        except KeyError:
            return None

    def group_owner_name(self: Location) -> str | None:
        import grp

        gid = self.group_owner_id()
        if gid is None:
            return None
        try:
            return grp.getgrgid(gid).gr_name
        except KeyError:
            return None

    def _set(self: Location, action: str, apply: Callable[[], None]) -> None:
        try:
            apply()
        except OSError as e:
            logger.debug("Setting %s of %s failed: %s", action, self.path, e)
            raise LocationError(ErrorKind.SET_ATTRIBUTES_FAILED, e.strerror or str(e)) from e

    def set_modification_date(self: Location, date: datetime) -> None:
        """Set the modification time, keeping the access time."""
        def apply() -> None:
            st = self.filesystem.stat(self.path)
            self.filesystem.utime(self.path, st.st_atime, date.timestamp())

        self._set("modification date", apply)

    def set_posix_permissions(self: Location, permissions: int) -> None:
        self._set("permissions", lambda: self.filesystem.chmod(self.path, permissions))

    def set_owner_id(self: Location, uid: int) -> None:
        self._set("owner", lambda: self.filesystem.chown(self.path, uid, -1))

    def set_group_owner_id(self: Location, gid: int) -> None:
        self._set("group", lambda: self.filesystem.chown(self.path, -1, gid))

    def set_owner_name(self: Location, name: str) -> None:
        import pwd

        try:
            uid = pwd.getpwnam(name).pw_uid
        except KeyError as e:
            raise LocationError(ErrorKind.SET_ATTRIBUTES_FAILED, f"Unknown user: {name}") from e
        self.set_owner_id(uid)

    def set_group_owner_name(self: Location, name: str) -> None:
        import grp

        try:
            gid = grp.getgrnam(name).gr_gid
        except KeyError as e:
            raise LocationError(ErrorKind.SET_ATTRIBUTES_FAILED, f"Unknown group: {name}") from e
        self.set_group_owner_id(gid)

    def mime(self: Location) -> str | None:
        """MIME type guessed from the extension."""
        if not self.extension:
            return None
        mime_type, _ = mimetypes.guess_type(f"file.{self.extension}", strict=False)
        return mime_type

    @classmethod
    def file_system_stats(cls, context: LocationContext | None = None) -> FileSystemStats | None:
        """Capacity of the filesystem holding the home directory."""
        from file_locations.context import default_context

        context = context or default_context()
        home = resolve_directory(SystemDirectory.HOME) or os.sep
        try:
            vfs = context.filesystem.statvfs(home)
        except OSError as e:
            logger.debug("Filesystem statistics for %s unavailable: %s", home, e)
            return None
        return FileSystemStats(
            size=vfs.f_blocks * vfs.f_frsize,
            free_size=vfs.f_bavail * vfs.f_frsize,
            nodes=vfs.f_files,
            free_nodes=vfs.f_ffree,
            number=vfs.f_fsid,
        )
