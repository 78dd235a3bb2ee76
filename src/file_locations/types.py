"""Shared data types for file locations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "ErrorKind",
    "FileSystemStats",
    "FileType",
    "LocationError",
    "Relationship",
]


class ErrorKind(str, Enum):
    """Closed set of mutation failure kinds."""

    NAME_EMPTY = "name-empty"
    CREATE_DIRECTORY_FAILED = "create-directory-failed"
    CREATE_FILE_FAILED = "create-file-failed"
    REMOVE_FAILED = "remove-failed"
    TRASH_FAILED = "trash-failed"
    COPY_FAILED = "copy-failed"
    MOVE_FAILED = "move-failed"
    RENAME_FAILED = "rename-failed"
    LINK_FAILED = "link-failed"
    SYMBOLIC_LINK_FAILED = "symbolic-link-failed"
    REPLACE_FAILED = "replace-failed"
    SET_ATTRIBUTES_FAILED = "set-attributes-failed"
    NEEDS_PARENT = "needs-parent"
    NEEDS_DIRECTORY_TARGET = "needs-directory-target"


class LocationError(Exception):
    """Error raised when a filesystem mutation fails.

    Attributes:
        kind: Which operation failed.
        message: The OS-reported reason, if one was available.
    """

    def __init__(self, kind: ErrorKind, message: str | None = None) -> None:
        self.kind = kind
        self.message = message
        super().__init__(f"{kind.value}: {message}" if message else kind.value)


class Relationship(str, Enum):
    """How a directory relates to another item."""

    SAME = "same"
    CONTAINS = "contains"
    CONTAINED_BY = "contained-by"
    OTHER = "other"


class FileType(str, Enum):
    """Kind of filesystem node, as reported by stat."""

    REGULAR = "regular"
    DIRECTORY = "directory"
    SYMBOLIC_LINK = "symbolic-link"
    CHARACTER_SPECIAL = "character-special"
    BLOCK_SPECIAL = "block-special"
    FIFO = "fifo"
    SOCKET = "socket"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class FileSystemStats:
    """Capacity figures of a mounted filesystem.

    Attributes:
        size: Total size in bytes.
        free_size: Bytes available to unprivileged users.
        nodes: Total number of file nodes.
        free_nodes: Free file nodes.
        number: Filesystem identifier.
    """

    size: int
    free_size: int
    nodes: int
    free_nodes: int
    number: int
